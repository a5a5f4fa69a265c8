"""Checking attendees in at the door."""

import typing as t
from datetime import datetime
from uuid import UUID

import structlog
from django.utils import timezone

from accounts.models import OfrendaUser
from events.exceptions import (
    CheckInUnauthorizedError,
    MalformedTokenError,
    TicketNotFoundError,
    TokenEventMismatchError,
)
from events.models import Attendee

from . import access, ticket_tokens
from .access import EventAction
from .event_service import get_event

logger = structlog.get_logger(__name__)


class CheckInResult(t.NamedTuple):
    attendee: Attendee
    already_checked_in: bool
    checked_in_at: datetime


def check_in(event_id: UUID, raw_token: str, actor: OfrendaUser) -> CheckInResult:
    """Check in the attendee holding ``raw_token``.

    Scanning the same ticket twice is not an error: the second scan reports
    ``already_checked_in`` with the time of the first one.

    The token's shape is validated before anything is read from the database.
    A token that names another event is rejected before the lookup, so a
    ticket for a different event is never reported as missing.
    """
    reference = ticket_tokens.parse(raw_token)
    if reference is None:
        raise MalformedTokenError()

    event = get_event(event_id)
    access.ensure_can(actor, event, EventAction.CHECK_IN_ATTENDEES, error=CheckInUnauthorizedError)

    if reference.event_id != event.id.hex:
        raise TokenEventMismatchError()

    attendee = Attendee.objects.with_user().filter(ticket_token=raw_token).first()
    if attendee is None or attendee.event_id != event.id:
        raise TicketNotFoundError()

    if attendee.checked_in:
        assert attendee.checked_in_at is not None
        return CheckInResult(attendee=attendee, already_checked_in=True, checked_in_at=attendee.checked_in_at)

    now = timezone.now()
    # Conditional update: of two concurrent scans exactly one flips the flag.
    updated = Attendee.objects.filter(pk=attendee.pk, checked_in=False).update(
        checked_in=True, checked_in_at=now, checked_in_by=actor, updated_at=now
    )
    attendee.refresh_from_db(fields=["checked_in", "checked_in_at", "checked_in_by", "updated_at"])
    assert attendee.checked_in_at is not None

    if updated:
        logger.info("attendee_checked_in", attendee_id=str(attendee.pk), event_id=str(event.pk), actor_id=str(actor.pk))
    return CheckInResult(attendee=attendee, already_checked_in=not updated, checked_in_at=attendee.checked_in_at)
