"""Attendee registration.

Admission is decided inside one transaction holding a row lock on the event,
so the capacity count and the insert cannot interleave with another
registration for the same event. The (user, event) unique constraint is the
final guard against duplicates.

The confirmation email is sent after the transaction commits. If it fails the
registration is deleted again, so callers either get a registered and notified
attendee or an error.
"""

import typing as t
from uuid import UUID, uuid4

import structlog
from django.db import IntegrityError, transaction

from accounts.models import OfrendaUser
from events.exceptions import (
    AlreadyRegisteredError,
    CapacityExceededError,
    EventInPastError,
    EventNotPublishedError,
    NotificationFailedError,
)
from events.models import Attendee, Event

from . import ticket_tokens
from .calendar_links import calendar_link_for
from .event_service import get_event
from .notification_service import send_attendee_confirmation
from .ticket_visual import render_ticket_qr

logger = structlog.get_logger(__name__)


class RegistrationResult(t.NamedTuple):
    attendee: Attendee
    token: str
    calendar_link: str | None

    @property
    def attendee_id(self) -> UUID:
        return self.attendee.id


def _placeholder_token() -> str:
    # Unique, and never well-formed, so it can't be mistaken for a ticket.
    return f"pending:{uuid4().hex}"


def ensure_open_for_registration(event: Event) -> None:
    """Raise unless the event currently accepts registrations."""
    if not event.is_published:
        raise EventNotPublishedError()
    if event.is_in_past():
        raise EventInPastError()


@transaction.atomic
def _admit(event_id: UUID, *, name: str, email: str) -> Attendee:
    event = Event.objects.select_for_update().get(pk=event_id)
    # Status may have changed while waiting for the lock.
    ensure_open_for_registration(event)

    registered = Attendee.objects.for_event(event.pk).count()
    if registered >= event.capacity:
        raise CapacityExceededError()

    user, _created = OfrendaUser.objects.get_or_create_attendee(email=email, name=name)
    if Attendee.objects.filter(event=event, user=user).exists():
        raise AlreadyRegisteredError()

    attendee = Attendee.objects.create(event=event, user=user, ticket_token=_placeholder_token())
    attendee.ticket_token = ticket_tokens.issue(attendee.pk, event.pk)
    attendee.save(update_fields=["ticket_token", "updated_at"])
    return attendee


def _rollback_registration(attendee: Attendee) -> None:
    Attendee.objects.filter(pk=attendee.pk).delete()
    logger.warning("registration_rolled_back", attendee_id=str(attendee.pk), event_id=str(attendee.event_id))


def register(event_id: UUID, *, name: str, email: str, wants_calendar_link: bool = False) -> RegistrationResult:
    """Register a person for an event and send them their ticket.

    Args:
        event_id: The event to register for.
        name: The attendee's name, used when a new user has to be created.
        email: The attendee's email; identifies the user.
        wants_calendar_link: Whether to build an add-to-calendar link.

    Returns:
        The attendee, their ticket token and the optional calendar link.

    Raises:
        EventNotFoundError, EventNotPublishedError, EventInPastError,
        CapacityExceededError, AlreadyRegisteredError, NotificationFailedError.
    """
    event = get_event(event_id)
    ensure_open_for_registration(event)

    try:
        attendee = _admit(event.pk, name=name, email=email)
    except IntegrityError:
        if Attendee.objects.filter(event_id=event.pk, user__email__iexact=email).exists():
            raise AlreadyRegisteredError() from None
        raise

    calendar_link = calendar_link_for(event) if wants_calendar_link else None

    try:
        ticket = render_ticket_qr(attendee.ticket_token)
        send_attendee_confirmation(user=attendee.user, event=event, ticket=ticket, calendar_link=calendar_link)
    except Exception as e:
        logger.exception("attendee_confirmation_failed", attendee_id=str(attendee.pk), event_id=str(event.pk))
        _rollback_registration(attendee)
        raise NotificationFailedError() from e

    logger.info("attendee_registered", attendee_id=str(attendee.pk), event_id=str(event.pk))
    return RegistrationResult(attendee=attendee, token=attendee.ticket_token, calendar_link=calendar_link)
