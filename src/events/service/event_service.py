"""User group and event lifecycle management."""

from uuid import UUID

import structlog
from django.db import transaction

from accounts.models import OfrendaUser
from events.exceptions import (
    AlreadyLeadsUserGroupError,
    AlreadyMemberError,
    CapacityBelowRegistrationsError,
    EventNotFoundError,
    InvalidStatusTransitionError,
)
from events.models import Attendee, Event, UserGroup, UserGroupMember
from events.schema import EventCreateSchema, EventEditSchema, UserGroupCreateSchema

from . import update_db_instance

logger = structlog.get_logger(__name__)


def get_event(event_id: UUID) -> Event:
    """Load an event with its user group and leader, or raise EventNotFoundError."""
    try:
        return Event.objects.with_user_group().get(pk=event_id)
    except Event.DoesNotExist:
        raise EventNotFoundError() from None


@transaction.atomic
def create_user_group(leader: OfrendaUser, payload: UserGroupCreateSchema) -> UserGroup:
    """Create a user group and make its creator a community leader.

    A user leads at most one group, and members of a group cannot start one.
    """
    if UserGroup.objects.filter(leader=leader).exists():
        raise AlreadyLeadsUserGroupError()
    if UserGroupMember.objects.filter(user=leader).exists():
        raise AlreadyMemberError("Members of a user group cannot start another one.")
    user_group = UserGroup.objects.create(leader=leader, **payload.model_dump())
    if leader.role != OfrendaUser.Role.COMMUNITY_LEADER:
        leader.role = OfrendaUser.Role.COMMUNITY_LEADER
        leader.save(update_fields=["role"])
    logger.info("user_group_created", user_group_id=str(user_group.pk), leader_id=str(leader.pk))
    return user_group


def create_event(user_group: UserGroup, payload: EventCreateSchema) -> Event:
    """New events always start as drafts."""
    event = Event.objects.create(user_group=user_group, status=Event.Status.DRAFT, **payload.model_dump())
    logger.info("event_created", event_id=str(event.pk), user_group_id=str(user_group.pk))
    return event


@transaction.atomic
def update_event(event: Event, payload: EventEditSchema) -> Event:
    """Apply a partial edit.

    Lowering the capacity is only allowed down to the number of people
    already registered. The event row is locked before counting, the same
    lock registration takes, so no registration lands between the two.
    """
    event = Event.objects.select_for_update().get(pk=event.pk)
    if payload.capacity is not None:
        registered = Attendee.objects.for_event(event.pk).count()
        if payload.capacity < registered:
            raise CapacityBelowRegistrationsError()
    return update_db_instance(event, payload)


@transaction.atomic
def change_status(event: Event, status: Event.Status) -> Event:
    """Move the event along its lifecycle."""
    event = Event.objects.select_for_update().get(pk=event.pk)
    if event.status == status:
        return event
    if not event.can_transition_to(status):
        raise InvalidStatusTransitionError(f"Cannot change an event from {event.status} to {status}.")
    previous = event.status
    event.status = status
    event.save(update_fields=["status", "updated_at"])
    logger.info("event_status_changed", event_id=str(event.pk), previous=previous, status=status)
    return event


def delete_event(event: Event) -> None:
    """Delete the event together with its registrations and collaborators."""
    event_id = str(event.pk)
    event.delete()
    logger.info("event_deleted", event_id=event_id)
