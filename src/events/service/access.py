"""Who may do what on an event.

Permissions are a flat table from action to the relations allowed to perform
it. The actor's relation to the event is resolved once per operation and then
looked up in the table, so every entry point answers the same way.
"""

import enum

from django.contrib.auth.models import AnonymousUser

from accounts.models import OfrendaUser
from events.exceptions import OfrendaError, PermissionDeniedError
from events.models import Collaborator, Event


class EventRelation(enum.StrEnum):
    LEADER = "leader"
    COLLABORATOR = "collaborator"
    NONE = "none"


class EventAction(enum.StrEnum):
    CHECK_IN_ATTENDEES = "check_in_attendees"
    VIEW_STATS = "view_stats"
    VIEW_ATTENDEES = "view_attendees"
    MANAGE_EVENT = "manage_event"
    MANAGE_COLLABORATORS = "manage_collaborators"


ACCESS_POLICY: dict[EventAction, frozenset[EventRelation]] = {
    EventAction.CHECK_IN_ATTENDEES: frozenset({EventRelation.LEADER, EventRelation.COLLABORATOR}),
    EventAction.VIEW_STATS: frozenset({EventRelation.LEADER, EventRelation.COLLABORATOR}),
    EventAction.VIEW_ATTENDEES: frozenset({EventRelation.LEADER}),
    EventAction.MANAGE_EVENT: frozenset({EventRelation.LEADER}),
    EventAction.MANAGE_COLLABORATORS: frozenset({EventRelation.LEADER}),
}


def relation_to(actor: OfrendaUser | AnonymousUser | None, event: Event) -> EventRelation:
    """Resolve how the actor relates to the event."""
    if actor is None or actor.is_anonymous:
        return EventRelation.NONE
    if event.user_group.leader_id == actor.pk:
        return EventRelation.LEADER
    if Collaborator.objects.filter(event=event, user_id=actor.pk).exists():
        return EventRelation.COLLABORATOR
    return EventRelation.NONE


def is_allowed(relation: EventRelation, action: EventAction | str) -> bool:
    """Evaluate the policy table for an already resolved relation."""
    return relation in ACCESS_POLICY[EventAction(action)]


def can(actor: OfrendaUser | AnonymousUser | None, event: Event, action: EventAction | str) -> bool:
    """Whether the actor may perform the action on the event."""
    return is_allowed(relation_to(actor, event), action)


def ensure_can(
    actor: OfrendaUser | AnonymousUser | None,
    event: Event,
    action: EventAction | str,
    error: type[OfrendaError] = PermissionDeniedError,
) -> None:
    """Raise ``error`` unless the actor may perform the action on the event."""
    if not can(actor, event, action):
        raise error()
