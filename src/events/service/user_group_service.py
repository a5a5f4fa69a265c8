"""User group membership and group-wide statistics."""

import typing as t
from uuid import UUID

import structlog
from django.db import IntegrityError, transaction
from django.db.models import Count, Q, QuerySet
from django.utils import timezone

from accounts.models import OfrendaUser
from events.exceptions import (
    AlreadyMemberError,
    LeaderCannotBeMemberError,
    NotAMemberError,
    UserNotFoundError,
)
from events.models import Attendee, Event, UserGroup, UserGroupMember

logger = structlog.get_logger(__name__)

RECENT_EVENTS_LIMIT = 5


class UserGroupStats(t.NamedTuple):
    total_members: int
    total_events: int
    published_events: int
    upcoming_events: int
    completed_events: int
    total_attendees: int


def is_leader_or_member(user: OfrendaUser, user_group: UserGroup) -> bool:
    """Whether the user leads or belongs to the group."""
    if not user.is_authenticated:
        return False
    if user.pk == user_group.leader_id:
        return True
    return UserGroupMember.objects.filter(user_group=user_group, user_id=user.pk).exists()


def list_members(user_group: UserGroup) -> QuerySet[UserGroupMember]:
    return UserGroupMember.objects.filter(user_group=user_group).select_related("user")


def add_member(user_group: UserGroup, *, email: str) -> UserGroupMember:
    """Add an existing user to the group.

    A user belongs to at most one group, and community leaders cannot join
    one as members.
    """
    user = OfrendaUser.objects.filter(email__iexact=email).first()
    if user is None:
        raise UserNotFoundError()
    if UserGroup.objects.filter(leader=user).exists():
        raise LeaderCannotBeMemberError()
    if UserGroupMember.objects.filter(user=user).exists():
        raise AlreadyMemberError()
    try:
        with transaction.atomic():
            member = UserGroupMember.objects.create(user_group=user_group, user=user)
    except IntegrityError:
        raise AlreadyMemberError() from None
    logger.info("user_group_member_added", user_group_id=str(user_group.pk), user_id=str(user.pk))
    return member


def remove_member(user_group: UserGroup, user_id: UUID) -> None:
    deleted, _ = UserGroupMember.objects.filter(user_group=user_group, user_id=user_id).delete()
    if not deleted:
        raise NotAMemberError()
    logger.info("user_group_member_removed", user_group_id=str(user_group.pk), user_id=str(user_id))


def get_stats(user_group: UserGroup) -> UserGroupStats:
    """Member, event and attendee counters for the group dashboard."""
    published = Q(status=Event.Status.PUBLISHED)
    counts = Event.objects.filter(user_group=user_group).aggregate(
        total=Count("id"),
        published=Count("id", filter=published),
        upcoming=Count("id", filter=published & Q(date__gt=timezone.now())),
        completed=Count("id", filter=Q(status=Event.Status.COMPLETED)),
    )
    return UserGroupStats(
        total_members=UserGroupMember.objects.filter(user_group=user_group).count(),
        total_events=counts["total"],
        published_events=counts["published"],
        upcoming_events=counts["upcoming"],
        completed_events=counts["completed"],
        total_attendees=Attendee.objects.filter(event__user_group=user_group).count(),
    )


def recent_events(user_group: UserGroup, limit: int = RECENT_EVENTS_LIMIT) -> QuerySet[Event]:
    """Latest events by date, with their registration counts."""
    qs = Event.objects.with_user_group().filter(user_group=user_group).with_registered_count()
    return qs.order_by("-date")[:limit]
