from datetime import datetime, timedelta

import pytest
from django.utils import timezone

from accounts.models import OfrendaUser
from conftest import OfrendaUserFactory
from events.exceptions import (
    AlreadyMemberError,
    LeaderCannotBeMemberError,
    NotAMemberError,
    UserNotFoundError,
)
from events.models import Event, UserGroup, UserGroupMember
from events.schema import UserGroupCreateSchema
from events.service import event_service, user_group_service
from events.tests.conftest import AttendeeFactory

pytestmark = pytest.mark.django_db


class TestMembership:
    def test_add_member(self, user_group: UserGroup, outsider: OfrendaUser) -> None:
        member = user_group_service.add_member(user_group, email="OUTSIDER@example.com")

        assert member.user == outsider
        assert list(user_group_service.list_members(user_group)) == [member]
        assert user_group_service.is_leader_or_member(outsider, user_group)

    def test_add_unknown_user(self, user_group: UserGroup) -> None:
        with pytest.raises(UserNotFoundError):
            user_group_service.add_member(user_group, email="nobody@example.com")

    def test_user_joins_one_group_only(
        self,
        user_group: UserGroup,
        member: UserGroupMember,
        member_user: OfrendaUser,
        ofrenda_user_factory: OfrendaUserFactory,
    ) -> None:
        other_group = UserGroup.objects.create(name="PyBCN", city="Barcelona", leader=ofrenda_user_factory())

        with pytest.raises(AlreadyMemberError):
            user_group_service.add_member(other_group, email=member_user.email)
        with pytest.raises(AlreadyMemberError):
            user_group_service.add_member(user_group, email=member_user.email)

    def test_leader_cannot_be_member(self, user_group: UserGroup, leader: OfrendaUser) -> None:
        with pytest.raises(LeaderCannotBeMemberError):
            user_group_service.add_member(user_group, email=leader.email)

        assert not UserGroupMember.objects.exists()

    def test_remove_member(self, user_group: UserGroup, member: UserGroupMember, member_user: OfrendaUser) -> None:
        user_group_service.remove_member(user_group, member_user.pk)

        assert not user_group_service.list_members(user_group).exists()
        assert not user_group_service.is_leader_or_member(member_user, user_group)

    def test_remove_non_member(self, user_group: UserGroup, outsider: OfrendaUser) -> None:
        with pytest.raises(NotAMemberError):
            user_group_service.remove_member(user_group, outsider.pk)

    def test_member_of_another_group_is_not_removed(
        self, member: UserGroupMember, member_user: OfrendaUser, ofrenda_user_factory: OfrendaUserFactory
    ) -> None:
        other_group = UserGroup.objects.create(name="PyBCN", city="Barcelona", leader=ofrenda_user_factory())

        with pytest.raises(NotAMemberError):
            user_group_service.remove_member(other_group, member_user.pk)

        assert UserGroupMember.objects.filter(pk=member.pk).exists()

    def test_member_cannot_start_a_group(self, member: UserGroupMember, member_user: OfrendaUser) -> None:
        with pytest.raises(AlreadyMemberError):
            event_service.create_user_group(member_user, UserGroupCreateSchema(name="PyToledo", city="Toledo"))

        assert not UserGroup.objects.filter(leader=member_user).exists()


def test_leader_is_leader_or_member(user_group: UserGroup, leader: OfrendaUser, outsider: OfrendaUser) -> None:
    assert user_group_service.is_leader_or_member(leader, user_group)
    assert not user_group_service.is_leader_or_member(outsider, user_group)


class TestStats:
    def test_empty_group(self, user_group: UserGroup) -> None:
        stats = user_group_service.get_stats(user_group)

        assert stats == user_group_service.UserGroupStats(0, 0, 0, 0, 0, 0)
        assert list(user_group_service.recent_events(user_group)) == []

    def test_counts(
        self,
        user_group: UserGroup,
        event: Event,
        draft_event: Event,
        member: UserGroupMember,
        attendee_factory: AttendeeFactory,
    ) -> None:
        last_month = timezone.now() - timedelta(days=30)
        past = Event.objects.create(
            user_group=user_group,
            title="Old Meetup",
            description="Done.",
            date=last_month,
            location="Madrid",
            capacity=10,
            status=Event.Status.COMPLETED,
        )
        Event.objects.create(
            user_group=user_group,
            title="Published but over",
            description="Nobody marked it completed.",
            date=last_month,
            location="Madrid",
            capacity=10,
            status=Event.Status.PUBLISHED,
        )
        attendee_factory(event)
        attendee_factory(event)
        attendee_factory(past)

        stats = user_group_service.get_stats(user_group)

        assert stats.total_members == 1
        assert stats.total_events == 4
        assert stats.published_events == 2
        assert stats.upcoming_events == 1
        assert stats.completed_events == 1
        assert stats.total_attendees == 3

    def test_other_groups_are_not_counted(
        self, user_group: UserGroup, event: Event, ofrenda_user_factory: OfrendaUserFactory, next_week: datetime
    ) -> None:
        other_group = UserGroup.objects.create(name="PyBCN", city="Barcelona", leader=ofrenda_user_factory())
        Event.objects.create(
            user_group=other_group, title="BCN", description="Elsewhere.", date=next_week, location="BCN", capacity=5
        )

        assert user_group_service.get_stats(user_group).total_events == 1
        assert user_group_service.get_stats(other_group).total_events == 1

    def test_recent_events_latest_first_with_counts(
        self, user_group: UserGroup, event: Event, draft_event: Event, attendee_factory: AttendeeFactory
    ) -> None:
        draft_event.date = event.date + timedelta(days=1)
        draft_event.save()
        attendee_factory(event)

        recent = list(user_group_service.recent_events(user_group))

        assert recent == [draft_event, event]
        assert recent[1].registered_count == 1  # type: ignore[attr-defined]

    def test_recent_events_limit(self, user_group: UserGroup, next_week: datetime) -> None:
        for i in range(user_group_service.RECENT_EVENTS_LIMIT + 2):
            Event.objects.create(
                user_group=user_group,
                title=f"Meetup {i}",
                description="Talks.",
                date=next_week + timedelta(days=i),
                location="Madrid",
                capacity=10,
            )

        assert len(user_group_service.recent_events(user_group)) == user_group_service.RECENT_EVENTS_LIMIT
