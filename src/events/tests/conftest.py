import threading
import typing as t
from datetime import datetime

import pytest
from django.db import connection

from accounts.models import OfrendaUser
from conftest import OfrendaUserFactory
from events.models import Attendee, Collaborator, Event, UserGroup, UserGroupMember
from events.service import ticket_tokens


@pytest.fixture
def leader(ofrenda_user_factory: OfrendaUserFactory) -> OfrendaUser:
    return ofrenda_user_factory(email="leader@example.com", role=OfrendaUser.Role.COMMUNITY_LEADER)


@pytest.fixture
def collaborator_user(ofrenda_user_factory: OfrendaUserFactory) -> OfrendaUser:
    return ofrenda_user_factory(email="helper@example.com")


@pytest.fixture
def outsider(ofrenda_user_factory: OfrendaUserFactory) -> OfrendaUser:
    return ofrenda_user_factory(email="outsider@example.com")


@pytest.fixture
def user_group(leader: OfrendaUser) -> UserGroup:
    return UserGroup.objects.create(name="PyMadrid", city="Madrid", leader=leader)


@pytest.fixture
def event(user_group: UserGroup, next_week: datetime) -> Event:
    return Event.objects.create(
        user_group=user_group,
        title="Python Meetup",
        description="Talks and pizza.",
        date=next_week,
        location="Calle Mayor 1, Madrid",
        capacity=100,
        status=Event.Status.PUBLISHED,
    )


@pytest.fixture
def draft_event(user_group: UserGroup, next_week: datetime) -> Event:
    return Event.objects.create(
        user_group=user_group,
        title="Draft Meetup",
        description="Not announced yet.",
        date=next_week,
        location="Calle Mayor 1, Madrid",
        capacity=10,
    )


@pytest.fixture
def collaborator(event: Event, collaborator_user: OfrendaUser) -> Collaborator:
    return Collaborator.objects.create(event=event, user=collaborator_user, role=Collaborator.Role.VOLUNTEER)


@pytest.fixture
def member_user(ofrenda_user_factory: OfrendaUserFactory) -> OfrendaUser:
    return ofrenda_user_factory(email="member@example.com")


@pytest.fixture
def member(user_group: UserGroup, member_user: OfrendaUser) -> UserGroupMember:
    return UserGroupMember.objects.create(user_group=user_group, user=member_user)


class AttendeeFactory(t.Protocol):
    def __call__(self, event: Event, user: OfrendaUser | None = None) -> Attendee: ...


@pytest.fixture
def attendee_factory(ofrenda_user_factory: OfrendaUserFactory) -> AttendeeFactory:
    """Create registrations directly, bypassing the email."""

    def _create(event: Event, user: OfrendaUser | None = None) -> Attendee:
        user = user or ofrenda_user_factory()
        attendee = Attendee.objects.create(event=event, user=user, ticket_token=f"pending:{user.pk.hex}")
        attendee.ticket_token = ticket_tokens.issue(attendee.pk, event.pk)
        attendee.save()
        return attendee

    return _create


@pytest.fixture
def attendee(event: Event, attendee_factory: AttendeeFactory) -> Attendee:
    return attendee_factory(event)


def run_concurrently(*calls: t.Callable[[], t.Any]) -> list[t.Any]:
    """Start every call at the same moment, each in its own thread and DB connection.

    Returns each call's result, or the exception it raised, in call order.
    Needs ``django_db(transaction=True)`` so the threads see committed fixtures.
    """
    barrier = threading.Barrier(len(calls))
    results: list[t.Any] = [None] * len(calls)

    def _worker(index: int, call: t.Callable[[], t.Any]) -> None:
        try:
            barrier.wait()
            results[index] = call()
        except Exception as e:
            results[index] = e
        finally:
            connection.close()

    threads = [threading.Thread(target=_worker, args=(i, call)) for i, call in enumerate(calls)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)
    return results
