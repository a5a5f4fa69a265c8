from datetime import datetime, timedelta
from email.mime.image import MIMEImage
from unittest.mock import patch
from uuid import uuid4

import pytest
from django.core import mail
from django.db import IntegrityError
from freezegun import freeze_time

from accounts.models import OfrendaUser
from events.exceptions import (
    AlreadyRegisteredError,
    CapacityExceededError,
    EventInPastError,
    EventNotFoundError,
    EventNotPublishedError,
    NotificationFailedError,
)
from events.models import Attendee, Event
from events.service import registration_service, ticket_tokens
from events.tests.conftest import AttendeeFactory, run_concurrently

pytestmark = pytest.mark.django_db


class TestRegisterHappyPath:
    def test_creates_attendee_with_ticket_token(self, event: Event) -> None:
        result = registration_service.register(event.id, name="Ada Lovelace", email="ada@example.com")

        attendee = Attendee.objects.get(pk=result.attendee_id)
        assert attendee.event == event
        assert attendee.user.email == "ada@example.com"
        assert attendee.ticket_token == result.token
        assert attendee.checked_in is False
        assert attendee.checked_in_at is None

    def test_token_references_attendee_and_event(self, event: Event) -> None:
        result = registration_service.register(event.id, name="Ada", email="ada@example.com")

        reference = ticket_tokens.parse(result.token)
        assert reference is not None
        assert reference.attendee_id == result.attendee_id.hex
        assert reference.event_id == event.id.hex

    def test_creates_attendee_user_when_unknown(self, event: Event) -> None:
        registration_service.register(event.id, name="Grace Hopper", email="Grace@Example.com")

        user = OfrendaUser.objects.get(email="grace@example.com")
        assert user.name == "Grace Hopper"
        assert user.role == OfrendaUser.Role.ATTENDEE
        assert not user.has_usable_password()

    def test_reuses_existing_user(self, event: Event, user: OfrendaUser) -> None:
        result = registration_service.register(event.id, name="Someone Else", email=user.email.upper())

        assert result.attendee.user == user
        user.refresh_from_db()
        assert user.name == "Regular User"
        assert OfrendaUser.objects.filter(email__iexact=user.email).count() == 1

    def test_sends_confirmation_email_with_qr(self, event: Event) -> None:
        result = registration_service.register(event.id, name="Ada", email="ada@example.com")

        assert len(mail.outbox) == 1
        message = mail.outbox[0]
        assert message.to == ["ada@example.com"]
        assert event.title in message.subject
        assert result.token in message.body
        assert any(isinstance(a, MIMEImage) for a in message.attachments)

    def test_no_calendar_link_by_default(self, event: Event) -> None:
        result = registration_service.register(event.id, name="Ada", email="ada@example.com")

        assert result.calendar_link is None

    def test_calendar_link_on_request(self, event: Event) -> None:
        result = registration_service.register(
            event.id, name="Ada", email="ada@example.com", wants_calendar_link=True
        )

        assert result.calendar_link is not None
        assert result.calendar_link.startswith("https://calendar.google.com/calendar/render?")
        assert result.calendar_link in mail.outbox[0].body


class TestRegisterRejections:
    def test_unknown_event(self) -> None:
        with pytest.raises(EventNotFoundError):
            registration_service.register(uuid4(), name="Ada", email="ada@example.com")

    @pytest.mark.parametrize("status", [Event.Status.DRAFT, Event.Status.CANCELLED, Event.Status.COMPLETED])
    def test_not_published(self, event: Event, status: Event.Status) -> None:
        Event.objects.filter(pk=event.pk).update(status=status)

        with pytest.raises(EventNotPublishedError):
            registration_service.register(event.id, name="Ada", email="ada@example.com")

        assert not Attendee.objects.exists()
        assert len(mail.outbox) == 0

    def test_event_already_started(self, event: Event) -> None:
        with freeze_time(event.date + timedelta(minutes=1)):
            with pytest.raises(EventInPastError):
                registration_service.register(event.id, name="Ada", email="ada@example.com")

    def test_event_starting_now_is_in_the_past(self, event: Event) -> None:
        with freeze_time(event.date):
            with pytest.raises(EventInPastError):
                registration_service.register(event.id, name="Ada", email="ada@example.com")

    def test_capacity_exceeded(self, event: Event, attendee_factory: AttendeeFactory) -> None:
        Event.objects.filter(pk=event.pk).update(capacity=2)
        attendee_factory(event)
        attendee_factory(event)

        with pytest.raises(CapacityExceededError):
            registration_service.register(event.id, name="Ada", email="ada@example.com")

        assert Attendee.objects.for_event(event.pk).count() == 2

    def test_last_spot_can_be_taken(self, event: Event, attendee_factory: AttendeeFactory) -> None:
        Event.objects.filter(pk=event.pk).update(capacity=2)
        attendee_factory(event)

        registration_service.register(event.id, name="Ada", email="ada@example.com")

        assert Attendee.objects.for_event(event.pk).count() == 2

    def test_already_registered(self, event: Event) -> None:
        registration_service.register(event.id, name="Ada", email="ada@example.com")

        with pytest.raises(AlreadyRegisteredError):
            registration_service.register(event.id, name="Ada", email="ADA@example.com")

        assert Attendee.objects.for_event(event.pk).count() == 1
        assert len(mail.outbox) == 1

    def test_same_person_can_register_for_another_event(self, event: Event, next_week: datetime) -> None:
        other = Event.objects.create(
            user_group=event.user_group,
            title="Another Meetup",
            description="More talks.",
            date=next_week + timedelta(days=7),
            location="Madrid",
            capacity=10,
            status=Event.Status.PUBLISHED,
        )
        first = registration_service.register(event.id, name="Ada", email="ada@example.com")
        second = registration_service.register(other.id, name="Ada", email="ada@example.com")

        assert first.attendee.user == second.attendee.user
        assert first.token != second.token


class TestNotificationFailure:
    def test_email_failure_rolls_back_registration(self, event: Event) -> None:
        with patch(
            "events.service.registration_service.send_attendee_confirmation", side_effect=TimeoutError("smtp")
        ):
            with pytest.raises(NotificationFailedError):
                registration_service.register(event.id, name="Ada", email="ada@example.com")

        assert not Attendee.objects.filter(event=event).exists()

    def test_qr_failure_rolls_back_registration(self, event: Event) -> None:
        with patch("events.service.registration_service.render_ticket_qr", side_effect=ValueError("qr")):
            with pytest.raises(NotificationFailedError):
                registration_service.register(event.id, name="Ada", email="ada@example.com")

        assert not Attendee.objects.filter(event=event).exists()
        assert len(mail.outbox) == 0

    def test_spot_is_released_after_failure(self, event: Event) -> None:
        Event.objects.filter(pk=event.pk).update(capacity=1)
        with patch("events.service.registration_service.send_attendee_confirmation", side_effect=OSError("down")):
            with pytest.raises(NotificationFailedError):
                registration_service.register(event.id, name="Ada", email="ada@example.com")

        result = registration_service.register(event.id, name="Ada", email="ada@example.com")

        assert Attendee.objects.filter(pk=result.attendee_id).exists()


class TestConcurrentInsert:
    def test_duplicate_insert_maps_to_already_registered(self, event: Event) -> None:
        registration_service.register(event.id, name="Ada", email="ada@example.com")

        with patch("events.service.registration_service._admit", side_effect=IntegrityError("duplicate key")):
            with pytest.raises(AlreadyRegisteredError):
                registration_service.register(event.id, name="Ada", email="ada@example.com")

    def test_other_integrity_errors_propagate(self, event: Event) -> None:
        with patch("events.service.registration_service._admit", side_effect=IntegrityError("token collision")):
            with pytest.raises(IntegrityError):
                registration_service.register(event.id, name="Ada", email="ada@example.com")


@pytest.mark.django_db(transaction=True)
class TestSimultaneousRegistrations:
    def test_last_spot_goes_to_exactly_one_person(self, event: Event) -> None:
        Event.objects.filter(pk=event.pk).update(capacity=1)

        results = run_concurrently(
            lambda: registration_service.register(event.id, name="Ada", email="ada@example.com"),
            lambda: registration_service.register(event.id, name="Grace", email="grace@example.com"),
        )

        succeeded = [r for r in results if isinstance(r, registration_service.RegistrationResult)]
        failed = [r for r in results if isinstance(r, Exception)]
        assert len(succeeded) == 1
        assert len(failed) == 1
        assert isinstance(failed[0], CapacityExceededError)
        assert Attendee.objects.for_event(event.pk).count() == 1

    def test_same_person_is_registered_once(self, event: Event) -> None:
        results = run_concurrently(
            lambda: registration_service.register(event.id, name="Ada", email="ada@example.com"),
            lambda: registration_service.register(event.id, name="Ada", email="ADA@example.com"),
        )

        succeeded = [r for r in results if isinstance(r, registration_service.RegistrationResult)]
        failed = [r for r in results if isinstance(r, Exception)]
        assert len(succeeded) == 1
        assert len(failed) == 1
        assert isinstance(failed[0], AlreadyRegisteredError)
        assert Attendee.objects.for_event(event.pk).count() == 1
        assert OfrendaUser.objects.filter(email__iexact="ada@example.com").count() == 1
