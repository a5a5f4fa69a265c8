import typing as t
from unittest.mock import patch

import orjson
import pytest
from django.core.exceptions import ValidationError
from django.test.client import Client
from django.urls import reverse

from api.exception_handlers import obfuscate
from conftest import OfrendaUserFactory
from events.exceptions import EventInPastError
from events.models import Event, UserGroup

pytestmark = pytest.mark.django_db


@pytest.fixture
def published_event(ofrenda_user_factory: OfrendaUserFactory, next_week: object) -> Event:
    group = UserGroup.objects.create(name="PyValencia", city="Valencia", leader=ofrenda_user_factory())
    return Event.objects.create(
        user_group=group,
        title="Meetup",
        description="Monthly meetup.",
        date=next_week,
        location="Valencia",
        capacity=10,
        status=Event.Status.PUBLISHED,
    )


def _register(client: Client, event: Event) -> t.Any:
    return client.post(
        reverse("api:register", kwargs={"event_id": event.id}),
        data=orjson.dumps({"name": "Ada", "email": "ada@example.com"}),
        content_type="application/json",
    )


def test_domain_error_rendering(client: Client, published_event: Event) -> None:
    with patch("events.service.registration_service.register", side_effect=EventInPastError("Too late.")):
        response = _register(client, published_event)

    assert response.status_code == 400
    assert response.json() == {"detail": "Too late.", "code": "event_in_past"}


def test_django_validation_error_rendering(client: Client, published_event: Event) -> None:
    error = ValidationError({"capacity": ["Ensure this value is less than or equal to 10000."]})
    with patch("events.service.registration_service.register", side_effect=error):
        response = _register(client, published_event)

    assert response.status_code == 400
    assert response.json() == {"errors": {"capacity": ["Ensure this value is less than or equal to 10000."]}}


def test_unexpected_error_is_a_generic_500(client: Client, published_event: Event, settings: t.Any) -> None:
    settings.DEBUG = False
    with patch("events.service.registration_service.register", side_effect=RuntimeError("boom")):
        response = _register(client, published_event)

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal Server Error."}


def test_obfuscate() -> None:
    data = {"Authorization": "Bearer abc", "ticket_token": "a-b-c", "name": "Ada"}

    assert obfuscate(data) == {"Authorization": "********", "ticket_token": "********", "name": "Ada"}
