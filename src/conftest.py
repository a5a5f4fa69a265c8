import secrets
import string
import typing as t
from datetime import datetime, time, timedelta

import faker
import pytest
from django.core.cache import cache
from django.utils import timezone

from accounts.models import OfrendaUser


@pytest.fixture(autouse=True)
def clear_cache() -> None:
    """Throttling state lives in the cache; start every test from a clean one."""
    cache.clear()


@pytest.fixture(autouse=True)
def email_backend(settings: t.Any) -> None:
    """Capture emails in django.core.mail.outbox."""
    settings.EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"


class OfrendaUserFactory:
    """Factory for creating OfrendaUser instances for testing."""

    fake = faker.Faker()

    def create_user(self, **kwargs: t.Any) -> OfrendaUser:
        local_part = "".join(secrets.choice(string.ascii_lowercase) for _ in range(8))
        email = kwargs.pop("email", f"{local_part}@user.test")
        username = kwargs.pop("username", email)
        password = kwargs.pop("password", "password")
        name = kwargs.pop("name", self.fake.name())
        return OfrendaUser.objects.create_user(
            username=username,
            email=email,
            password=password,
            name=name,
            **kwargs,
        )

    def __call__(self, **kwargs: t.Any) -> OfrendaUser:
        return self.create_user(**kwargs)


@pytest.fixture
def ofrenda_user_factory() -> OfrendaUserFactory:
    return OfrendaUserFactory()


@pytest.fixture
def user(ofrenda_user_factory: OfrendaUserFactory) -> OfrendaUser:
    return ofrenda_user_factory(email="user@example.com", name="Regular User")


@pytest.fixture
def superuser(ofrenda_user_factory: OfrendaUserFactory) -> OfrendaUser:
    """A superuser."""
    return ofrenda_user_factory(is_superuser=True, is_staff=True)


@pytest.fixture
def next_week() -> datetime:
    today = timezone.now()
    same_time_next_week = today + timedelta(days=7)
    noon = time(hour=12, minute=0)
    return timezone.make_aware(
        datetime.combine(same_time_next_week.date(), noon),
        timezone.get_current_timezone(),
    )
