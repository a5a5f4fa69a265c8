import uuid

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import IntegrityError, models, transaction


USERNAME_MAX_LENGTH = 150


def _username_for(email: str) -> str:
    """The email itself, or a truncated email with a random suffix when it does not fit."""
    if len(email) <= USERNAME_MAX_LENGTH:
        return email
    suffix = uuid.uuid4().hex
    return f"{email[: USERNAME_MAX_LENGTH - len(suffix) - 1]}.{suffix}"


class OfrendaUserQueryset(models.QuerySet["OfrendaUser"]):
    """Queryset for OfrendaUser."""


class OfrendaUserManager(UserManager["OfrendaUser"]):
    def get_queryset(self) -> OfrendaUserQueryset:
        """Get queryset for OfrendaUser."""
        return OfrendaUserQueryset(self.model)

    def get_or_create_attendee(self, *, email: str, name: str) -> tuple["OfrendaUser", bool]:
        """Find a user by email, creating a password-less attendee if none exists.

        The lookup is case-insensitive. Existing users keep their role and name.
        """
        email = self.normalize_email(email).lower()
        if user := self.filter(email__iexact=email).first():
            return user, False
        user = self.model(username=_username_for(email), email=email, name=name, role=OfrendaUser.Role.ATTENDEE)
        user.set_unusable_password()
        try:
            with transaction.atomic():
                user.save()
        except IntegrityError:
            # Created concurrently by another registration.
            if existing := self.filter(email__iexact=email).first():
                return existing, False
            raise
        return user, True


class OfrendaUser(AbstractUser):
    class Role(models.TextChoices):
        ATTENDEE = "ATTENDEE", "Attendee"
        COMMUNITY_LEADER = "COMMUNITY_LEADER", "Community leader"
        SPEAKER = "SPEAKER", "Speaker"
        COLLABORATOR = "COLLABORATOR", "Collaborator"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=100, blank=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.ATTENDEE, db_index=True)

    objects = OfrendaUserManager()  # type: ignore[misc]

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        ordering = ["username"]

    @property
    def display_name(self) -> str:
        """Display name."""
        return self.name or self.get_full_name() or self.email.split("@")[0]
