import typing as t
from datetime import datetime, timedelta

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Count
from django.utils import timezone

from common.models import TimeStampedModel

from .user_group import UserGroup

MAX_EVENT_CAPACITY = 10_000


class EventQuerySet(models.QuerySet["Event"]):
    def published(self) -> t.Self:
        """Only events open for registration."""
        return self.filter(status=Event.Status.PUBLISHED)

    def upcoming(self) -> t.Self:
        """Only events that have not started yet."""
        return self.filter(date__gt=timezone.now())

    def with_user_group(self) -> t.Self:
        """Select the owning user group and its leader."""
        return self.select_related("user_group", "user_group__leader")

    def with_registered_count(self) -> t.Self:
        """Annotate registered_count."""
        return self.annotate(registered_count=Count("attendees"))


class EventManager(models.Manager["Event"]):
    def get_queryset(self) -> EventQuerySet:
        """Get the event queryset."""
        return EventQuerySet(self.model, using=self._db)

    def published(self) -> EventQuerySet:
        """Only events open for registration."""
        return self.get_queryset().published()

    def with_user_group(self) -> EventQuerySet:
        """Select the owning user group and its leader."""
        return self.get_queryset().with_user_group()


class Event(TimeStampedModel):
    class Status(models.TextChoices):
        DRAFT = "DRAFT", "Draft"
        PUBLISHED = "PUBLISHED", "Published"
        CANCELLED = "CANCELLED", "Cancelled"
        COMPLETED = "COMPLETED", "Completed"

    class Category(models.TextChoices):
        MEETUP = "MEETUP", "Meetup"
        HACKATHON = "HACKATHON", "Hackathon"
        CONFERENCE = "CONFERENCE", "Conference"

    # Cancelled and completed events are terminal.
    ALLOWED_TRANSITIONS: t.ClassVar[dict[str, frozenset[str]]] = {
        Status.DRAFT: frozenset({Status.PUBLISHED, Status.CANCELLED}),
        Status.PUBLISHED: frozenset({Status.DRAFT, Status.CANCELLED, Status.COMPLETED}),
        Status.CANCELLED: frozenset(),
        Status.COMPLETED: frozenset(),
    }

    user_group = models.ForeignKey(UserGroup, on_delete=models.CASCADE, related_name="events")
    title = models.CharField(max_length=200)
    description = models.TextField()
    date = models.DateTimeField(db_index=True)
    duration = models.DurationField(null=True, blank=True, help_text="Leave empty for the default duration.")
    location = models.CharField(max_length=500)
    capacity = models.PositiveIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(MAX_EVENT_CAPACITY)],
    )
    category = models.CharField(max_length=20, choices=Category.choices, default=Category.MEETUP)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT, db_index=True)

    objects = EventManager()

    class Meta:
        ordering = ["date"]

    def __str__(self) -> str:
        return self.title

    @property
    def ends_at(self) -> datetime:
        """Event end, falling back to the configured default duration."""
        duration = self.duration or timedelta(hours=settings.CALENDAR_DEFAULT_DURATION_HOURS)
        return self.date + duration

    @property
    def is_published(self) -> bool:
        return self.status == Event.Status.PUBLISHED

    def is_in_past(self, now: datetime | None = None) -> bool:
        """True once the event has started."""
        return self.date <= (now or timezone.now())

    def can_transition_to(self, status: str) -> bool:
        """Whether the lifecycle allows moving to ``status``."""
        return status in self.ALLOWED_TRANSITIONS[self.status]
