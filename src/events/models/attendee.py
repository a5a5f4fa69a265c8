import typing as t
from datetime import datetime
from uuid import UUID

from django.conf import settings
from django.db import models

from common.models import TimeStampedModel


class AttendeeQuerySet(models.QuerySet["Attendee"]):
    def for_event(self, event_id: UUID) -> t.Self:
        return self.filter(event_id=event_id)

    def checked_in(self) -> t.Self:
        return self.filter(checked_in=True)

    def with_user(self) -> t.Self:
        return self.select_related("user")


class Attendee(TimeStampedModel):
    """One person's registration to one event.

    The ticket token is what the QR code carries. It is unique across the
    system and never changes once issued; ``checked_in`` only ever goes from
    False to True.
    """

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="registrations")
    event = models.ForeignKey("events.Event", on_delete=models.CASCADE, related_name="attendees")
    ticket_token = models.CharField(max_length=100, unique=True, editable=False)
    checked_in = models.BooleanField(default=False, db_index=True)
    checked_in_at = models.DateTimeField(null=True, blank=True, editable=False)
    checked_in_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="checked_in_attendees",
        editable=False,
    )

    objects = AttendeeQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["user", "event"], name="unique_attendee_per_event"),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} @ {self.event_id}"

    @property
    def registered_at(self) -> datetime:
        return self.created_at
