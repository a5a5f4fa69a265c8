from django.conf import settings
from django.db import models

from common.models import TimeStampedModel


class Collaborator(TimeStampedModel):
    """A user helping the leader run one specific event.

    Collaborators may check attendees in and look at the live stats for that
    event, nothing else.
    """

    class Role(models.TextChoices):
        ORGANIZER = "ORGANIZER", "Organizer"
        VOLUNTEER = "VOLUNTEER", "Volunteer"
        TECHNICAL_SUPPORT = "TECHNICAL_SUPPORT", "Technical support"
        MARKETING = "MARKETING", "Marketing"

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="collaborations")
    event = models.ForeignKey("events.Event", on_delete=models.CASCADE, related_name="collaborators")
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.VOLUNTEER)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(fields=["user", "event"], name="unique_collaborator_per_event"),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} ({self.role}) @ {self.event_id}"
