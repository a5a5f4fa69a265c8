from django.conf import settings
from django.db import models

from common.models import TimeStampedModel


class UserGroup(TimeStampedModel):
    """A local tech community, led by exactly one community leader."""

    name = models.CharField(max_length=100, unique=True)
    city = models.CharField(max_length=100, db_index=True)
    description = models.TextField(blank=True, default="")
    leader = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="led_user_group",
    )

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.name} ({self.city})"


class UserGroupMember(TimeStampedModel):
    """A user belonging to a user group. A user joins at most one group."""

    user_group = models.ForeignKey(UserGroup, on_delete=models.CASCADE, related_name="memberships")
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="user_group_membership",
    )

    class Meta:
        ordering = ["created_at"]

    def __str__(self) -> str:
        return f"{self.user_id} @ {self.user_group_id}"
