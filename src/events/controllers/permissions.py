from django.http import HttpRequest
from ninja_extra import ControllerBase
from ninja_extra.permissions import BasePermission

from events import models
from events.service import access, user_group_service
from events.service.access import EventAction


class EventPermission(BasePermission):
    """Object permission on an event, answered by the access policy table."""

    message = "You do not have permission to perform this action."

    def __init__(self, action: EventAction) -> None:
        """Store the action."""
        self.action = action

    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        """Must implement abstract method. This is due to an error in Ninja Extra.

        This Method will be ignored, only has_object_permission will be called.
        """
        return True

    def has_object_permission(
        self,
        request: HttpRequest,
        controller: ControllerBase,
        obj: models.Event,
    ) -> bool:
        """Check the requesting user's relation to the event against the policy."""
        return access.can(request.user, obj, self.action)  # type: ignore[arg-type]


class IsCommunityLeader(BasePermission):
    """Only users who lead a user group may create events."""

    message = "Only community leaders can do this."

    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        """Check that the user leads a user group."""
        return models.UserGroup.objects.filter(leader_id=request.user.pk).exists()


class UserGroupPermission(BasePermission):
    """Object permission on a user group: its leader, or optionally its members too."""

    message = "You do not have permission to perform this action."

    def __init__(self, allow_members: bool = False) -> None:
        self.allow_members = allow_members

    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        """Only has_object_permission is relevant."""
        return True

    def has_object_permission(
        self,
        request: HttpRequest,
        controller: ControllerBase,
        obj: models.UserGroup,
    ) -> bool:
        if request.user.pk == obj.leader_id:
            return True
        if not self.allow_members:
            return False
        return user_group_service.is_leader_or_member(request.user, obj)  # type: ignore[arg-type]
