import typing as t
from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from common.schema import ErrorResponse
from common.throttling import WriteThrottle
from events import models, schema
from events.controllers.permissions import UserGroupPermission
from events.controllers.user_aware_controller import UserAwareController
from events.service import event_service, user_group_service


@api_controller("/user-groups", tags=["User Groups"])
class UserGroupController(UserAwareController):
    def get_one(self, user_group_id: UUID) -> models.UserGroup:
        """Load the group and run the route's object permissions against it."""
        return t.cast(
            models.UserGroup,
            self.get_object_or_exception(models.UserGroup.objects.select_related("leader"), pk=user_group_id),
        )

    @route.post(
        "/",
        url_name="create_user_group",
        response={201: schema.UserGroupSchema, 409: ErrorResponse},
        auth=JWTAuth(),
        throttle=WriteThrottle(),
    )
    def create_user_group(self, payload: schema.UserGroupCreateSchema) -> tuple[int, models.UserGroup]:
        """Start a user group and become its community leader.

        A user can lead a single group, and members of a group cannot start one.
        """
        return 201, event_service.create_user_group(self.user(), payload)

    @route.get("/{uuid:user_group_id}", url_name="get_user_group", response=schema.UserGroupSchema)
    def get_user_group(self, user_group_id: UUID) -> models.UserGroup:
        """Get a user group by ID."""
        return self.get_one(user_group_id)

    @route.get(
        "/{uuid:user_group_id}/members",
        url_name="list_user_group_members",
        response=list[schema.UserGroupMemberSchema],
        auth=JWTAuth(),
        permissions=[UserGroupPermission()],
    )
    def list_members(self, user_group_id: UUID) -> QuerySet[models.UserGroupMember]:
        """List the group's members. Leader only."""
        return user_group_service.list_members(self.get_one(user_group_id))

    @route.post(
        "/{uuid:user_group_id}/members",
        url_name="add_user_group_member",
        response={201: schema.UserGroupMemberSchema, 404: ErrorResponse, 409: ErrorResponse},
        auth=JWTAuth(),
        permissions=[UserGroupPermission()],
        throttle=WriteThrottle(),
    )
    def add_member(
        self, user_group_id: UUID, payload: schema.MemberCreateSchema
    ) -> tuple[int, models.UserGroupMember]:
        """Add an existing user, by email. A user belongs to one group at most."""
        user_group = self.get_one(user_group_id)
        return 201, user_group_service.add_member(user_group, email=payload.email)

    @route.delete(
        "/{uuid:user_group_id}/members/{uuid:user_id}",
        url_name="remove_user_group_member",
        response={204: None, 404: ErrorResponse},
        auth=JWTAuth(),
        permissions=[UserGroupPermission()],
        throttle=WriteThrottle(),
    )
    def remove_member(self, user_group_id: UUID, user_id: UUID) -> tuple[int, None]:
        """Remove a member from the group."""
        user_group_service.remove_member(self.get_one(user_group_id), user_id)
        return 204, None

    @route.get(
        "/{uuid:user_group_id}/stats",
        url_name="user_group_stats",
        response=schema.UserGroupStatsSchema,
        auth=JWTAuth(),
        permissions=[UserGroupPermission(allow_members=True)],
    )
    def user_group_stats(self, user_group_id: UUID) -> dict[str, t.Any]:
        """Member, event and attendee counters plus the latest events. Leader and members only."""
        user_group = self.get_one(user_group_id)
        stats = user_group_service.get_stats(user_group)
        return {**stats._asdict(), "recent_events": list(user_group_service.recent_events(user_group))}
