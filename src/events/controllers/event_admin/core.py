from uuid import UUID

from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from common.schema import ErrorResponse, ValidationErrorResponse
from common.throttling import WriteThrottle
from events import models, schema
from events.controllers.permissions import EventPermission, IsCommunityLeader
from events.service import event_service
from events.service.access import EventAction

from .base import EventAdminBaseController


@api_controller(
    "/event-admin",
    auth=JWTAuth(),
    permissions=[IsCommunityLeader()],
    tags=["Event Admin"],
    throttle=WriteThrottle(),
)
class EventAdminCreateController(EventAdminBaseController):
    @route.post(
        "/events",
        url_name="create_event",
        response={201: schema.EventSchema, 400: ValidationErrorResponse},
    )
    def create_event(self, payload: schema.EventCreateSchema) -> tuple[int, models.Event]:
        """Create a draft event for the user group you lead.

        Publish it with the status endpoint to open registrations.
        """
        user_group = models.UserGroup.objects.get(leader=self.user())
        return 201, event_service.create_event(user_group, payload)


@api_controller(
    "/event-admin/{uuid:event_id}",
    auth=JWTAuth(),
    permissions=[EventPermission(EventAction.MANAGE_EVENT)],
    tags=["Event Admin"],
    throttle=WriteThrottle(),
)
class EventAdminCoreController(EventAdminBaseController):
    """Event editing, lifecycle and deletion. Leader only."""

    @route.put(
        "",
        url_name="edit_event",
        response={200: schema.EventSchema, 400: ErrorResponse | ValidationErrorResponse},
    )
    def update_event(self, event_id: UUID, payload: schema.EventEditSchema) -> models.Event:
        """Update event by ID.

        Capacity cannot be lowered below the number of registered attendees.
        """
        event = self.get_one(event_id)
        return event_service.update_event(event, payload)

    @route.delete("", url_name="delete_event", response={204: None})
    def delete_event(self, event_id: UUID) -> tuple[int, None]:
        """Delete event by ID, together with its registrations."""
        event = self.get_one(event_id)
        event_service.delete_event(event)
        return 204, None

    @route.post(
        "/status",
        url_name="update_event_status",
        response={200: schema.EventSchema, 400: ErrorResponse},
    )
    def update_event_status(self, event_id: UUID, payload: schema.EventStatusUpdateSchema) -> models.Event:
        """Publish, unpublish, cancel or complete the event.

        Drafts can be published or cancelled; published events can go back to
        draft, be cancelled or completed. Cancelled and completed are final.
        """
        event = self.get_one(event_id)
        return event_service.change_status(event, payload.status)
