from uuid import UUID

from django.db.models import QuerySet
from django.shortcuts import get_object_or_404
from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from common.schema import ErrorResponse
from common.throttling import WriteThrottle
from events import models, schema
from events.controllers.permissions import EventPermission
from events.service import collaborator_service
from events.service.access import EventAction

from .base import EventAdminBaseController


@api_controller(
    "/event-admin/{uuid:event_id}",
    auth=JWTAuth(),
    permissions=[EventPermission(EventAction.MANAGE_COLLABORATORS)],
    tags=["Event Admin"],
    throttle=WriteThrottle(),
)
class EventAdminCollaboratorsController(EventAdminBaseController):
    """Collaborators help at the door: they may check people in and see the stats."""

    @route.get("/collaborators", url_name="list_collaborators", response=list[schema.CollaboratorSchema])
    def list_collaborators(self, event_id: UUID) -> QuerySet[models.Collaborator]:
        """List the event's collaborators."""
        event = self.get_one(event_id)
        return collaborator_service.list_collaborators(event)

    @route.post(
        "/collaborators",
        url_name="add_collaborator",
        response={201: schema.CollaboratorSchema, 404: ErrorResponse, 409: ErrorResponse},
    )
    def add_collaborator(
        self, event_id: UUID, payload: schema.CollaboratorCreateSchema
    ) -> tuple[int, models.Collaborator]:
        """Add an existing user, by email, as a collaborator."""
        event = self.get_one(event_id)
        return 201, collaborator_service.add_collaborator(event, email=payload.email, role=payload.role)

    @route.delete("/collaborators/{uuid:collaborator_id}", url_name="remove_collaborator", response={204: None})
    def remove_collaborator(self, event_id: UUID, collaborator_id: UUID) -> tuple[int, None]:
        """Remove a collaborator from the event."""
        event = self.get_one(event_id)
        collaborator = get_object_or_404(models.Collaborator, pk=collaborator_id, event=event)
        collaborator_service.remove_collaborator(collaborator)
        return 204, None
