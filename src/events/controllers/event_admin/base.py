import typing as t
from uuid import UUID

from django.db.models import QuerySet

from events import models
from events.controllers.user_aware_controller import UserAwareController


class EventAdminBaseController(UserAwareController):
    """Base controller for event admin endpoints.

    Subclasses should be decorated with @api_controller to register routes.
    ``get_one`` runs the route's EventPermission against the loaded event.
    """

    def get_queryset(self) -> QuerySet[models.Event]:
        """All events, with their group and leader loaded for the permission check."""
        return models.Event.objects.with_user_group()

    def get_one(self, event_id: UUID) -> models.Event:
        """Wrapper helper."""
        return t.cast(models.Event, self.get_object_or_exception(self.get_queryset(), pk=event_id))
