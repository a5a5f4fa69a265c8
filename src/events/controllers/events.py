import typing as t
from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import (
    api_controller,
    route,
)
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate
from ninja_extra.searching import Searching, searching

from common.authentication import OptionalAuth
from common.schema import ErrorResponse
from common.throttling import RegistrationThrottle
from events import models, schema
from events.controllers.user_aware_controller import UserAwareController
from events.service import registration_service


@api_controller("/events", auth=OptionalAuth(), tags=["Events"])
class EventController(UserAwareController):
    def get_queryset(self) -> models.event.EventQuerySet:
        """Published events, with their group and live attendee counts."""
        return models.Event.objects.published().with_user_group().with_registered_count()

    @route.get("/", url_name="list_events", response=PaginatedResponseSchema[schema.EventSchema])
    @paginate(PageNumberPaginationExtra, page_size=20)
    @searching(Searching, search_fields=["title", "description", "location", "user_group__name", "user_group__city"])
    def list_events(self, category: models.Event.Category | None = None) -> QuerySet[models.Event]:
        """Browse upcoming published events, soonest first.

        Each event reports how many people registered and how many spots are left.
        Filter by category or search by title, description, location or group.
        """
        qs = self.get_queryset().upcoming()
        if category:
            qs = qs.filter(category=category)
        return qs.order_by("date")

    @route.get("/{uuid:event_id}", url_name="get_event", response=schema.EventSchema)
    def get_event(self, event_id: UUID) -> models.Event:
        """Get a published event by ID."""
        return t.cast(models.Event, self.get_object_or_exception(self.get_queryset(), pk=event_id))

    @route.post(
        "/{uuid:event_id}/register",
        url_name="register",
        response={
            201: schema.RegistrationResponseSchema,
            400: ErrorResponse,
            404: ErrorResponse,
            409: ErrorResponse,
            502: ErrorResponse,
        },
        throttle=RegistrationThrottle(),
    )
    def register(
        self, event_id: UUID, payload: schema.RegistrationSchema
    ) -> tuple[int, schema.RegistrationResponseSchema]:
        """Register for an event; no account needed.

        The ticket, a QR code, is emailed to the given address. People are
        identified by email: registering again with the same email is rejected,
        and an existing account with that email is reused.

        Fails with 400 if the event is not published or already started, 409 if
        it is full or the person is already registered, and 502 if the ticket
        could not be emailed (in which case nothing was registered).
        """
        result = registration_service.register(
            event_id,
            name=payload.name,
            email=payload.email,
            wants_calendar_link=payload.wants_calendar_link,
        )
        return 201, schema.RegistrationResponseSchema(
            attendee_id=result.attendee_id,
            message="Registration successful! Your ticket has been sent to your email.",
            calendar_link=result.calendar_link,
        )
