import typing as t
from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate
from ninja_extra.searching import Searching, searching
from ninja_jwt.authentication import JWTAuth

from common.schema import ErrorResponse
from common.throttling import CheckInThrottle
from events import models, schema
from events.controllers.permissions import EventPermission
from events.service import check_in_service, stats_service
from events.service.access import EventAction

from .base import EventAdminBaseController


@api_controller(
    "/event-admin/{uuid:event_id}",
    auth=JWTAuth(),
    tags=["Event Admin"],
    throttle=CheckInThrottle(),
)
class EventAdminCheckInController(EventAdminBaseController):
    """Door operations: scanning tickets and following attendance live."""

    @route.post(
        "/check-in",
        url_name="check_in",
        response={200: schema.CheckInResponseSchema, 400: ErrorResponse, 403: ErrorResponse, 404: ErrorResponse},
    )
    def check_in(self, event_id: UUID, payload: schema.CheckInSchema) -> dict[str, t.Any]:
        """Check in the attendee whose ticket QR code was scanned.

        The leader of the event's group and the event's collaborators may check
        people in. Scanning a ticket twice is fine: the response says
        `already_checked_in` and carries the time of the first scan.
        """
        result = check_in_service.check_in(event_id, payload.ticket_token, self.user())
        return {
            "attendee_id": result.attendee.id,
            "attendee": result.attendee.user,
            "already_checked_in": result.already_checked_in,
            "checked_in_at": result.checked_in_at,
        }

    @route.get(
        "/check-in/stats",
        url_name="check_in_stats",
        response=schema.EventStatsSchema,
        permissions=[EventPermission(EventAction.VIEW_STATS)],
    )
    def check_in_stats(self, event_id: UUID) -> dict[str, t.Any]:
        """Live attendance numbers and the latest check-ins.

        `check_in_rate` is a whole percentage; `available_spots` never goes below zero.
        """
        event = self.get_one(event_id)
        stats = stats_service.get_stats(event)
        return {**stats._asdict(), "recent_check_ins": list(stats_service.recent_check_ins(event))}

    @route.get(
        "/attendees",
        url_name="list_attendees",
        response=PaginatedResponseSchema[schema.AttendeeSchema],
        permissions=[EventPermission(EventAction.VIEW_ATTENDEES)],
    )
    @paginate(PageNumberPaginationExtra, page_size=50)
    @searching(Searching, search_fields=["user__name", "user__email"])
    def list_attendees(self, event_id: UUID, checked_in: bool | None = None) -> QuerySet[models.Attendee]:
        """List everyone registered for the event, newest first.

        Filter with `checked_in=true|false`; search by name or email.
        """
        event = self.get_one(event_id)
        qs = models.Attendee.objects.for_event(event.pk).with_user()
        if checked_in is not None:
            qs = qs.filter(checked_in=checked_in)
        return qs
