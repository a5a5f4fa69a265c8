import typing as t

from django.db.models import Count, Q, QuerySet

from events.models import Attendee, Event

RECENT_CHECK_INS_LIMIT = 10


class EventStats(t.NamedTuple):
    total_registered: int
    total_checked_in: int
    check_in_rate: int
    available_spots: int


def total_registered(event: Event) -> int:
    return Attendee.objects.for_event(event.pk).count()


def total_checked_in(event: Event) -> int:
    return Attendee.objects.for_event(event.pk).checked_in().count()


def check_in_rate(registered: int, checked_in: int) -> int:
    """Checked-in share as a whole percentage, halves rounded up (1 of 8 is 13)."""
    if registered <= 0:
        return 0
    return (200 * checked_in + registered) // (2 * registered)


def available_spots(event: Event, registered: int | None = None) -> int:
    """Capacity minus registrations, never negative."""
    if registered is None:
        registered = total_registered(event)
    return max(event.capacity - registered, 0)


def get_stats(event: Event) -> EventStats:
    """All counters for the check-in dashboard, from a single query."""
    counts = Attendee.objects.for_event(event.pk).aggregate(
        registered=Count("id"),
        checked_in=Count("id", filter=Q(checked_in=True)),
    )
    registered, checked_in = counts["registered"], counts["checked_in"]
    return EventStats(
        total_registered=registered,
        total_checked_in=checked_in,
        check_in_rate=check_in_rate(registered, checked_in),
        available_spots=available_spots(event, registered),
    )


def recent_check_ins(event: Event, limit: int = RECENT_CHECK_INS_LIMIT) -> QuerySet[Attendee]:
    """Latest check-ins first."""
    return Attendee.objects.for_event(event.pk).checked_in().with_user().order_by("-checked_in_at")[:limit]
