"""Event-related schemas."""

import typing as t
from datetime import datetime, timedelta
from uuid import UUID

from django.utils import timezone
from ninja import Schema
from pydantic import AwareDatetime, Field, StringConstraints, field_validator

from events.models import MAX_EVENT_CAPACITY, Event

from .user_group import MinimalUserGroupSchema

TitleString = t.Annotated[str, StringConstraints(min_length=1, max_length=200, strip_whitespace=True)]
DescriptionString = t.Annotated[str, StringConstraints(min_length=1, strip_whitespace=True)]
LocationString = t.Annotated[str, StringConstraints(min_length=1, max_length=500, strip_whitespace=True)]
Capacity = t.Annotated[int, Field(ge=1, le=MAX_EVENT_CAPACITY)]


class EventEditSchema(Schema):
    title: TitleString | None = None
    description: DescriptionString | None = None
    date: AwareDatetime | None = None
    duration: timedelta | None = Field(None, description="Leave empty to use the default duration")
    location: LocationString | None = None
    capacity: Capacity | None = None
    category: Event.Category | None = None


class EventCreateSchema(Schema):
    title: TitleString
    description: DescriptionString
    date: AwareDatetime
    duration: timedelta | None = Field(None, description="Leave empty to use the default duration")
    location: LocationString
    capacity: Capacity
    category: Event.Category = Event.Category.MEETUP

    @field_validator("date")
    @classmethod
    def date_in_future(cls, value: datetime) -> datetime:
        if value <= timezone.now():
            raise ValueError("The event date must be in the future.")
        return value


class EventStatusUpdateSchema(Schema):
    status: Event.Status


class EventSchema(Schema):
    id: UUID
    user_group: MinimalUserGroupSchema
    title: str
    description: str
    date: datetime
    ends_at: datetime
    location: str
    capacity: int
    category: Event.Category
    status: Event.Status
    registered_count: int = 0
    available_spots: int = 0

    @staticmethod
    def resolve_registered_count(obj: Event) -> int:
        """Use the queryset annotation when present."""
        count = getattr(obj, "registered_count", None)
        return count if count is not None else obj.attendees.count()

    @staticmethod
    def resolve_available_spots(obj: Event) -> int:
        return max(obj.capacity - EventSchema.resolve_registered_count(obj), 0)
