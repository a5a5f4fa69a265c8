"""Registration and check-in schemas."""

import typing as t
from datetime import datetime
from uuid import UUID

from ninja import Schema
from pydantic import EmailStr, StringConstraints

from accounts.schema import MinimalUserSchema
from common.schema import OneToHundredString

EmailString = t.Annotated[EmailStr, StringConstraints(max_length=255)]
TicketTokenString = t.Annotated[str, StringConstraints(min_length=1, strip_whitespace=True)]


class RegistrationSchema(Schema):
    name: OneToHundredString
    email: EmailString
    wants_calendar_link: bool = False


class RegistrationResponseSchema(Schema):
    attendee_id: UUID
    message: str
    calendar_link: str | None = None


class CheckInSchema(Schema):
    ticket_token: TicketTokenString


class CheckInResponseSchema(Schema):
    attendee_id: UUID
    attendee: MinimalUserSchema
    already_checked_in: bool
    checked_in_at: datetime


class AttendeeSchema(Schema):
    id: UUID
    user: MinimalUserSchema
    registered_at: datetime
    checked_in: bool
    checked_in_at: datetime | None = None


class CheckInEntrySchema(Schema):
    id: UUID
    user: MinimalUserSchema
    checked_in_at: datetime


class EventStatsSchema(Schema):
    total_registered: int
    total_checked_in: int
    check_in_rate: int
    available_spots: int
    recent_check_ins: list[CheckInEntrySchema]
