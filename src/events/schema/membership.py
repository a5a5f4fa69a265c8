from datetime import datetime
from uuid import UUID

from ninja import Schema
from pydantic import EmailStr

from accounts.schema import MinimalUserSchema

from .event import EventSchema


class MemberCreateSchema(Schema):
    email: EmailStr


class UserGroupMemberSchema(Schema):
    id: UUID
    user: MinimalUserSchema
    created_at: datetime


class UserGroupStatsSchema(Schema):
    total_members: int
    total_events: int
    published_events: int
    upcoming_events: int
    completed_events: int
    total_attendees: int
    recent_events: list[EventSchema]
