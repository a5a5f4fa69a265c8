"""Events schema package.

Schemas are split into modules that mirror the models package and are all
re-exported here.
"""

from .attendee import (
    AttendeeSchema,
    CheckInEntrySchema,
    CheckInResponseSchema,
    CheckInSchema,
    EventStatsSchema,
    RegistrationResponseSchema,
    RegistrationSchema,
)
from .collaborator import CollaboratorCreateSchema, CollaboratorSchema
from .event import EventCreateSchema, EventEditSchema, EventSchema, EventStatusUpdateSchema
from .membership import MemberCreateSchema, UserGroupMemberSchema, UserGroupStatsSchema
from .user_group import MinimalUserGroupSchema, UserGroupCreateSchema, UserGroupSchema

__all__ = [
    "AttendeeSchema",
    "CheckInEntrySchema",
    "CheckInResponseSchema",
    "CheckInSchema",
    "CollaboratorCreateSchema",
    "CollaboratorSchema",
    "EventCreateSchema",
    "EventEditSchema",
    "EventSchema",
    "EventStatsSchema",
    "EventStatusUpdateSchema",
    "MemberCreateSchema",
    "MinimalUserGroupSchema",
    "RegistrationResponseSchema",
    "RegistrationSchema",
    "UserGroupCreateSchema",
    "UserGroupMemberSchema",
    "UserGroupSchema",
    "UserGroupStatsSchema",
]
