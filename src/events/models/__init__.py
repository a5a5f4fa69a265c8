from .attendee import Attendee
from .collaborator import Collaborator
from .event import MAX_EVENT_CAPACITY, Event
from .user_group import UserGroup, UserGroupMember

__all__ = [
    "MAX_EVENT_CAPACITY",
    "Attendee",
    "Collaborator",
    "Event",
    "UserGroup",
    "UserGroupMember",
]
