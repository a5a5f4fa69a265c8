"""Events admin module.

Django autodiscover imports this module, which registers the admin classes
through their @admin.register decorators.
"""

from events.admin.event import AttendeeAdmin, EventAdmin, UserGroupAdmin

__all__ = [
    "AttendeeAdmin",
    "EventAdmin",
    "UserGroupAdmin",
]
