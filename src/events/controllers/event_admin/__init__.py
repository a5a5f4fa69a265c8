"""Event admin controllers package.

Endpoints for running an event, split by concern. The create controller is
registered first so ``/event-admin/events`` is never taken for an event id.
"""

from .check_in import EventAdminCheckInController
from .collaborators import EventAdminCollaboratorsController
from .core import EventAdminCoreController, EventAdminCreateController

EVENT_ADMIN_CONTROLLERS: list[type] = [
    EventAdminCreateController,
    EventAdminCoreController,
    EventAdminCheckInController,
    EventAdminCollaboratorsController,
]

__all__ = [
    "EventAdminCheckInController",
    "EventAdminCollaboratorsController",
    "EventAdminCoreController",
    "EventAdminCreateController",
    "EVENT_ADMIN_CONTROLLERS",
]
