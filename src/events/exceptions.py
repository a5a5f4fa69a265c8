"""Domain errors raised by the events services.

Every error carries a stable machine-readable ``code`` and the HTTP status the
API layer answers with. Messages are user-facing and name the concrete reason,
since each one calls for a different corrective action.
"""

import typing as t


class OfrendaError(Exception):
    """Base class for all domain errors."""

    code: t.ClassVar[str] = "error"
    status_code: t.ClassVar[int] = 400
    default_message: t.ClassVar[str] = "The request could not be processed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self.args[0])


class EventNotFoundError(OfrendaError):
    """Raised when the event does not exist."""

    code = "not_found"
    status_code = 404
    default_message = "Event not found."


# ---- Registration ----


class RegistrationError(OfrendaError):
    """Base class for errors that stop a registration."""


class EventNotPublishedError(RegistrationError):
    """Raised when registering for an event that is not published."""

    code = "not_published"
    default_message = "This event is not open for registration."


class EventInPastError(RegistrationError):
    """Raised when registering for an event that has already started."""

    code = "event_in_past"
    default_message = "You cannot register for an event that has already taken place."


class CapacityExceededError(RegistrationError):
    """Raised when the event has no spots left."""

    code = "capacity_exceeded"
    status_code = 409
    default_message = "This event has reached its maximum capacity."


class AlreadyRegisteredError(RegistrationError):
    """Raised when the person is already registered for the event."""

    code = "already_registered"
    status_code = 409
    default_message = "You are already registered for this event."


class NotificationFailedError(RegistrationError):
    """Raised when the confirmation could not be delivered; the registration was rolled back."""

    code = "notification_failed"
    status_code = 502
    default_message = "We could not send your ticket. Your registration was not completed, please try again."


# ---- Check-in ----


class CheckInError(OfrendaError):
    """Base class for errors that stop a check-in."""


class MalformedTokenError(CheckInError):
    """Raised when the scanned code is not a ticket at all."""

    code = "malformed_token"
    default_message = "Invalid ticket format."


class TokenEventMismatchError(CheckInError):
    """Raised when the ticket belongs to a different event."""

    code = "token_event_mismatch"
    default_message = "This ticket does not belong to this event."


class TicketNotFoundError(CheckInError):
    """Raised when no registration matches the ticket."""

    code = "ticket_not_found"
    status_code = 404
    default_message = "Ticket not found."


class CheckInUnauthorizedError(CheckInError):
    """Raised when the actor may not check attendees in for this event."""

    code = "unauthorized"
    status_code = 403
    default_message = "You do not have permission to check attendees in for this event."


# ---- Event management ----


class PermissionDeniedError(OfrendaError):
    """Raised when the actor may not perform an action on an event."""

    code = "forbidden"
    status_code = 403
    default_message = "You do not have permission to perform this action."


class InvalidStatusTransitionError(OfrendaError):
    """Raised on a disallowed event lifecycle change."""

    code = "invalid_status_transition"
    default_message = "This status change is not allowed."


class CapacityBelowRegistrationsError(OfrendaError):
    """Raised when shrinking capacity below the current registration count."""

    code = "capacity_below_registrations"
    default_message = "Capacity cannot be lower than the number of registered attendees."


class AlreadyCollaboratorError(OfrendaError):
    """Raised when the user already collaborates on the event."""

    code = "already_collaborator"
    status_code = 409
    default_message = "This user is already a collaborator for this event."


class AlreadyLeadsUserGroupError(OfrendaError):
    """Raised when a leader tries to create a second user group."""

    code = "already_leads_user_group"
    status_code = 409
    default_message = "You already lead a user group."


class UserNotFoundError(OfrendaError):
    """Raised when no user matches the given email."""

    code = "not_found"
    status_code = 404
    default_message = "User not found."


# ---- User group membership ----


class AlreadyMemberError(OfrendaError):
    """Raised when the user already belongs to a user group."""

    code = "already_member"
    status_code = 409
    default_message = "This user is already a member of a user group."


class LeaderCannotBeMemberError(OfrendaError):
    """Raised when adding a community leader as a member of a group."""

    code = "leader_cannot_be_member"
    status_code = 409
    default_message = "Community leaders cannot be members of a user group."


class NotAMemberError(OfrendaError):
    """Raised when removing a user who is not a member of the group."""

    code = "not_a_member"
    status_code = 404
    default_message = "This user is not a member of the user group."
