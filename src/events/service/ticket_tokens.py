"""Ticket token codec.

A ticket token is what the QR code on a ticket encodes::

    <attendee id hex>-<event id hex>-<random suffix>

IDs are UUIDs rendered without dashes so that ``-`` only ever appears as the
separator. The suffix carries no data; it only makes tokens unguessable.
Tokens are not signed: a well-formed token proves nothing until it has been
looked up in the database.
"""

import secrets
import typing as t
from uuid import UUID

SEPARATOR = "-"
SUFFIX_BYTES = 8


class TicketReference(t.NamedTuple):
    attendee_id: str
    event_id: str


def _segment(value: UUID | str) -> str:
    return value.hex if isinstance(value, UUID) else str(value)


def issue(attendee_id: UUID | str, event_id: UUID | str) -> str:
    """Build a fresh ticket token for an attendee.

    Uniqueness is not checked here; the unique constraint on
    ``Attendee.ticket_token`` rejects the (astronomically unlikely) collision.
    """
    suffix = secrets.token_hex(SUFFIX_BYTES)
    return SEPARATOR.join((_segment(attendee_id), _segment(event_id), suffix))


def is_well_formed(token: str) -> bool:
    """Syntactic check only: exactly three non-empty segments."""
    parts = token.split(SEPARATOR)
    return len(parts) == 3 and all(parts)


def parse(token: str) -> TicketReference | None:
    """Extract the attendee and event ids, or None if the token is malformed."""
    if not is_well_formed(token):
        return None
    attendee_id, event_id, _suffix = token.split(SEPARATOR)
    return TicketReference(attendee_id=attendee_id, event_id=event_id)
