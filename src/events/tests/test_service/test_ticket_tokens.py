import uuid

import pytest

from events.service import ticket_tokens


def test_issue_embeds_both_ids() -> None:
    attendee_id, event_id = uuid.uuid4(), uuid.uuid4()

    token = ticket_tokens.issue(attendee_id, event_id)

    reference = ticket_tokens.parse(token)
    assert reference == ticket_tokens.TicketReference(attendee_id=attendee_id.hex, event_id=event_id.hex)


def test_issue_is_random() -> None:
    attendee_id, event_id = uuid.uuid4(), uuid.uuid4()

    assert ticket_tokens.issue(attendee_id, event_id) != ticket_tokens.issue(attendee_id, event_id)


def test_issued_token_has_three_segments() -> None:
    token = ticket_tokens.issue(uuid.uuid4(), uuid.uuid4())

    assert token.count("-") == 2
    assert ticket_tokens.is_well_formed(token)


def test_string_ids_are_used_verbatim() -> None:
    token = ticket_tokens.issue("att", "evt")

    assert token.startswith("att-evt-")


@pytest.mark.parametrize(
    "token",
    [
        "",
        "abc",
        "a-b",
        "a-b-c-d",
        "-b-c",
        "a--c",
        "a-b-",
        "pending:0123456789abcdef",
    ],
)
def test_malformed_tokens(token: str) -> None:
    assert not ticket_tokens.is_well_formed(token)
    assert ticket_tokens.parse(token) is None


def test_parse_does_not_validate_ids() -> None:
    """Parsing is syntactic; whether the ids exist is for the database to say."""
    assert ticket_tokens.parse("x-y-z") == ticket_tokens.TicketReference(attendee_id="x", event_id="y")
