import pytest
from django.test.client import Client
from ninja_jwt.tokens import RefreshToken

from accounts.models import OfrendaUser
from events.models import Collaborator, UserGroupMember


def _client_for(user: OfrendaUser) -> Client:
    refresh = RefreshToken.for_user(user)
    return Client(HTTP_AUTHORIZATION=f"Bearer {str(refresh.access_token)}")  # type: ignore[attr-defined]


@pytest.fixture
def leader_client(leader: OfrendaUser) -> Client:
    """API client for the leader of the event's user group."""
    return _client_for(leader)


@pytest.fixture
def collaborator_client(collaborator_user: OfrendaUser, collaborator: Collaborator) -> Client:
    """API client for a collaborator on the event."""
    return _client_for(collaborator_user)


@pytest.fixture
def outsider_client(outsider: OfrendaUser) -> Client:
    """API client for an authenticated user with no relation to the event."""
    return _client_for(outsider)


@pytest.fixture
def user_client(user: OfrendaUser) -> Client:
    return _client_for(user)


@pytest.fixture
def member_client(member_user: OfrendaUser, member: UserGroupMember) -> Client:
    """API client for a member of the leader's user group."""
    return _client_for(member_user)
