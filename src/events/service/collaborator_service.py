import structlog
from django.db import IntegrityError, transaction
from django.db.models import QuerySet

from accounts.models import OfrendaUser
from events.exceptions import AlreadyCollaboratorError, UserNotFoundError
from events.models import Collaborator, Event

logger = structlog.get_logger(__name__)


def list_collaborators(event: Event) -> QuerySet[Collaborator]:
    return Collaborator.objects.filter(event=event).select_related("user")


def add_collaborator(
    event: Event, *, email: str, role: Collaborator.Role = Collaborator.Role.VOLUNTEER
) -> Collaborator:
    """Let an existing user help run the event.

    The user must already have an account. The event's leader is implicitly
    allowed everything and cannot be added.
    """
    user = OfrendaUser.objects.filter(email__iexact=email).first()
    if user is None:
        raise UserNotFoundError()
    if user.pk == event.user_group.leader_id or Collaborator.objects.filter(event=event, user=user).exists():
        raise AlreadyCollaboratorError()
    try:
        with transaction.atomic():
            collaborator = Collaborator.objects.create(event=event, user=user, role=role)
    except IntegrityError:
        raise AlreadyCollaboratorError() from None
    logger.info("collaborator_added", event_id=str(event.pk), user_id=str(user.pk), role=role)
    return collaborator


def remove_collaborator(collaborator: Collaborator) -> None:
    logger.info("collaborator_removed", event_id=str(collaborator.event_id), user_id=str(collaborator.user_id))
    collaborator.delete()
