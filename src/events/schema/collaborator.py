from uuid import UUID

from ninja import Schema
from pydantic import EmailStr

from accounts.schema import MinimalUserSchema
from events.models import Collaborator


class CollaboratorCreateSchema(Schema):
    email: EmailStr
    role: Collaborator.Role = Collaborator.Role.VOLUNTEER


class CollaboratorSchema(Schema):
    id: UUID
    user: MinimalUserSchema
    role: Collaborator.Role
