"""User group schemas."""

from uuid import UUID

from ninja import ModelSchema, Schema

from accounts.schema import PublicUserSchema
from common.schema import OneToHundredString, StrippedString
from events.models import UserGroup


class UserGroupCreateSchema(Schema):
    name: OneToHundredString
    city: OneToHundredString
    description: StrippedString = ""


class MinimalUserGroupSchema(Schema):
    id: UUID
    name: str
    city: str


class UserGroupSchema(ModelSchema):
    leader: PublicUserSchema

    class Meta:
        model = UserGroup
        fields = ["id", "name", "city", "description", "created_at"]
