"""Schema for accounts module."""

from ninja import ModelSchema
from pydantic import UUID4

from .models import OfrendaUser


class MinimalUserSchema(ModelSchema):
    id: UUID4
    display_name: str

    class Meta:
        model = OfrendaUser
        fields = ["id", "name", "email"]


class PublicUserSchema(ModelSchema):
    """User as shown to anyone, without contact details."""

    id: UUID4
    display_name: str

    class Meta:
        model = OfrendaUser
        fields = ["id", "name"]
