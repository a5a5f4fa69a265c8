"""Common schemas for the API."""

import typing as t

from ninja import Schema
from pydantic import StringConstraints

StrippedString = t.Annotated[str, StringConstraints(strip_whitespace=True)]
OneToHundredString = t.Annotated[str, StringConstraints(min_length=1, max_length=100, strip_whitespace=True)]


class VersionResponse(Schema):
    version: str


class ResponseOk(Schema):
    status: t.Literal["ok"] = "ok"


class ErrorResponse(Schema):
    detail: str
    code: str


class ValidationErrorResponse(Schema):
    errors: dict[str, str | list[str]]
