from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiErrorEntry(BaseModel):
    code: int = 0
    message: str


class ApiErrorEnvelope(BaseModel):
    """Failure body returned by Roblox, ordered by priority."""

    errors: list[ApiErrorEntry] = []


class DataResponse(BaseModel, Generic[T]):
    """List payloads wrapped under a ``data`` field."""

    data: list[T]
