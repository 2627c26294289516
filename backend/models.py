"""Pydantic models for the items API."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    now = datetime.now(UTC).isoformat(timespec="milliseconds")
    return now.replace("+00:00", "Z")


class Item(BaseModel):
    """A single user-submitted note."""

    id: int = Field(..., ge=1, description="Sequence id, count + 1 at creation")
    text: str = Field(..., min_length=1, description="Item text")
    created: str = Field(
        default_factory=utc_timestamp,
        description="ISO-8601 creation timestamp",
    )


class HelloResponse(BaseModel):
    """Body of GET /api/hello."""

    message: str = "Hello from backend!"
    instance: str


class ErrorResponse(BaseModel):
    """Body returned for rejected requests."""

    error: str
