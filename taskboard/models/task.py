"""
Task models.

A user's tasks live in one document of the tasks collection, keyed by the
sanitized e-mail. The document is a flat mapping task_id -> Task, stored with
camelCase keys (title, description, createdAt).
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def utc_timestamp() -> str:
    """Current time as ISO-8601 UTC with millisecond precision, e.g. 2025-01-01T00:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Task(BaseModel):
    """
    Single task entry inside a TaskCollection document.
    created_at is set once at creation and never updated.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "Buy milk",
                "description": "2%",
                "createdAt": "2025-01-01T00:00:00.000Z",
            }
        },
    )

    title: str
    description: str
    created_at: str = Field(default_factory=utc_timestamp, alias="createdAt")

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)


# Request bodies. Fields are optional at the schema level so that a missing
# field is reported by the service as a 400 with a readable message.


class TaskCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    email: Optional[str] = None


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    email: Optional[str] = None


class TaskDelete(BaseModel):
    email: Optional[str] = None
