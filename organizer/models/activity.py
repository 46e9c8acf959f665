"""Activity data models."""

from datetime import datetime
from enum import Enum
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator, model_validator


class Priority(str, Enum):
    """Closed set of priority levels, most pressing first."""

    URGENT = "urgent"
    IMPORTANT = "important"
    NORMAL = "normal"
    LOW = "low"


class Activity(BaseModel):
    """A single to-do record."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    priority: Priority
    notes: str = ""
    completed: bool = False
    created_at: datetime = Field(alias="createdAt", description="Creation time (UTC)")
    completed_at: Optional[datetime] = Field(
        None, alias="completedAt", description="Completion time, null while pending"
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": "m5x2k1a9q3v7h2",
                "name": "Complete project presentation",
                "category": "Professional",
                "priority": "urgent",
                "notes": "Prepare slides for the quarterly review meeting",
                "completed": False,
                "createdAt": "2025-01-15T08:30:00Z",
                "completedAt": None,
            }
        }

    @field_validator("name", "category", "notes", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @model_validator(mode="after")
    def check_completion_timestamp(self) -> "Activity":
        if self.completed != (self.completed_at is not None):
            raise ValueError("completedAt must be set exactly when completed is true")
        return self

    def to_record(self) -> dict:
        """Serialize to the persisted (camelCase, ISO-8601) form."""
        return self.model_dump(mode="json", by_alias=True)


class ActivityInput(BaseModel):
    """Raw user input for a new activity, validated by the store."""

    name: str = ""
    category: str = ""
    priority: str = ""
    notes: Optional[str] = ""


class RenameRequest(BaseModel):
    """New name for an existing activity."""

    name: str = ""


class ActivityFilter(BaseModel):
    """Current list filter. Empty string means no filter on that field."""

    category: str = ""
    priority: str = ""


class ActivitySummary(BaseModel):
    """Counts over the whole (unfiltered) collection."""

    total: int = 0
    completed: int = 0
    pending: int = 0


class Notification(BaseModel):
    """Transient message for the page to display."""

    level: Literal["success", "error", "info"] = "info"
    message: str
