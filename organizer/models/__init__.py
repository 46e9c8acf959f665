"""Data models for the application."""

from .activity import (
    Activity,
    ActivityFilter,
    ActivityInput,
    ActivitySummary,
    Notification,
    Priority,
    RenameRequest,
)

__all__ = [
    "Activity",
    "ActivityFilter",
    "ActivityInput",
    "ActivitySummary",
    "Notification",
    "Priority",
    "RenameRequest",
]
