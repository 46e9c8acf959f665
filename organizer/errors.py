"""Domain errors raised by the activity store and its storage adapters."""

from typing import Optional


class ActivityError(Exception):
    """Base class for recoverable activity errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ActivityError):
    """A required field is missing, empty or invalid."""

    def __init__(self, fields: list[str], message: Optional[str] = None):
        self.fields = list(fields)
        super().__init__(message or "Please complete all required fields!")


class NotFoundError(ActivityError):
    """No activity has the given id."""

    def __init__(self, activity_id: str):
        self.activity_id = activity_id
        super().__init__(f"Activity not found: {activity_id}")


class PersistenceReadError(ActivityError):
    """Stored data could not be read or parsed."""
