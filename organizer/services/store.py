"""Activity store: the single owner of the activity collection."""

import logging
import secrets
import string
import time
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional
from pydantic import ValidationError as PydanticValidationError
from organizer.errors import NotFoundError, PersistenceReadError, ValidationError
from organizer.models.activity import (
    Activity,
    ActivityFilter,
    ActivityInput,
    ActivitySummary,
    Priority,
)
from organizer.services.data_processor import DataProcessor
from organizer.services.storage import StorageAdapter

logger = logging.getLogger(__name__)

BASE36_DIGITS = string.digits + string.ascii_lowercase

SAMPLE_ACTIVITIES = [
    {
        "name": "Complete project presentation",
        "category": "Professional",
        "priority": "urgent",
        "notes": "Prepare slides for the quarterly review meeting with updated metrics",
        "completed": False,
    },
    {
        "name": "Study Python fundamentals",
        "category": "Academic",
        "priority": "important",
        "notes": "Review generators, async programming, and packaging",
        "completed": True,
    },
    {
        "name": "Grocery shopping",
        "category": "Shopping",
        "priority": "normal",
        "notes": "Buy vegetables, fruits, household items, and pet food",
        "completed": False,
    },
    {
        "name": "Morning workout routine",
        "category": "Fitness",
        "priority": "normal",
        "notes": "30 minutes cardio, strength training, and stretching",
        "completed": False,
    },
]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_base36(number: int) -> str:
    """Render a non-negative integer in base 36."""
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def generate_activity_id() -> str:
    """Millisecond timestamp plus a random suffix, both in base 36."""
    return to_base36(time.time_ns() // 1_000_000) + to_base36(secrets.randbits(52)).rjust(11, "0")


class ActivityStore:
    """
    Owns the activity collection and the current list filter.

    Every mutation builds the new collection, saves it through the storage
    adapter and only then replaces the in-memory state, so a failed save
    leaves the store unchanged. Activities handed out are copies.
    """

    def __init__(
        self,
        storage: StorageAdapter,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        """
        Initialize the store and load the persisted collection.

        Args:
            storage: Persistence adapter
            clock: Returns the current time (default: UTC now)
            id_factory: Returns a fresh activity id
        """
        self.storage = storage
        self._clock = clock or _utcnow
        self._id_factory = id_factory or generate_activity_id
        self._filters = ActivityFilter()
        self._activities: list[Activity] = self._load()

    def _load(self) -> list[Activity]:
        """Read the stored collection, treating corrupt content as empty."""
        try:
            records = self.storage.load()
            activities = [Activity.model_validate(record) for record in records]
            if len({a.id for a in activities}) != len(activities):
                raise PersistenceReadError("Duplicate activity ids in storage")
        except PersistenceReadError as e:
            logger.warning(f"Ignoring unreadable activity storage: {e.message}")
            return []
        except PydanticValidationError as e:
            logger.warning(f"Ignoring corrupt activity records: {e.error_count()} errors")
            return []

        logger.info(f"Loaded {len(activities)} activities")
        return activities

    def _commit(self, activities: list[Activity]) -> None:
        self.storage.save([a.to_record() for a in activities])
        self._activities = activities

    def _index_of(self, activity_id: str) -> int:
        for index, activity in enumerate(self._activities):
            if activity.id == activity_id:
                return index
        raise NotFoundError(activity_id)

    def _new_id(self) -> str:
        existing = {a.id for a in self._activities}
        activity_id = self._id_factory()
        while activity_id in existing:
            activity_id = self._id_factory()
        return activity_id

    def create(self, data: ActivityInput) -> Activity:
        """
        Validate input and add a new activity at the front of the collection.

        Args:
            data: User input

        Returns:
            The created activity

        Raises:
            ValidationError: If name, category or priority is empty, or the
                priority is not a known level
        """
        name = data.name.strip()
        category = data.category.strip()
        priority = data.priority.strip()
        notes = (data.notes or "").strip()

        missing = [
            field
            for field, value in (("name", name), ("category", category), ("priority", priority))
            if not value
        ]
        if missing:
            raise ValidationError(missing)

        try:
            level = Priority(priority)
        except ValueError:
            raise ValidationError(["priority"], f"Unknown priority: {priority}")

        activity = Activity(
            id=self._new_id(),
            name=name,
            category=category,
            priority=level,
            notes=notes,
            completed=False,
            created_at=self._clock(),
            completed_at=None,
        )
        self._commit([activity] + self._activities)

        logger.info(f"Created activity {activity.id} ({activity.priority.value})")
        return activity.model_copy()

    def get(self, activity_id: str) -> Activity:
        """Return a copy of the activity with the given id."""
        return self._activities[self._index_of(activity_id)].model_copy()

    def toggle_completion(self, activity_id: str) -> Activity:
        """
        Flip the completion state of an activity.

        Raises:
            NotFoundError: If no activity has that id
        """
        index = self._index_of(activity_id)
        current = self._activities[index]
        completed = not current.completed
        updated = current.model_copy(
            update={
                "completed": completed,
                "completed_at": self._clock() if completed else None,
            }
        )

        activities = list(self._activities)
        activities[index] = updated
        self._commit(activities)

        logger.info(f"Activity {activity_id} marked {'complete' if completed else 'incomplete'}")
        return updated.model_copy()

    def rename(self, activity_id: str, new_name: str) -> Activity:
        """
        Change the name of an activity.

        Raises:
            NotFoundError: If no activity has that id
            ValidationError: If the new name is empty after trimming
        """
        index = self._index_of(activity_id)
        name = (new_name or "").strip()
        if not name:
            raise ValidationError(["name"], "Activity name cannot be empty")

        updated = self._activities[index].model_copy(update={"name": name})
        activities = list(self._activities)
        activities[index] = updated
        self._commit(activities)

        return updated.model_copy()

    def remove(self, activity_id: str) -> None:
        """
        Delete an activity. Confirmation must happen before calling this.

        Raises:
            NotFoundError: If no activity has that id
        """
        index = self._index_of(activity_id)
        self._commit(self._activities[:index] + self._activities[index + 1:])
        logger.info(f"Removed activity {activity_id}")

    def list_activities(self, filters: Optional[ActivityFilter] = None) -> list[Activity]:
        """
        Return activities matching a filter, newest first.

        Args:
            filters: Filter to apply; the store's current filter when omitted

        Returns:
            Copies of the matching activities in collection order
        """
        selected = DataProcessor.apply_filter(self._activities, filters or self._filters)
        return [a.model_copy() for a in selected]

    def summary(self) -> ActivitySummary:
        """Counts over the full, unfiltered collection."""
        return DataProcessor.calculate_summary(self._activities)

    def categories(self) -> list[str]:
        """Sorted distinct categories currently in use."""
        return sorted({a.category for a in self._activities})

    def __len__(self) -> int:
        return len(self._activities)

    @property
    def filters(self) -> ActivityFilter:
        return self._filters.model_copy()

    def set_filters(self, category: Optional[str] = None, priority: Optional[str] = None) -> ActivityFilter:
        """Update the current filter. A None argument leaves that field unchanged."""
        update = {}
        if category is not None:
            update["category"] = category.strip()
        if priority is not None:
            update["priority"] = priority.strip()
        self._filters = self._filters.model_copy(update=update)
        return self.filters

    def reset_filters(self) -> ActivityFilter:
        """Clear both filter fields."""
        self._filters = ActivityFilter()
        return self.filters

    def seed_samples(self) -> int:
        """
        Insert demonstration activities into an empty store.

        Returns:
            Number of activities inserted (0 if the store was not empty)
        """
        if self._activities:
            return 0

        now = self._clock()
        samples = []
        for sample in SAMPLE_ACTIVITIES:
            completed = sample["completed"]
            samples.append(
                Activity(
                    id=self._new_id() + str(len(samples) + 1),
                    name=sample["name"],
                    category=sample["category"],
                    priority=Priority(sample["priority"]),
                    notes=sample["notes"],
                    completed=completed,
                    created_at=now - timedelta(days=1) if completed else now,
                    completed_at=now if completed else None,
                )
            )
        self._commit(samples)

        logger.info(f"Seeded {len(samples)} sample activities")
        return len(samples)
