"""Tests for DataProcessor."""

from datetime import datetime, timezone

from organizer.models import Activity, ActivityFilter, Priority
from organizer.services import DataProcessor


def make_activity(activity_id, category="Work", priority=Priority.NORMAL, completed=False):
    created = datetime(2025, 1, 15, 8, 0, tzinfo=timezone.utc)
    return Activity(
        id=activity_id,
        name=f"Task {activity_id}",
        category=category,
        priority=priority,
        completed=completed,
        created_at=created,
        completed_at=datetime(2025, 1, 15, 9, 45, tzinfo=timezone.utc) if completed else None,
    )


def test_filter_activities():
    activities = [
        make_activity("1", "Work", Priority.URGENT),
        make_activity("2", "Home", Priority.URGENT),
        make_activity("3", "Work", Priority.LOW),
    ]

    assert [a.id for a in DataProcessor.filter_activities(activities)] == ["1", "2", "3"]
    assert [a.id for a in DataProcessor.filter_activities(activities, category="Work")] == ["1", "3"]
    assert [a.id for a in DataProcessor.filter_activities(activities, priority="urgent")] == ["1", "2"]
    assert DataProcessor.filter_activities(activities, category="work") == []
    assert [
        a.id for a in DataProcessor.apply_filter(activities, ActivityFilter(category="Work", priority="low"))
    ] == ["3"]


def test_calculate_summary():
    activities = [make_activity("1", completed=True), make_activity("2"), make_activity("3")]
    summary = DataProcessor.calculate_summary(activities)

    assert (summary.total, summary.completed, summary.pending) == (3, 1, 2)
    assert DataProcessor.calculate_summary([]).total == 0


def test_activities_to_dataframe():
    df = DataProcessor.activities_to_dataframe([make_activity("1", completed=True), make_activity("2")])

    assert list(df["id"]) == ["1", "2"]
    assert list(df["status"]) == ["Done", "Pending"]
    assert list(df["priority"]) == ["normal", "normal"]
    assert list(df["created_formatted"]) == ["15/01/2025 08:00", "15/01/2025 08:00"]
    assert list(df["completed_formatted"]) == ["15/01/2025 09:45", ""]


def test_activities_to_dataframe_empty():
    assert DataProcessor.activities_to_dataframe([]).empty


def test_priority_breakdown():
    activities = [
        make_activity("1", priority=Priority.URGENT),
        make_activity("2", priority=Priority.URGENT),
        make_activity("3", priority=Priority.LOW),
    ]

    assert DataProcessor.priority_breakdown(activities) == {
        "urgent": 2,
        "important": 0,
        "normal": 0,
        "low": 1,
    }
    assert DataProcessor.priority_breakdown([]) == {"urgent": 0, "important": 0, "normal": 0, "low": 0}
