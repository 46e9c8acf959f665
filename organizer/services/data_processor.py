"""Data processing helpers for activity lists."""

from typing import Optional
import pandas as pd
from organizer.models.activity import Activity, ActivityFilter, ActivitySummary, Priority


class DataProcessor:
    """Filter, summarize and tabulate activities."""

    @staticmethod
    def filter_activities(
        activities: list[Activity],
        category: Optional[str] = None,
        priority: Optional[str] = None,
    ) -> list[Activity]:
        """
        Filter activities by exact category and priority.

        Args:
            activities: List of activities to filter
            category: Category to keep, empty or None keeps all
            priority: Priority to keep, empty or None keeps all

        Returns:
            Matching activities in their original order
        """
        filtered = activities

        if category:
            filtered = [a for a in filtered if a.category == category]
        if priority:
            filtered = [a for a in filtered if a.priority.value == priority]

        return filtered

    @staticmethod
    def apply_filter(activities: list[Activity], filters: ActivityFilter) -> list[Activity]:
        """Filter activities using an ActivityFilter."""
        return DataProcessor.filter_activities(
            activities, category=filters.category, priority=filters.priority
        )

    @staticmethod
    def calculate_summary(activities: list[Activity]) -> ActivitySummary:
        """
        Count total, completed and pending activities.

        Args:
            activities: List of Activity instances

        Returns:
            ActivitySummary instance
        """
        total = len(activities)
        completed = sum(1 for a in activities if a.completed)
        return ActivitySummary(total=total, completed=completed, pending=total - completed)

    @staticmethod
    def activities_to_dataframe(activities: list[Activity]) -> pd.DataFrame:
        """
        Convert activities to pandas DataFrame for export.

        Args:
            activities: List of activities

        Returns:
            DataFrame with activity data
        """
        if not activities:
            return pd.DataFrame()

        data = [activity.model_dump(mode="json") for activity in activities]
        df = pd.DataFrame(data)

        df["created_at"] = pd.to_datetime(df["created_at"], utc=True, format="ISO8601")
        df["completed_at"] = pd.to_datetime(df["completed_at"], utc=True, format="ISO8601")

        df["created_formatted"] = df["created_at"].dt.strftime("%d/%m/%Y %H:%M")
        df["completed_formatted"] = (
            df["completed_at"].dt.strftime("%d/%m/%Y %H:%M").fillna("")
        )
        df["status"] = df["completed"].map({True: "Done", False: "Pending"})

        return df

    @staticmethod
    def priority_breakdown(activities: list[Activity]) -> dict[str, int]:
        """
        Count activities per priority level.

        Levels with no activities are reported as zero, in priority order.
        """
        counts = {p.value: 0 for p in Priority}
        if not activities:
            return counts

        df = pd.DataFrame([{"priority": a.priority.value} for a in activities])
        for level, count in df["priority"].value_counts().items():
            counts[level] = int(count)
        return counts
