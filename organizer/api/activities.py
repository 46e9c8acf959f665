"""Activities endpoints."""

import logging
from typing import Optional
from fastapi import APIRouter, HTTPException, Request, Query
from organizer.errors import NotFoundError, ValidationError
from organizer.models.activity import (
    ActivityFilter,
    ActivityInput,
    ActivitySummary,
    Notification,
    RenameRequest,
)
from organizer.services import ActivityStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/activities", tags=["activities"])


def get_store(request: Request) -> ActivityStore:
    """Helper to get the application's activity store."""
    return request.app.state.store


def resolve_filter(
    store: ActivityStore, category: Optional[str], priority: Optional[str]
) -> ActivityFilter:
    """Query parameters override the store's current filter field by field."""
    current = store.filters
    return ActivityFilter(
        category=current.category if category is None else category.strip(),
        priority=current.priority if priority is None else priority.strip(),
    )


def notify(level: str, message: str) -> dict:
    """Build a notification payload for the page."""
    return Notification(level=level, message=message).model_dump()


def save_failed(e: OSError) -> HTTPException:
    """Log a failed save and build the 500 response."""
    logger.error(f"Failed to save activities: {e}")
    return HTTPException(status_code=500, detail=notify("error", "Failed to save activities"))


@router.post("")
async def create_activity(request: Request, data: ActivityInput):
    """
    Create a new activity.

    Returns:
        The created activity and a notification
    """
    store = get_store(request)
    try:
        activity = store.create(data)
    except ValidationError as e:
        logger.info(f"Rejected activity, missing fields: {e.fields}")
        raise HTTPException(status_code=400, detail=notify("error", e.message))
    except OSError as e:
        raise save_failed(e)

    return {
        "activity": activity.to_record(),
        "notification": notify("success", "Activity created successfully!"),
    }


@router.get("/list")
async def list_activities(
    request: Request,
    category: Optional[str] = Query(None, description="Exact category, empty for all"),
    priority: Optional[str] = Query(None, description="Exact priority, empty for all"),
):
    """
    Get the filtered list of activities.

    Args:
        category: Category filter, overrides the stored filter when given
        priority: Priority filter, overrides the stored filter when given

    Returns:
        Filtered activities, the filter used and the count
    """
    store = get_store(request)
    filters = resolve_filter(store, category, priority)
    activities = store.list_activities(filters)

    return {
        "activities": [a.to_record() for a in activities],
        "filters": filters.model_dump(),
        "count": len(activities),
    }


@router.get("/summary")
async def get_summary(request: Request) -> ActivitySummary:
    """Get total, completed and pending counts."""
    return get_store(request).summary()


@router.get("/categories")
async def get_categories(request: Request):
    """Get list of categories in use."""
    return {"categories": get_store(request).categories()}


@router.get("/filters")
async def get_filters(request: Request) -> ActivityFilter:
    """Get the current list filter."""
    return get_store(request).filters


@router.put("/filters")
async def set_filters(request: Request, filters: ActivityFilter) -> ActivityFilter:
    """Replace the current list filter."""
    return get_store(request).set_filters(category=filters.category, priority=filters.priority)


@router.post("/filters/reset")
async def reset_filters(request: Request) -> ActivityFilter:
    """Clear the current list filter."""
    return get_store(request).reset_filters()


@router.post("/samples")
async def seed_samples(request: Request):
    """Add demonstration activities when the list is empty."""
    added = get_store(request).seed_samples()
    if not added:
        return {"added": 0, "notification": notify("info", "Sample activities were not added, the list is not empty")}
    return {"added": added, "notification": notify("success", f"Added {added} sample activities")}


@router.post("/{activity_id}/toggle")
async def toggle_activity(request: Request, activity_id: str):
    """Mark an activity complete or incomplete."""
    store = get_store(request)
    try:
        activity = store.toggle_completion(activity_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=notify("error", e.message))
    except OSError as e:
        raise save_failed(e)

    message = "Activity completed!" if activity.completed else "Activity marked incomplete"
    return {"activity": activity.to_record(), "notification": notify("success", message)}


@router.patch("/{activity_id}")
async def rename_activity(request: Request, activity_id: str, data: RenameRequest):
    """Change the name of an activity."""
    store = get_store(request)
    try:
        activity = store.rename(activity_id, data.name)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=notify("error", e.message))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=notify("error", e.message))
    except OSError as e:
        raise save_failed(e)

    return {
        "activity": activity.to_record(),
        "notification": notify("success", "Activity updated successfully!"),
    }


@router.delete("/{activity_id}")
async def remove_activity(
    request: Request,
    activity_id: str,
    confirm: bool = Query(False, description="Must be true to actually remove"),
):
    """
    Remove an activity.

    The caller must confirm the removal with `confirm=true`; without it the
    activity is kept and 409 is returned.
    """
    store = get_store(request)
    if not confirm:
        raise HTTPException(
            status_code=409,
            detail=notify("info", "Are you sure you want to remove this activity?"),
        )

    try:
        store.remove(activity_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=notify("error", e.message))
    except OSError as e:
        raise save_failed(e)

    return {"removed": activity_id, "notification": notify("success", "Activity removed successfully!")}
