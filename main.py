"""Main FastAPI application for the daily activity organizer."""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional, Union
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from organizer.api import activities_router, export_router
from organizer.models.activity import Priority
from organizer.services import ActivityStore, JsonFileStorage

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Paths
BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "organizer" / "templates"
STATIC_DIR = BASE_DIR / "organizer" / "static"

# Settings
DATA_FILE = Path(os.getenv("ORGANIZER_DATA_FILE", str(BASE_DIR / "data" / "activities.json")))
SEED_SAMPLES = os.getenv("ORGANIZER_SEED_SAMPLES", "0") == "1"

# Templates
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

PRIORITY_COLORS = {
    "urgent": "#e74c3c",
    "important": "#f39c12",
    "normal": "#27ae60",
    "low": "#95a5a6",
}


def create_app(
    data_file: Optional[Union[str, Path]] = None,
    seed_samples: Optional[bool] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        data_file: JSON file backing the store (default: DATA_FILE)
        seed_samples: Seed demonstration activities into an empty store
            (default: SEED_SAMPLES)

    Returns:
        FastAPI application
    """
    data_path = Path(data_file) if data_file is not None else DATA_FILE
    seed = SEED_SAMPLES if seed_samples is None else seed_samples

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup/shutdown events."""
        # Startup
        logger.info("Starting activity organizer...")
        store = ActivityStore(JsonFileStorage(data_path))
        if seed:
            store.seed_samples()
        app.state.store = store
        logger.info(f"Activity store initialized from {data_path}")

        yield

        # Shutdown
        logger.info("Shutting down activity organizer...")

    app = FastAPI(
        title="Activity Organizer",
        description="Local daily activity and to-do manager",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    app.include_router(activities_router)
    app.include_router(export_router)

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request, category: Optional[str] = None, priority: Optional[str] = None):
        """Main page with the filtered activity cards."""
        store: ActivityStore = request.app.state.store
        if category is not None or priority is not None:
            store.set_filters(category=category, priority=priority)

        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "request": request,
                "activities": store.list_activities(),
                "summary": store.summary(),
                "filters": store.filters,
                "categories": store.categories(),
                "priorities": [p.value for p in Priority],
                "priority_colors": PRIORITY_COLORS,
                "has_activities": len(store) > 0,
            },
        )

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "service": "Activity Organizer"}

    return app


app = create_app()


def main():
    """Run the application with uvicorn."""
    import uvicorn

    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
        log_level="info",
    )


if __name__ == "__main__":
    main()
