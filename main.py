from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from api import spa as spa_api
from config import Settings, get_settings
from db.firestore import get_firestore_client
from jobs.scheduler import ResetScheduler
from services.reset_service import ResetService


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: connects to Firestore and starts the daily reset schedule.
    Credential or schedule errors are not caught here, so a misconfigured
    process never starts serving.
    """
    settings: Settings = app.state.settings
    print("Application starting up...")

    db = get_firestore_client()
    reset_service = ResetService(db, timezone=settings.reset_timezone)
    reset_scheduler = ResetScheduler(
        reset_service.run_daily_reset,
        cron=settings.reset_cron,
        timezone=settings.reset_timezone,
        label=settings.reset_schedule_label,
    )
    reset_scheduler.start()

    app.state.reset_service = reset_service
    app.state.reset_scheduler = reset_scheduler
    print(f"Server is running on port {settings.port}")
    try:
        yield
    finally:
        print("Application shutting down...")
        reset_scheduler.stop()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    app = FastAPI(
        title="Queue Reset Service",
        description="Serves the queue web app and resets its Firestore state daily.",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings or get_settings()

    # Catch-all route, must stay last
    app.include_router(spa_api.router)
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
