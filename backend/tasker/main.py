"""Main FastAPI application for the AI Tasker backend."""
import logging

from fastapi import FastAPI, Request

from tasker.api.errors import planner_error_handler
from tasker.api.routes.planning import router as planning_router
from tasker.api.routes.projects import router as projects_router
from tasker.api.routes.settings import router as settings_router
from tasker.core.config import settings
from tasker.core.logging import configure_logging
from tasker.core.middleware import RequestIDMiddleware
from tasker.db.session import create_all
from tasker.llm.errors import PlannerError
from tasker.observability.client import init_opik
from tasker.observability.tracing import trace

configure_logging(log_level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version="0.1.0")
app.add_middleware(RequestIDMiddleware)
app.add_exception_handler(PlannerError, planner_error_handler)
app.include_router(planning_router)
app.include_router(projects_router)
app.include_router(settings_router)


@app.on_event("startup")
async def startup_observability() -> None:
    """Initialize observability backends after the event loop starts."""
    init_opik()


@app.on_event("startup")
async def startup_database() -> None:
    if settings.database_auto_create:
        create_all()
        logger.info("Database tables ensured")


@app.get("/health", tags=["health"], summary="Readiness probe")
async def health_check(request: Request) -> dict[str, str]:
    """Return a simple status payload so automation can probe the API."""
    with trace("http.health_check", metadata={"route": "/health"}, request_id=request.state.request_id):
        return {"status": "ok"}
