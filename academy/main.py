"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response

from academy.core.config import get_settings
from academy.core.metrics import build_metrics_response, instrument_http_request
from academy.core.store import get_store
from academy.modules.audit.router import router as audit_router
from academy.modules.billing.router import router as billing_router
from academy.modules.classrooms.router import router as classrooms_router
from academy.modules.courses.router import router as courses_router
from academy.modules.enrollment.router import router as enrollment_router
from academy.modules.mentors.router import router as mentors_router
from academy.modules.scheduling.router import router as scheduling_router
from academy.modules.students.router import router as students_router
from academy.shared.exceptions import register_exception_handlers
from academy.shared.utils import utc_now

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Application startup and shutdown hooks."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logger.info("Starting %s (%s)", settings.app_name, settings.app_env)

    yield

    logger.info("Shutting down %s", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    lifespan=lifespan,
)
app.middleware("http")(instrument_http_request)

register_exception_handlers(app)

app.include_router(students_router, prefix=settings.api_prefix)
app.include_router(mentors_router, prefix=settings.api_prefix)
app.include_router(courses_router, prefix=settings.api_prefix)
app.include_router(classrooms_router, prefix=settings.api_prefix)
app.include_router(enrollment_router, prefix=settings.api_prefix)
app.include_router(scheduling_router, prefix=settings.api_prefix)
app.include_router(billing_router, prefix=settings.api_prefix)
app.include_router(audit_router, prefix=settings.api_prefix)


@app.get("/health")
async def healthcheck() -> dict[str, str]:
    """Liveness check endpoint."""
    return {"status": "ok"}


@app.get("/ready")
async def readiness_check() -> dict:
    """Readiness check endpoint with store collection sizes."""
    return {
        "status": "ready",
        "store": get_store().counts(),
        "timestamp": utc_now().isoformat(),
    }


@app.get("/metrics", include_in_schema=False)
async def metrics_endpoint(_: Request) -> Response:
    """Prometheus metrics endpoint."""
    return build_metrics_response()
