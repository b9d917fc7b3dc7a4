"""Health check endpoints.

Provides liveness and readiness probes for load balancers plus a small
service info document.
"""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, status
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel, Field
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from recipe_service.api.dependencies import SessionDep, SettingsDep
from recipe_service.observability.logging import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Health status", examples=["healthy"])
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Current server timestamp",
    )
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Deployment environment")


class ReadinessResponse(HealthResponse):
    """Readiness check response with dependency status."""

    dependencies: dict[str, str] = Field(
        default_factory=dict,
        description="Status of external dependencies",
    )


class InfoResponse(BaseModel):
    name: str
    version: str
    environment: str


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Basic health check to verify the service is running.",
)
async def health_check(settings: SettingsDep) -> HealthResponse:
    """Check if the service is alive. External dependencies are not checked."""
    return HealthResponse(
        status="healthy",
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Checks that the database answers queries.",
    responses={503: {"description": "A dependency is unavailable"}},
)
async def readiness_check(settings: SettingsDep, session: SessionDep) -> ORJSONResponse:
    """Run a trivial query and report the outcome."""
    try:
        await session.execute(text("SELECT 1"))
        database = "healthy"
    except SQLAlchemyError as e:
        logger.warning("Database readiness check failed", error=str(e))
        database = "unavailable"

    ready = database == "healthy"
    body = ReadinessResponse(
        status="ready" if ready else "degraded",
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies={"database": database},
    )
    return ORJSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(mode="json"),
    )


@router.get("/info", response_model=InfoResponse, summary="Service information")
async def info(settings: SettingsDep) -> InfoResponse:
    return InfoResponse(
        name=settings.app.name,
        version=settings.app.version,
        environment=settings.APP_ENV,
    )
