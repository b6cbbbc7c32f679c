"""
Health check endpoint. Minimal, stable, no business logic.
"""
from fastapi import APIRouter, Request
from datetime import datetime

from ..schemas import HealthResponse

router = APIRouter()


@router.get("/health")
async def health_check(request: Request) -> HealthResponse:
    """
    Simple health check. Returns service status, version, commit.
    Does not touch the contract directory or the engine.
    """
    app_settings = request.app.state.settings
    return HealthResponse(
        status="ok",
        service="slc-signature-api",
        version=app_settings.api_version,
        commit=app_settings.build_commit,
        timestamp=datetime.utcnow().isoformat() + "Z"
    )
