"""Health endpoint."""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_settings_dependency
from src.api.models import HealthResponse
from src.config.settings import Settings

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(
    settings: Settings = Depends(get_settings_dependency),  # noqa: B008
) -> HealthResponse:
    """Health check."""
    return HealthResponse(status="healthy", version=settings.app_version)
