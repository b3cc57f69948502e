"""Health check endpoint: no dependencies, always available."""

from fastapi import APIRouter

from blogpress.config import get_settings
from blogpress.infrastructure.dependencies import get_default_credentials

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Returns the application status and whether default CMS credentials exist."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "default_cms_configured": get_default_credentials().is_complete,
    }
