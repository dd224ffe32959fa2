"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


def _get_geocoder_health_check():
    """Lazy import to avoid startup failures."""
    from ...services.routing.geocoder import check_health as geocoder_health_check
    return geocoder_health_check


@router.get("/health/geocoder", status_code=status.HTTP_200_OK)
def health_geocoder() -> dict:
    """Check that the geocoding provider is configured and answering."""
    configured = bool(settings.google_maps_api_key)
    try:
        healthy = _get_geocoder_health_check()() if configured else False
        return {"service": "geocoder", "configured": configured, "healthy": healthy}
    except Exception as e:
        return {"service": "geocoder", "configured": configured, "healthy": False, "error": str(e)}
