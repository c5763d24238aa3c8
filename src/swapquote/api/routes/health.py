"""Health check endpoints."""

from fastapi import APIRouter

from swapquote import __version__
from swapquote.config import get_settings
from swapquote.routing.base import ProviderKind

router = APIRouter()


@router.get("/health")
async def health_check():
    """Liveness check; never touches the aggregator."""
    return {"status": "healthy", "service": "swapquote"}


@router.get("/health/detailed")
async def detailed_health():
    """Readiness view. Reports "degraded" when no aggregator API key is set."""
    settings = get_settings()
    ready = bool(settings.swapkit_api_key)
    return {
        "status": "healthy" if ready else "degraded",
        "service": "swapquote",
        "version": __version__,
        "aggregator": {
            "url": settings.swapkit_api_url,
            "configured": ready,
            "providers": [kind.value for kind in ProviderKind.known()],
        },
        "config": settings.get_safe_dict(),
    }
