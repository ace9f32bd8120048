from fastapi import APIRouter

from app.config import settings
from app.core.observability import uptime_seconds, utc_now_iso

router = APIRouter(tags=["health"])


def health_payload() -> dict:
    return {
        "status": "ok",
        "service": settings.app_name,
        "environment": settings.environment,
        "time": utc_now_iso(),
        "uptime_seconds": round(uptime_seconds(), 2),
        "version": settings.build_version,
    }


@router.get("/health", summary="Healthcheck")
@router.get("/healthz", include_in_schema=False)
def healthcheck():
    """Liveness probe. Keep payload stable for monitoring systems."""
    return health_payload()
