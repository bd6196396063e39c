from datetime import datetime, timezone

from fastapi import APIRouter

from app.config import get_settings

router = APIRouter(tags=["system"])


@router.get("/health")
def healthcheck() -> dict:
    """Liveness probe."""
    return {
        "status": "ok",
        "app": get_settings().app_name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
