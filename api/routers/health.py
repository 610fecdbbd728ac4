"""
Health Router - Health checks and system status endpoints
"""

from fastapi import APIRouter, Depends
from typing import Dict, Any

from api.dependencies import get_app_state, AppState

router = APIRouter()


@router.get("/live")
async def health_check_live() -> Dict[str, Any]:
    """Liveness probe: the process is serving requests."""
    return {"status": "ok"}


@router.get("/ready")
async def health_check_ready(state: AppState = Depends(get_app_state)) -> Dict[str, Any]:
    """
    Readiness probe.

    Ready when the data directory exists. Details include the in-memory item
    count and the retention sweeper's schedule and last run.
    """
    return {
        "ready": state.settings.data_dir.is_dir(),
        "details": state.get_status()
    }
