"""Health check route."""

from fastapi import APIRouter, Depends

from app.services.sync import SyncOrchestrator
from app.web.dependencies import get_orchestrator

router = APIRouter()


@router.get("/health")
async def health(
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
) -> dict[str, str]:
    """Report service liveness and sync state."""
    return {
        "status": "healthy",
        "service": "estate-market",
        "state": orchestrator.state.value,
    }
