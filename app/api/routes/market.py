"""Marketplace JSON API routes."""

from fastapi import APIRouter, Depends, HTTPException

from app.schemas.market import MarketSnapshot
from app.services.sync import SyncOrchestrator
from app.web.dependencies import get_orchestrator

router = APIRouter(prefix="/market", tags=["market"])


@router.get("", response_model=MarketSnapshot)
async def get_market(
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
) -> MarketSnapshot:
    """Current rendered marketplace snapshot."""
    if orchestrator.snapshot is None:
        raise HTTPException(status_code=503, detail="Marketplace has not been loaded yet")
    return orchestrator.snapshot


@router.post("/refresh", response_model=MarketSnapshot)
async def refresh_market(
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
) -> MarketSnapshot:
    """Run a sync cycle and return the new snapshot."""
    return await orchestrator.refresh()
