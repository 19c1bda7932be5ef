"""Sync orchestrator: fetch, classify and render the marketplace as one cycle."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from app.core.exceptions import ReadFailure
from app.core.logging import get_logger
from app.models.enums import SyncState
from app.models.session import SessionContext
from app.schemas.market import MarketSnapshot
from app.services.classifier import classify
from app.services.fetcher import fetch_all
from app.services.ledger import Ledger
from app.services.render import render_market

logger = get_logger(__name__)


class SyncOrchestrator:
    """Owns the session context and the last rendered snapshot.

    Cycles never overlap: a refresh requested while another is running waits
    for it and shares its result, failure included. Mutations hold the same
    lock, so they are deferred until the orchestrator is READY.
    """

    def __init__(self, ledger: Ledger, fetch_concurrency: int = 8) -> None:
        self.ledger = ledger
        self.fetch_concurrency = fetch_concurrency
        self.context = SessionContext()
        self.state = SyncState.UNINITIALIZED
        self.snapshot: MarketSnapshot | None = None
        self._lock = asyncio.Lock()
        self._last_failure: ReadFailure | None = None

    async def start(self) -> MarketSnapshot:
        """Resolve the viewer and render the marketplace for the first time."""
        logger.info("Starting marketplace sync")
        return await self.refresh()

    async def refresh(self) -> MarketSnapshot:
        """Re-fetch everything and replace the snapshot.

        Raises ReadFailure and keeps the previous snapshot if any read fails.
        A refresh that joins a running cycle shares its outcome: the new
        snapshot, or a ReadFailure if that cycle failed.
        """
        if self.state is SyncState.REFRESHING:
            async with self._lock:
                pass
            if self._last_failure is not None:
                raise ReadFailure(str(self._last_failure)) from self._last_failure
            if self.snapshot is not None:
                return self.snapshot

        async with self._lock:
            return await self._run_cycle()

    @asynccontextmanager
    async def ready(self) -> AsyncIterator[SessionContext]:
        """Hold the orchestrator READY while a mutation is submitted."""
        if not self.context.has_viewer:
            await self.refresh()
        async with self._lock:
            yield self.context

    async def _run_cycle(self) -> MarketSnapshot:
        self.state = SyncState.REFRESHING
        try:
            snapshot = await self._build_snapshot()
            self.snapshot = snapshot
            self.context.count = snapshot.count
            self._last_failure = None
        except ReadFailure as exc:
            logger.warning("Sync cycle failed, keeping previous view: %s", exc)
            self._last_failure = exc
            raise
        finally:
            self.state = SyncState.READY if self.snapshot is not None else SyncState.UNINITIALIZED

        logger.info(
            "Sync cycle complete: %d properties, %d owned by %s",
            snapshot.count,
            len(snapshot.owned),
            snapshot.viewer,
        )
        return snapshot

    async def _build_snapshot(self) -> MarketSnapshot:
        if self.context.viewer is None:
            self.context.viewer = await self.ledger.get_active_identity()
            logger.info("Viewer identity resolved: %s", self.context.viewer)

        count = await self.ledger.get_count()
        records = await fetch_all(self.ledger, count, self.fetch_concurrency)
        owned, not_owned = classify(records, self.context.viewer)
        return render_market(self.context.viewer, count, owned, not_owned)
