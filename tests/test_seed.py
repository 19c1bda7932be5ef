"""Tests for the listing seed script."""

import pytest

from scripts.seed_listings import SAMPLE_LISTINGS, seed_listings
from tests.fakes import ETH, OTHER, VIEWER, FakeLedger


@pytest.mark.asyncio
async def test_seeds_empty_ledger() -> None:
    ledger = FakeLedger()
    created = await seed_listings(ledger)
    assert created == len(SAMPLE_LISTINGS)
    assert [r.owner for r in ledger.records] == [VIEWER] * len(SAMPLE_LISTINGS)
    assert ledger.records[0].price == 12 * ETH + ETH // 2


@pytest.mark.asyncio
async def test_skips_populated_ledger() -> None:
    ledger = FakeLedger()
    ledger.add(OTHER)
    assert await seed_listings(ledger) == 0
    assert ledger.calls == []
