"""Shared fixtures: an in-memory ledger and an app client wired to it."""

import pytest
from fastapi.testclient import TestClient

from app.main import app
from tests.fakes import ETH, OTHER, VIEWER, FakeLedger


@pytest.fixture
def ledger() -> FakeLedger:
    """Ledger with one listing for sale, one for rent, one idle and one owned by the viewer."""
    fake = FakeLedger()
    fake.add(OTHER, "10 Sale Rd", "House", price=2 * ETH, for_sale=True)
    fake.add(OTHER, "20 Rent Ave", "Flat", rent_payment=ETH // 2, for_rent=True)
    fake.add(OTHER, "30 Idle Ln", "Barn")
    fake.add(VIEWER, "40 Mine Ct", "Villa", price=ETH, for_sale=True, rent_payment=ETH // 10)
    return fake


@pytest.fixture
def client(ledger: FakeLedger):
    """Test client whose lifespan wires the app to the fake ledger."""
    app.state.ledger = ledger
    with TestClient(app) as c:
        yield c
    del app.state.ledger
