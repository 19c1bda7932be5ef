"""Tests for the mutation dispatcher."""

import asyncio

import pytest

from app.core.exceptions import ConversionFailure, ReadFailure, ResyncFailure, SubmissionFailure
from app.models.enums import ActionKind, SyncState
from app.schemas.listing import ListingFields
from app.schemas.market import PublicCard
from app.services.dispatcher import MutationDispatcher, build_listing_payload
from app.services.render import render_public
from app.services.sync import SyncOrchestrator
from tests.fakes import ETH, OTHER, VIEWER, FakeLedger


def _wire(ledger: FakeLedger) -> tuple[SyncOrchestrator, MutationDispatcher]:
    orchestrator = SyncOrchestrator(ledger)
    return orchestrator, MutationDispatcher(ledger, orchestrator)


class TestBuy:
    """Buying a property listed for sale."""

    @pytest.mark.asyncio
    async def test_sale_purchase_scenario(self) -> None:
        """Buy control submits the sale price for the viewer, then re-syncs."""
        ledger = FakeLedger()
        for _ in range(3):
            ledger.add(OTHER)
        record = ledger.add(OTHER, "3 Sale St", price=2_000_000_000_000_000_000, for_sale=True)
        orchestrator, dispatcher = _wire(ledger)
        await orchestrator.start()

        card = render_public(record)
        assert isinstance(card, PublicCard)
        assert card.action(ActionKind.BUY) is not None

        states: list[SyncState] = []
        ledger.on_get_count = lambda: states.append(orchestrator.state)

        snapshot = await dispatcher.buy(record)

        assert ledger.calls == [("buy", 3, VIEWER, 2_000_000_000_000_000_000)]
        assert states == [SyncState.REFRESHING]
        assert orchestrator.state is SyncState.READY
        assert [v.record.id for v in snapshot.owned] == [3]

    @pytest.mark.asyncio
    async def test_rejected_buy_does_not_refresh(self, ledger: FakeLedger) -> None:
        orchestrator, dispatcher = _wire(ledger)
        before = await orchestrator.start()
        ledger.reject_with = "insufficient payment"
        ledger.count_calls = 0

        with pytest.raises(SubmissionFailure, match="insufficient payment"):
            await dispatcher.buy(ledger.records[0])

        assert ledger.count_calls == 0
        assert orchestrator.snapshot is before
        assert orchestrator.state is SyncState.READY

    @pytest.mark.asyncio
    async def test_buy_deferred_while_refreshing(self, ledger: FakeLedger) -> None:
        orchestrator, dispatcher = _wire(ledger)
        await orchestrator.start()
        ledger.count_calls = 0
        ledger.gate = asyncio.Event()

        refresh = asyncio.create_task(orchestrator.refresh())
        for _ in range(10):
            await asyncio.sleep(0)
        assert orchestrator.state is SyncState.REFRESHING

        buy = asyncio.create_task(dispatcher.buy(ledger.records[0]))
        for _ in range(10):
            await asyncio.sleep(0)
        assert ledger.calls == []

        ledger.gate.set()
        await asyncio.gather(refresh, buy)
        assert ledger.calls == [("buy", 0, VIEWER, 2 * ETH)]

    @pytest.mark.asyncio
    async def test_buy_before_start_resolves_viewer(self, ledger: FakeLedger) -> None:
        orchestrator, dispatcher = _wire(ledger)
        await dispatcher.buy(ledger.records[0])
        assert ledger.calls[0][2] == VIEWER


class TestRent:
    """Renting a property listed for rent."""

    @pytest.mark.asyncio
    async def test_rent_pays_rent_payment(self, ledger: FakeLedger) -> None:
        orchestrator, dispatcher = _wire(ledger)
        await orchestrator.start()
        ledger.count_calls = 0

        await dispatcher.rent(ledger.records[1])

        assert ledger.calls == [("rent", 1, VIEWER, ETH // 2)]
        assert ledger.count_calls == 1

    @pytest.mark.asyncio
    async def test_rejected_rent_raises(self, ledger: FakeLedger) -> None:
        orchestrator, dispatcher = _wire(ledger)
        await orchestrator.start()
        ledger.reject_with = "not for rent"
        with pytest.raises(SubmissionFailure):
            await dispatcher.rent(ledger.records[2])

    @pytest.mark.asyncio
    async def test_refresh_failure_after_accepted_rent(self, ledger: FakeLedger) -> None:
        """The rent went through even though the follow-up refresh failed."""
        orchestrator, dispatcher = _wire(ledger)
        before = await orchestrator.start()
        ledger.fail_count = True

        with pytest.raises(ResyncFailure) as excinfo:
            await dispatcher.rent(ledger.records[1])

        assert isinstance(excinfo.value, ReadFailure)
        assert not isinstance(excinfo.value, SubmissionFailure)
        assert ledger.calls == [("rent", 1, VIEWER, ETH // 2)]
        assert orchestrator.state is SyncState.READY
        assert orchestrator.snapshot is before


class TestListing:
    """Creating and editing listings."""

    def test_payload_converts_amounts(self) -> None:
        fields = ListingFields(
            property_address="9 Elm St",
            property_type="Loft",
            image_url="https://example.com/l.png",
            price="1.5",
            rent_payment="0.1",
            for_sale=True,
        )
        assert build_listing_payload(fields) == {
            "propertyAddress": "9 Elm St",
            "propertyType": "Loft",
            "imageURL": "https://example.com/l.png",
            "price": 1_500_000_000_000_000_000,
            "rentPayment": 100_000_000_000_000_000,
            "forSale": True,
            "forRent": False,
        }

    def test_payload_includes_id_for_edits(self) -> None:
        fields = ListingFields(property_id=7, property_address="a", property_type="b", price="1")
        assert build_listing_payload(fields)["id"] == 7

    @pytest.mark.asyncio
    async def test_create_listing_appears_as_owned(self, ledger: FakeLedger) -> None:
        orchestrator, dispatcher = _wire(ledger)
        await orchestrator.start()

        snapshot = await dispatcher.create_or_edit_listing(
            ListingFields(property_address="9 Elm St", property_type="Loft", price="3")
        )

        assert snapshot.count == 5
        new = snapshot.find_owned(4)
        assert new is not None
        assert new.record.price == 3 * ETH

    @pytest.mark.asyncio
    async def test_edit_listing_updates_terms(self, ledger: FakeLedger) -> None:
        orchestrator, dispatcher = _wire(ledger)
        await orchestrator.start()

        snapshot = await dispatcher.create_or_edit_listing(
            ListingFields(
                property_id=3,
                property_address="40 Mine Ct",
                property_type="Villa",
                price="5",
                rent_payment="0.2",
                for_rent=True,
            )
        )

        edited = snapshot.find_owned(3)
        assert edited.form.for_sale is False
        assert edited.form.for_rent is True
        assert edited.record.price == 5 * ETH
        assert snapshot.count == 4

    @pytest.mark.asyncio
    async def test_inexact_amount_never_sent(self, ledger: FakeLedger) -> None:
        orchestrator, dispatcher = _wire(ledger)
        await orchestrator.start()

        with pytest.raises(ConversionFailure):
            await dispatcher.create_or_edit_listing(
                ListingFields(
                    property_address="9 Elm St",
                    property_type="Loft",
                    price="0.0000000000000000001",
                )
            )
        assert ledger.calls == []
