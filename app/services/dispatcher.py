"""Mutation dispatcher: send buy, rent and listing intents to the ledger."""

from typing import Any

from app.core.exceptions import ReadFailure, ResyncFailure, SubmissionFailure
from app.core.logging import get_logger
from app.models.property import PropertyRecord
from app.schemas.listing import ListingFields
from app.schemas.market import MarketSnapshot
from app.services.ledger import Ledger
from app.services.sync import SyncOrchestrator
from app.services.units import to_smallest_unit

logger = get_logger(__name__)


def build_listing_payload(fields: ListingFields) -> dict[str, Any]:
    """Ledger-facing listing fields with amounts in the smallest unit.

    Raises ConversionFailure before anything is sent if an amount is inexact.
    """
    payload: dict[str, Any] = {
        "propertyAddress": fields.property_address,
        "propertyType": fields.property_type,
        "imageURL": fields.image_url,
        "price": to_smallest_unit(fields.price),
        "rentPayment": to_smallest_unit(fields.rent_payment),
        "forSale": fields.for_sale,
        "forRent": fields.for_rent,
    }
    if fields.property_id is not None:
        payload["id"] = fields.property_id
    return payload


class MutationDispatcher:
    """Submits intents attributed to the session viewer and re-syncs on success."""

    def __init__(self, ledger: Ledger, orchestrator: SyncOrchestrator) -> None:
        self.ledger = ledger
        self.orchestrator = orchestrator

    async def buy(self, record: PropertyRecord) -> MarketSnapshot:
        """Buy a property, paying its sale price."""
        async with self.orchestrator.ready() as context:
            logger.info(
                "Submitting buy of property %d by %s for %d",
                record.id,
                context.viewer,
                record.price,
            )
            try:
                await self.ledger.submit_buy(record.id, context.viewer, record.price)
            except SubmissionFailure as exc:
                logger.warning("Buy of property %d rejected: %s", record.id, exc)
                raise
        return await self._resync()

    async def rent(self, record: PropertyRecord) -> MarketSnapshot:
        """Rent a property, paying its rent payment."""
        async with self.orchestrator.ready() as context:
            logger.info(
                "Submitting rent of property %d by %s for %d",
                record.id,
                context.viewer,
                record.rent_payment,
            )
            try:
                await self.ledger.submit_rent(record.id, context.viewer, record.rent_payment)
            except SubmissionFailure as exc:
                logger.warning("Rent of property %d rejected: %s", record.id, exc)
                raise
        return await self._resync()

    async def create_or_edit_listing(self, fields: ListingFields) -> MarketSnapshot:
        """Create a listing, or update one when ``fields.property_id`` is set."""
        payload = build_listing_payload(fields)

        async with self.orchestrator.ready() as context:
            if fields.property_id is None:
                logger.info("Submitting new listing by %s", context.viewer)
            else:
                logger.info(
                    "Submitting edit of property %d by %s",
                    fields.property_id,
                    context.viewer,
                )
            try:
                await self.ledger.submit_listing(payload, context.viewer)
            except SubmissionFailure as exc:
                logger.warning("Listing submission rejected: %s", exc)
                raise
        return await self._resync()

    async def _resync(self) -> MarketSnapshot:
        """Refresh after an accepted mutation.

        A read failure here means the ledger already applied the intent, so it
        is raised as ResyncFailure and never as a rejected submission.
        """
        try:
            return await self.orchestrator.refresh()
        except ReadFailure as exc:
            logger.warning("Mutation accepted but refresh failed: %s", exc)
            raise ResyncFailure(str(exc)) from exc
