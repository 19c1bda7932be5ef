"""Seed script to populate an empty ledger with sample listings."""

import asyncio

from app.core.config import settings
from app.schemas.listing import ListingFields
from app.services.dispatcher import build_listing_payload
from app.services.ledger import HttpLedger, Ledger

SAMPLE_LISTINGS = [
    ListingFields(
        property_address="123 Main Street, Springfield",
        property_type="Detached house",
        image_url="https://images.example.com/main-street.jpg",
        price="12.5",
        for_sale=True,
    ),
    ListingFields(
        property_address="4B Harbour View, Port Town",
        property_type="Apartment",
        image_url="https://images.example.com/harbour-view.jpg",
        price="0",
        rent_payment="0.35",
        for_rent=True,
    ),
    ListingFields(
        property_address="Old Mill Lane 7, Brookfield",
        property_type="Cottage",
        image_url="https://images.example.com/old-mill.jpg",
        price="4",
        rent_payment="0.1",
        for_sale=True,
        for_rent=True,
    ),
]


async def seed_listings(ledger: Ledger) -> int:
    """Submit the sample listings as the active account. Returns how many were created."""
    if await ledger.get_count() > 0:
        print("Ledger already has properties. Skipping seed.")
        return 0

    owner = await ledger.get_active_identity()
    print(f"Seeding listings as {owner}...")

    for fields in SAMPLE_LISTINGS:
        await ledger.submit_listing(build_listing_payload(fields), owner)
        print(f"Listed: {fields.property_type} at {fields.property_address}")

    print(f"\nSeeded {len(SAMPLE_LISTINGS)} listings.")
    return len(SAMPLE_LISTINGS)


async def main() -> None:
    ledger = HttpLedger.from_settings(settings)
    try:
        await seed_listings(ledger)
    finally:
        await ledger.aclose()


if __name__ == "__main__":
    asyncio.run(main())
