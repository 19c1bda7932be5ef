"""Listing intent schemas."""

from decimal import Decimal

from pydantic import BaseModel, field_validator, model_validator


class ListingFields(BaseModel):
    """Create or edit intent as entered by the owner, amounts in display units.

    ``property_id`` is None for a new listing. Amounts are kept as entered and
    converted to the smallest unit only when the intent is dispatched.
    """

    property_id: int | None = None
    property_address: str
    property_type: str
    image_url: str = ""
    price: str | Decimal
    rent_payment: str | Decimal = "0"
    for_sale: bool = False
    for_rent: bool = False

    @field_validator("property_address", "property_type")
    @classmethod
    def strip_identification(cls, v: str) -> str:
        return v.strip()

    @model_validator(mode="after")
    def validate_new_listing(self) -> "ListingFields":
        """A new listing needs an address and a type.

        Edits carry whatever the ledger already holds for those fields, blank
        or not, since the edit form only changes terms.
        """
        if self.property_id is None:
            if not self.property_address:
                raise ValueError("Property address cannot be empty")
            if not self.property_type:
                raise ValueError("Property type cannot be empty")
        return self
