"""Property record as read from the ledger."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

EMPTY_ADDRESS = "0x0000000000000000000000000000000000000000"


class PropertyRecord(BaseModel):
    """One listed asset, identified by the index the ledger assigned at creation."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: int = Field(ge=0)
    owner: str
    property_address: str
    property_type: str
    image_url: str = Field(alias="imageURL")
    price: int = Field(ge=0)
    for_sale: bool
    rent_payment: int = Field(ge=0)
    for_rent: bool

    @field_validator("owner")
    @classmethod
    def validate_owner(cls, v: str) -> str:
        """An existing record always has a real owner."""
        if not v or v == EMPTY_ADDRESS:
            raise ValueError("Property owner cannot be the empty identity")
        return v

    @property
    def has_action(self) -> bool:
        """Whether a non-owner can do anything with this record."""
        return self.for_sale or self.for_rent
