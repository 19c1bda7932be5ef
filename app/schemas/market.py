"""View-models produced by the renderer and consumed by templates and the JSON API."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from app.models.enums import ActionKind, ViewKind
from app.models.property import PropertyRecord


class ActionControl(BaseModel):
    """A buy or rent control bound to one record."""

    kind: ActionKind
    amount: int
    display_amount: Decimal


class PublicCard(BaseModel):
    """Card for a record the viewer does not own and can act on."""

    kind: Literal[ViewKind.PUBLIC_CARD] = ViewKind.PUBLIC_CARD
    record: PropertyRecord
    actions: list[ActionControl]

    def action(self, kind: ActionKind) -> ActionControl | None:
        """Return the control of the given kind, if the card offers it."""
        return next((a for a in self.actions if a.kind == kind), None)


class NoActionCard(BaseModel):
    """Display-only card: neither for sale nor for rent."""

    kind: Literal[ViewKind.NO_ACTION_CARD] = ViewKind.NO_ACTION_CARD
    record: PropertyRecord


class EditFormValues(BaseModel):
    """Current listing terms, pre-filled into the owner's edit form."""

    price: Decimal
    for_sale: bool
    rent_payment: Decimal
    for_rent: bool


class OwnedForm(BaseModel):
    """Editable view of a record owned by the viewer."""

    kind: Literal[ViewKind.OWNED_FORM] = ViewKind.OWNED_FORM
    record: PropertyRecord
    form: EditFormValues


ListedView = Annotated[PublicCard | NoActionCard, Field(discriminator="kind")]


class MarketSnapshot(BaseModel):
    """Rendered output of one sync cycle."""

    viewer: str
    count: int
    owned: list[OwnedForm]
    listed: list[ListedView]
    refreshed_at: datetime

    def find_listed(self, property_id: int) -> PublicCard | NoActionCard | None:
        """Find a not-owned card by property id."""
        return next((v for v in self.listed if v.record.id == property_id), None)

    def find_owned(self, property_id: int) -> OwnedForm | None:
        """Find an owned form by property id."""
        return next((v for v in self.owned if v.record.id == property_id), None)
