"""Turn classified property records into view-models.

Rendering never talks to the ledger. Actions are described by ActionControl
values; the web layer binds them to dispatcher calls.
"""

from collections.abc import Iterable
from datetime import UTC, datetime

from app.models.enums import ActionKind
from app.models.property import PropertyRecord
from app.schemas.market import (
    ActionControl,
    EditFormValues,
    MarketSnapshot,
    NoActionCard,
    OwnedForm,
    PublicCard,
)
from app.services.units import to_display_unit


def _action(kind: ActionKind, amount: int) -> ActionControl:
    return ActionControl(kind=kind, amount=amount, display_amount=to_display_unit(amount))


def render_public(record: PropertyRecord) -> PublicCard | NoActionCard:
    """Card for a record the viewer does not own."""
    if not record.has_action:
        return NoActionCard(record=record)

    actions: list[ActionControl] = []
    if record.for_sale:
        actions.append(_action(ActionKind.BUY, record.price))
    if record.for_rent:
        actions.append(_action(ActionKind.RENT, record.rent_payment))
    return PublicCard(record=record, actions=actions)


def render_owned(record: PropertyRecord) -> OwnedForm:
    """Edit form for a record the viewer owns, pre-filled with its current terms."""
    return OwnedForm(
        record=record,
        form=EditFormValues(
            price=to_display_unit(record.price),
            for_sale=record.for_sale,
            rent_payment=to_display_unit(record.rent_payment),
            for_rent=record.for_rent,
        ),
    )


def render_market(
    viewer: str,
    count: int,
    owned: Iterable[PropertyRecord],
    not_owned: Iterable[PropertyRecord],
) -> MarketSnapshot:
    """Render both lists of one sync cycle."""
    return MarketSnapshot(
        viewer=viewer,
        count=count,
        owned=[render_owned(record) for record in owned],
        listed=[render_public(record) for record in not_owned],
        refreshed_at=datetime.now(UTC),
    )
