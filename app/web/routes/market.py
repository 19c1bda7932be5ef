"""Marketplace web routes: listing page, refresh and per-property actions."""

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError

from app.core.exceptions import MarketError, ResyncFailure
from app.models.enums import ActionKind
from app.schemas.listing import ListingFields
from app.schemas.market import PublicCard
from app.services.dispatcher import MutationDispatcher
from app.services.sync import SyncOrchestrator
from app.web.dependencies import (
    add_flash_message,
    get_dispatcher,
    get_flash_messages,
    get_orchestrator,
)
from app.web.template_config import templates

router = APIRouter()


def _public_card(orchestrator: SyncOrchestrator, property_id: int) -> PublicCard | None:
    """Find the card a buy/rent trigger refers to in the current snapshot."""
    if orchestrator.snapshot is None:
        return None
    card = orchestrator.snapshot.find_listed(property_id)
    if isinstance(card, PublicCard):
        return card
    return None


@router.get("/", response_class=HTMLResponse, response_model=None)
async def market(
    request: Request,
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
) -> HTMLResponse:
    """Marketplace page: properties on offer and the viewer's own properties."""
    return templates.TemplateResponse(
        request,
        "market/index.html",
        {
            "snapshot": orchestrator.snapshot,
            "state": orchestrator.state,
            "messages": get_flash_messages(request),
        },
    )


@router.post("/refresh", response_class=HTMLResponse, response_model=None)
async def refresh(
    request: Request,
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
) -> RedirectResponse:
    """Re-synchronize the marketplace with the ledger."""
    try:
        await orchestrator.refresh()
    except MarketError as exc:
        add_flash_message(request, f"Could not refresh properties: {exc}", "error")
    return RedirectResponse("/", status_code=303)


async def _act(
    request: Request,
    property_id: int,
    kind: ActionKind,
    orchestrator: SyncOrchestrator,
    dispatcher: MutationDispatcher,
) -> RedirectResponse:
    card = _public_card(orchestrator, property_id)
    if card is None or card.action(kind) is None:
        add_flash_message(
            request,
            f"Property {property_id} is not available to {kind.value}.",
            "error",
        )
        return RedirectResponse("/", status_code=303)

    verb = "Bought" if kind is ActionKind.BUY else "Rented"
    try:
        if kind is ActionKind.BUY:
            await dispatcher.buy(card.record)
        else:
            await dispatcher.rent(card.record)
    except ResyncFailure as exc:
        add_flash_message(
            request,
            f"{verb} {card.record.property_address}, but the view could not be refreshed: {exc}",
            "warning",
        )
        return RedirectResponse("/", status_code=303)
    except MarketError as exc:
        add_flash_message(request, f"Could not {kind.value} property {property_id}: {exc}", "error")
        return RedirectResponse("/", status_code=303)

    add_flash_message(request, f"{verb} {card.record.property_address}!", "success")
    return RedirectResponse("/", status_code=303)


@router.post("/properties/{property_id}/buy", response_class=HTMLResponse, response_model=None)
async def buy_property(
    request: Request,
    property_id: int,
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
    dispatcher: MutationDispatcher = Depends(get_dispatcher),
) -> RedirectResponse:
    """Buy a property listed for sale."""
    return await _act(request, property_id, ActionKind.BUY, orchestrator, dispatcher)


@router.post("/properties/{property_id}/rent", response_class=HTMLResponse, response_model=None)
async def rent_property(
    request: Request,
    property_id: int,
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
    dispatcher: MutationDispatcher = Depends(get_dispatcher),
) -> RedirectResponse:
    """Rent a property listed for rent."""
    return await _act(request, property_id, ActionKind.RENT, orchestrator, dispatcher)


@router.post("/properties/{property_id}/edit", response_class=HTMLResponse, response_model=None)
async def edit_property(
    request: Request,
    property_id: int,
    price: str = Form(...),
    rent_payment: str = Form("0"),
    for_sale: bool = Form(False),
    for_rent: bool = Form(False),
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
    dispatcher: MutationDispatcher = Depends(get_dispatcher),
) -> RedirectResponse:
    """Update the sale and rent terms of a property the viewer owns."""
    owned = orchestrator.snapshot.find_owned(property_id) if orchestrator.snapshot else None
    if owned is None:
        add_flash_message(request, f"You do not own property {property_id}.", "error")
        return RedirectResponse("/", status_code=303)

    try:
        fields = ListingFields(
            property_id=property_id,
            property_address=owned.record.property_address,
            property_type=owned.record.property_type,
            image_url=owned.record.image_url,
            price=price,
            rent_payment=rent_payment,
            for_sale=for_sale,
            for_rent=for_rent,
        )
        await dispatcher.create_or_edit_listing(fields)
    except ValidationError as exc:
        add_flash_message(request, f"Could not update property {property_id}: {exc}", "error")
        return RedirectResponse("/", status_code=303)
    except ResyncFailure as exc:
        add_flash_message(
            request,
            f"Property {property_id} updated, but the view could not be refreshed: {exc}",
            "warning",
        )
        return RedirectResponse("/", status_code=303)
    except MarketError as exc:
        add_flash_message(request, f"Could not update property {property_id}: {exc}", "error")
        return RedirectResponse("/", status_code=303)

    add_flash_message(request, "Property updated successfully!", "success")
    return RedirectResponse("/", status_code=303)
