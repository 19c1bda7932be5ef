"""Add-listing web routes."""

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError

from app.core.exceptions import MarketError, ResyncFailure
from app.schemas.listing import ListingFields
from app.services.dispatcher import MutationDispatcher
from app.web.dependencies import add_flash_message, get_dispatcher
from app.web.template_config import templates

router = APIRouter()


@router.get("/new", response_class=HTMLResponse, response_model=None)
async def create_listing_page(request: Request) -> HTMLResponse:
    """Display the add-listing form."""
    return templates.TemplateResponse(
        request,
        "listings/create.html",
        {"values": {"price": "0", "rent_payment": "0"}},
    )


@router.post("/new", response_class=HTMLResponse, response_model=None)
async def create_listing_submit(
    request: Request,
    property_address: str = Form(""),
    property_type: str = Form(""),
    image_url: str = Form(""),
    price: str = Form("0"),
    rent_payment: str = Form("0"),
    for_sale: bool = Form(False),
    for_rent: bool = Form(False),
    dispatcher: MutationDispatcher = Depends(get_dispatcher),
) -> HTMLResponse | RedirectResponse:
    """Process the add-listing form."""
    values = {
        "property_address": property_address,
        "property_type": property_type,
        "image_url": image_url,
        "price": price,
        "rent_payment": rent_payment,
        "for_sale": for_sale,
        "for_rent": for_rent,
    }

    try:
        fields = ListingFields(**values)
        await dispatcher.create_or_edit_listing(fields)
    except ValidationError:
        error = "Address and property type are required."
    except ResyncFailure as exc:
        add_flash_message(
            request,
            f"Listing '{fields.property_address}' submitted, but the view could not be refreshed: {exc}",
            "warning",
        )
        return RedirectResponse("/", status_code=303)
    except MarketError as exc:
        error = str(exc)
    else:
        add_flash_message(request, f"Listing '{fields.property_address}' submitted!", "success")
        return RedirectResponse("/", status_code=303)

    return templates.TemplateResponse(
        request,
        "listings/create.html",
        {"values": values, "error": error},
        status_code=400,
    )
