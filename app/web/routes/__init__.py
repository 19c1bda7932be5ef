"""Web routes package."""

from fastapi import APIRouter

from app.web.routes import listings, market

web_router = APIRouter()

web_router.include_router(market.router, tags=["web-market"])
web_router.include_router(listings.router, prefix="/listings", tags=["web-listings"])
