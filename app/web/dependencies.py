"""Web-specific dependencies: marketplace services and flash messages."""

from fastapi import Request

from app.services.dispatcher import MutationDispatcher
from app.services.sync import SyncOrchestrator


def get_orchestrator(request: Request) -> SyncOrchestrator:
    """Get the application's sync orchestrator."""
    return request.app.state.orchestrator


def get_dispatcher(request: Request) -> MutationDispatcher:
    """Get the application's mutation dispatcher."""
    return request.app.state.dispatcher


def get_flash_messages(request: Request) -> list[dict]:
    """Get and clear flash messages from session."""
    messages = request.session.pop("flash_messages", [])
    return messages


def add_flash_message(request: Request, message: str, category: str = "info") -> None:
    """Add a flash message to the session."""
    if "flash_messages" not in request.session:
        request.session["flash_messages"] = []
    request.session["flash_messages"].append({"message": message, "category": category})
