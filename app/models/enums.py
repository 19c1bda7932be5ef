"""Enum definitions for marketplace views and sync state."""

from enum import Enum


class ViewKind(str, Enum):
    """Which view a property record is rendered as."""

    PUBLIC_CARD = "public_card"  # Not owned, at least one action
    NO_ACTION_CARD = "no_action_card"  # Not owned, neither for sale nor for rent
    OWNED_FORM = "owned_form"  # Owned by the viewer, editable


class ActionKind(str, Enum):
    """Mutating intent a public card can trigger."""

    BUY = "buy"
    RENT = "rent"


class SyncState(str, Enum):
    """Lifecycle of the sync orchestrator."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    REFRESHING = "refreshing"
