"""Exception hierarchy for the marketplace client."""


class MarketError(Exception):
    """Base exception for all marketplace client errors."""


class ReadFailure(MarketError):
    """Raised when a count, record or identity read from the ledger fails."""


class SubmissionFailure(MarketError):
    """Raised when the ledger rejects or never receives a buy, rent or listing intent."""


class ConversionFailure(MarketError):
    """Raised when a display amount cannot be expressed exactly in the smallest unit."""


class ResyncFailure(ReadFailure):
    """Raised when a mutation was accepted but the follow-up refresh failed."""
