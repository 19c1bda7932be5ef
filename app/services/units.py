"""Exact conversion between the ledger's smallest payment unit and display units."""

from decimal import Decimal, Inexact, InvalidOperation, localcontext

from app.core.config import settings
from app.core.exceptions import ConversionFailure

# Ledger amounts are unsigned 256-bit integers.
MAX_AMOUNT = 2**256 - 1
_MAX_DIGITS = len(str(MAX_AMOUNT))


def _context_precision(value: Decimal, decimals: int) -> int:
    """Enough significant digits to scale ``value`` by 10**decimals without rounding."""
    return max(28, len(value.as_tuple().digits) + abs(decimals) + 1)


def to_smallest_unit(amount: str | Decimal | int, decimals: int | None = None) -> int:
    """Convert a display amount (e.g. "1.5" ETH) to an integer of smallest units.

    Raises ConversionFailure for empty, non-numeric, negative or non-finite input,
    for amounts with more fractional digits than the unit supports and for
    amounts above MAX_AMOUNT.
    """
    if decimals is None:
        decimals = settings.PAYMENT_UNIT_DECIMALS

    if isinstance(amount, str):
        text = amount.strip()
        if not text:
            raise ConversionFailure("Amount is required")
        try:
            value = Decimal(text)
        except InvalidOperation as exc:
            raise ConversionFailure(f"'{amount}' is not a number") from exc
    else:
        value = Decimal(amount)

    if not value.is_finite():
        raise ConversionFailure(f"'{amount}' is not a finite amount")
    if value < 0:
        raise ConversionFailure(f"Amount cannot be negative: {amount}")
    if value and value.adjusted() + decimals >= _MAX_DIGITS:
        raise ConversionFailure(f"{amount} exceeds the largest amount the ledger accepts")

    with localcontext() as ctx:
        ctx.prec = _context_precision(value, decimals)
        ctx.traps[Inexact] = True
        try:
            scaled = value.scaleb(decimals)
            integral = scaled.to_integral_exact()
        except Inexact as exc:
            raise ConversionFailure(
                f"{amount} has more than {decimals} decimal places"
            ) from exc

    result = int(integral)
    if result > MAX_AMOUNT:
        raise ConversionFailure(f"{amount} exceeds the largest amount the ledger accepts")
    return result


def to_display_unit(amount: int, decimals: int | None = None) -> Decimal:
    """Convert an integer of smallest units to an exact display amount."""
    if decimals is None:
        decimals = settings.PAYMENT_UNIT_DECIMALS
    if amount < 0:
        raise ConversionFailure(f"Amount cannot be negative: {amount}")

    value = Decimal(amount)
    with localcontext() as ctx:
        ctx.prec = _context_precision(value, decimals)
        return value.scaleb(-decimals).normalize()


def format_amount(value: Decimal) -> str:
    """Plain notation without trailing zeros: Decimal("1E+1") -> "10"."""
    with localcontext() as ctx:
        ctx.prec = max(28, len(value.as_tuple().digits))
        return f"{value.normalize():f}"
