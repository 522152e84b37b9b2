"""
Price formatting helpers.

Money moves through the engine as integer cents. Conversion to euros only
happens here, for display, using Decimal so no float ever carries a price.
"""
from decimal import Decimal, ROUND_HALF_EVEN, InvalidOperation, localcontext

CENTS_PER_EURO = 100
TWO_PLACES = Decimal("0.01")
BASE_PRECISION = 28


def to_decimal(value) -> Decimal:
    """Decimal for a money value; unparseable or non-finite input becomes 0."""
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        # Decimal(int) is exact and avoids the int → str digit limit
        result = Decimal(value)
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            return Decimal(0)
    if not result.is_finite():
        return Decimal(0)
    return result


def working_precision(*values: Decimal) -> int:
    """Context precision that keeps products and quantizes of these values exact."""
    return BASE_PRECISION + sum(
        len(v.as_tuple().digits) + abs(v.adjusted()) for v in values
    )


def cents_to_euros(cents) -> Decimal:
    """Convert cents to a euro Decimal (300 -> Decimal('3.00'))."""
    value = to_decimal(cents)
    with localcontext() as ctx:
        ctx.prec = working_precision(value)
        return (value / CENTS_PER_EURO).quantize(TWO_PLACES, rounding=ROUND_HALF_EVEN)


def euros_to_cents(euros) -> int:
    """Convert a euro amount ("12.50", 12.5, Decimal) to integer cents."""
    value = to_decimal(euros)
    with localcontext() as ctx:
        ctx.prec = working_precision(value)
        return int((value * CENTS_PER_EURO).quantize(Decimal(1), rounding=ROUND_HALF_EVEN))


def format_display(cents, symbol: str = "€") -> str:
    """
    Render cents as a euro string with symbol and two decimals.

    format_display(300) -> "€3.00", format_display(1250) -> "€12.50".
    None and unparseable input render as zero.
    """
    if cents is None:
        cents = 0
    return f"{symbol}{cents_to_euros(cents)}"
