import math


def round_half_up(value: float, places: int = 2) -> float:
    """Round half away from -inf on the scaled value: 2.345 -> 2.35, -2.5 -> -2 (places=0).

    Values that are not finite, or overflow when scaled, are returned unchanged.
    """
    factor = 10**places
    scaled = value * factor + 0.5
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / factor


def to_number(value) -> float:
    """Coerce a loosely-typed value to float; missing, unparseable and non-finite values become 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def format_currency(amount: float) -> str:
    """Format an amount as a dollar string: 1234.5 -> '$1,234.50'"""
    if amount < 0:
        return f"-${-amount:,.2f}"
    return f"${amount:,.2f}"


def parse_amount(value: str) -> float | None:
    """Parse a user-typed number like '1,234.50' or '120'. Returns None if invalid."""
    value = value.strip().replace("$", "").replace(",", "")
    if not value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number
