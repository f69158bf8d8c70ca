from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation


def to_minor_units(amount: Decimal | str | int, *, digits: int = 2) -> int:
    """Convert a user-facing decimal amount into an integer count of minor units.

    Rounds half-up at the minor-unit boundary, so "10.505" becomes 1051 with two
    digits. Floats are refused: by the time they arrive the rounding error has
    already happened.
    """
    if isinstance(amount, bool) or isinstance(amount, float):
        raise TypeError("amount must be a Decimal, str or int")
    try:
        value = Decimal(amount.strip() if isinstance(amount, str) else amount)
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {amount!r}") from e
    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")
    scaled = (value * (Decimal(10) ** digits)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(scaled)


def format_minor_units(value: int, *, currency: str, digits: int = 2) -> str:
    sign = "-" if value < 0 else ""
    major, minor = divmod(abs(value), 10**digits)
    if digits:
        return f"{sign}{currency} {major:,}.{minor:0{digits}d}"
    return f"{sign}{currency} {major:,}"
