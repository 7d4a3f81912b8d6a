"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def parse_decimal(value) -> Decimal:
    """Parse a loosely formatted amount into a finite Decimal.

    Accepts Decimal, int, float and strings such as ``"1210.50"``,
    ``"1.210,50"`` or ``"42,00 €"``.

    Args:
        value: Raw amount as stored upstream.

    Returns:
        Decimal: Parsed value, ``0`` when the value is ``None``.

    Raises:
        ValueError: If the value is not a finite number.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, bool):
        raise ValueError(f"Boolean is not an amount: {value!r}")
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, (int, float)):
        parsed = Decimal(str(value))
    elif isinstance(value, str):
        parsed = _parse_amount_string(value)
    else:
        raise ValueError(f"Unsupported amount type: {type(value).__name__}")
    if not parsed.is_finite():
        raise ValueError(f"Amount is not finite: {value!r}")
    return parsed


def _parse_amount_string(raw: str) -> Decimal:
    cleaned = raw.replace("€", "").replace(" ", "").replace(" ", "")
    if not cleaned:
        raise ValueError("Empty amount string")
    if "," in cleaned and "." in cleaned:
        if cleaned.rfind(",") > cleaned.rfind("."):
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")
    elif cleaned.count(",") == 1:
        cleaned = cleaned.replace(",", ".")
    try:
        return Decimal(cleaned)
    except InvalidOperation as exc:
        raise ValueError(f"Unparseable amount: {raw!r}") from exc


def quantize_currency(value: Decimal) -> Decimal:
    """Round a currency amount to cents using round-half-up.

    Args:
        value: Exact amount.

    Returns:
        Decimal: Amount rounded to two decimal places.
    """
    return coerce_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


__all__ = ["CENT", "coerce_decimal", "parse_decimal", "quantize_currency"]
