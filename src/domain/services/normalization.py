"""Domain normalization helpers."""

import json
from collections.abc import Mapping
from datetime import date, datetime

from src.domain.models.records import AdditionalTax


def normalize_status(status: str | None) -> str | None:
    """Normalize document status values.

    Args:
        status: Raw status value from a repository.

    Returns:
        str | None: Lower-cased status, or None when empty.
    """
    if not status:
        return None
    cleaned = str(status).strip()
    return cleaned.lower() if cleaned else None


def normalize_tax_name(name: str | None) -> str | None:
    """Normalize additional tax labels.

    Args:
        name: Raw tax label, e.g. ``"irpf 15%"``.

    Returns:
        str | None: Upper-cased label, or None when empty.
    """
    if not name:
        return None
    cleaned = str(name).strip()
    return cleaned.upper() if cleaned else None


def coerce_date(value) -> date | None:
    """Normalize record dates.

    Args:
        value: ``date``, ``datetime`` or ISO formatted string.

    Returns:
        date | None: Parsed date.

    Raises:
        ValueError: If a non-empty value cannot be parsed.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            return date.fromisoformat(text[:10])
    raise ValueError(f"Unsupported date value: {value!r}")


def parse_additional_taxes(raw) -> list[AdditionalTax]:
    """Parse the additional tax lines stored on a document.

    Upstream stores them as a JSON string or a list of mappings such as
    ``{"name": "IRPF", "amount": -15, "isPercentage": true}``. Historically
    the percentage lived under ``rate`` on invoices and under ``amount`` on
    expenses, with the exact money value in ``value``.

    Args:
        raw: JSON string, list of mappings, list of AdditionalTax or None.

    Returns:
        list[AdditionalTax]: Parsed tax lines.

    Raises:
        ValueError: If the payload is not a list of tax lines.
    """
    if raw is None or raw == "":
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid additional taxes JSON: {exc}") from exc
        if raw is None:
            return []
    if not isinstance(raw, (list, tuple)):
        raise ValueError(
            f"Additional taxes must be a list, got {type(raw).__name__}"
        )

    taxes: list[AdditionalTax] = []
    for item in raw:
        if isinstance(item, AdditionalTax):
            taxes.append(item)
            continue
        if not isinstance(item, Mapping):
            raise ValueError(f"Invalid additional tax line: {item!r}")
        taxes.append(_tax_from_mapping(item))
    return taxes


def _tax_from_mapping(item: Mapping) -> AdditionalTax:
    name = normalize_tax_name(item.get("name")) or ""
    is_percentage = bool(item.get("isPercentage", item.get("is_percentage", True)))
    rate = item.get("rate")
    amount = item.get("value")
    if rate is None and is_percentage:
        rate = item.get("amount")
    elif amount is None:
        amount = item.get("amount")
    return AdditionalTax(
        name=name,
        rate=rate,
        amount=amount,
        is_percentage=is_percentage,
    )


__all__ = [
    "normalize_status",
    "normalize_tax_name",
    "coerce_date",
    "parse_additional_taxes",
]
