"""Shared utility functions used across components."""

from datetime import date, datetime
from typing import Any


def parse_date(value: Any) -> date | None:
    """Parse an ISO date (or datetime) string from a store row; None when unparsable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def normalize_title(value: str | None) -> str:
    """Join key for job titles: trimmed and lower-cased."""
    return (value or "").strip().lower()


def link_ids(value: Any) -> list[int]:
    """Ids of a link-row field.

    The store returns links as ``[{"id": 3, "value": "..."}]`` but rows
    written by this service may carry plain ``[3]``; both are accepted.
    """
    if not isinstance(value, list):
        return []
    ids: list[int] = []
    for item in value:
        raw = item.get("id") if isinstance(item, dict) else item
        if isinstance(raw, bool):
            continue
        try:
            ids.append(int(raw))
        except (TypeError, ValueError):
            continue
    return ids


def select_value(value: Any) -> str | None:
    """Value of a single-select field, returned either as a string or as ``{"id", "value"}``."""
    if isinstance(value, dict):
        value = value.get("value")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
