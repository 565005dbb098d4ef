"""Strict calendar-date parsing shared by metadata extraction and filters."""

from __future__ import annotations

import re
from datetime import date

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_iso_date(value: str) -> date | None:
    """Parse *value* as ``YYYY-MM-DD``, returning ``None`` if it is not one.

    Only the exact zero-padded form is accepted; week dates, compact forms
    and timestamps are rejected.

    Examples:
        >>> parse_iso_date("2024-01-15")
        datetime.date(2024, 1, 15)
        >>> parse_iso_date("2024-02-30") is None
        True
    """
    if not _ISO_DATE.fullmatch(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None
