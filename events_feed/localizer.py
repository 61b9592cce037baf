"""Conversion of event instants to local display strings."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def resolve_timezone(name: str) -> tzinfo:
    """Return the zone called ``name``, or UTC when it cannot be loaded."""
    if not name:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        logger.debug("Unknown timezone %r, falling back to UTC: %s", name, exc)
        return timezone.utc


def format_short_date(value: datetime) -> str:
    """Format as ``Sep 9, 2001``, independent of the process locale."""
    return f"{_MONTHS[value.month - 1]} {value.day}, {value.year:04d}"


def format_rfc3339(value: datetime) -> str:
    text = value.isoformat(timespec="seconds")
    if value.utcoffset() == timedelta(0):
        text = text[: -len("+00:00")] + "Z"
    return text


def localize(epoch_millis: int, zone_name: str) -> Tuple[str, str]:
    """Return ``(short_date, rfc3339_timestamp)`` for an instant in a zone.

    ``epoch_millis`` counts milliseconds since the UTC epoch; sub-second
    precision is dropped.
    """
    seconds = int(epoch_millis / 1000)
    instant = datetime.fromtimestamp(seconds, tz=timezone.utc)
    local = instant.astimezone(resolve_timezone(zone_name))
    return format_short_date(local), format_rfc3339(local)
