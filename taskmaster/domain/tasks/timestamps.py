# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Server-side time stamping, deadline parsing and deadline classification."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from enum import StrEnum
from functools import lru_cache
from zoneinfo import ZoneInfo

DISPLAY_FORMAT = "%d %b %Y, %I:%M %p"


class DeadlineState(StrEnum):
    OVERDUE = "overdue"
    DUE_SOON = "due-soon"
    UPCOMING = "upcoming"


@lru_cache(maxsize=8)
def _zone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def utc_now() -> datetime:
    return datetime.now(UTC)


def format_display(moment: datetime, tz_name: str) -> str:
    """Render ``moment`` in the fixed display timezone, e.g. ``19 Oct 2026, 03:45 pm``."""
    local = moment.astimezone(_zone(tz_name))
    text = local.strftime(DISPLAY_FORMAT)
    return text[:-2] + text[-2:].lower()


def parse_deadline(raw: object, tz_name: str) -> datetime | None:
    """Normalize a deadline input to an aware UTC datetime.

    Accepts ``YYYY-MM-DDTHH:MM`` as sent by a datetime-local input (optionally
    space separated and with seconds) as well as full ISO-8601 timestamps.
    Naive values are read in the display timezone. Anything else yields None.
    """
    if isinstance(raw, datetime):
        parsed = raw
    elif isinstance(raw, str):
        text = raw.strip().replace(" ", "T", 1)
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=_zone(tz_name))
    try:
        return parsed.astimezone(UTC)
    except OverflowError:
        # Shifting to UTC can leave the datetime range near year 1 or 9999.
        return None


def classify_deadline(
    deadline: datetime, now: datetime, *, due_soon: timedelta
) -> DeadlineState:
    if now > deadline:
        return DeadlineState.OVERDUE
    if deadline - now <= due_soon:
        return DeadlineState.DUE_SOON
    return DeadlineState.UPCOMING


__all__ = [
    "DISPLAY_FORMAT",
    "DeadlineState",
    "classify_deadline",
    "format_display",
    "parse_deadline",
    "utc_now",
]
