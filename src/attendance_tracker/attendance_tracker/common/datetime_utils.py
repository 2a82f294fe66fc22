from __future__ import annotations

import math
from datetime import datetime


def now_local() -> datetime:
    """Current local time, truncated to whole seconds.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().replace(microsecond=0)


def elapsed_seconds(start: datetime, end: datetime) -> int:
    """Whole seconds between two timestamps (floor rounding)."""
    return math.floor((end - start).total_seconds())


def isoformat_or_none(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None
