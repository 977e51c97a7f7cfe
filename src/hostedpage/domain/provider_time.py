"""Conversions between local datetimes and the provider's time unit.

The provider expresses timestamps as integer milliseconds since the Unix
epoch. Local values are timezone-aware UTC ``datetime`` objects.
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Callable, Optional

_INTEGER_RE = re.compile(r"[+-]?\d+")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_provider_time(dt: datetime) -> int:
    """Milliseconds since epoch, truncated to an integer."""
    return int(dt.timestamp() * 1000)


def from_provider_time(value: int | float | str) -> datetime:
    """Convert provider milliseconds (number or numeric string) to a datetime.

    Fractional seconds are preserved.

    Raises:
        ValueError: If ``value`` is not a valid provider timestamp.
    """
    millis = parse_provider_time(value)
    if millis is None:
        raise ValueError(f"Invalid provider timestamp: {value!r}")
    return datetime.fromtimestamp(millis / 1000.0, tz=timezone.utc)


def parse_provider_time(value: object) -> Optional[int]:
    """Parse a provider timestamp, returning None when it is not one.

    Accepts ints, integral floats and strings of digits with an optional
    sign. Booleans are rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        return int(value)
    if isinstance(value, str):
        stripped = value.strip()
        if not _INTEGER_RE.fullmatch(stripped):
            return None
        return int(stripped)
    return None


def now_in_provider_time(clock: Callable[[], datetime] = utc_now) -> int:
    return to_provider_time(clock())
