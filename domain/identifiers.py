"""
Domain: Human-readable record identifiers.

Identifiers have the form <PREFIX>-<YYYYMMDD>-<NNN>:
- YYYYMMDD is the UTC date at generation time.
- NNN is a zero-padded sequence, one more than the highest sequence already
  used under the same prefix and date.

The sequence is derived from the identifiers passed in, so it survives process
restarts. Two callers deriving from the same snapshot still get the same
number; generation must be serialized by the caller.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Iterable

from .time import require_utc_timestamp

INQUIRY_PREFIX = "INQ"
OFFER_PREFIX = "OFF"

_SEQUENCE_WIDTH = 3


def date_prefix(prefix: str, now: datetime) -> str:
    """Identifier prefix for the given instant, e.g. ``INQ-20250101``."""

    require_utc_timestamp("now", now)
    return f"{prefix}-{now:%Y%m%d}"


def next_daily_id(prefix: str, existing_ids: Iterable[str], now: datetime) -> str:
    """
    Compute the next identifier for `prefix` on the UTC date of `now`.

    Identifiers from other days or with a different prefix are ignored.
    """

    day_prefix = date_prefix(prefix, now)
    pattern = re.compile(rf"^{re.escape(day_prefix)}-(\d+)$")

    max_sequence = 0
    for record_id in existing_ids:
        match = pattern.match(record_id)
        if match:
            max_sequence = max(max_sequence, int(match.group(1)))

    return f"{day_prefix}-{max_sequence + 1:0{_SEQUENCE_WIDTH}d}"


__all__ = ["INQUIRY_PREFIX", "OFFER_PREFIX", "date_prefix", "next_daily_id"]
