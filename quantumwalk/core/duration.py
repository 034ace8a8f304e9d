from __future__ import annotations
from typing import List
import re

from quantumwalk.core.errors import HashFailure, InvalidInput

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR

MAX_INTERVAL_MS = 7 * MS_PER_DAY  # 604_800_000

# Leading 64 bits of the digest drive the duration
PREFIX_HEX_CHARS = 16
MAX_UINT64 = (1 << 64) - 1

_UNIT_MS = {"d": MS_PER_DAY, "h": MS_PER_HOUR, "m": MS_PER_MINUTE, "s": MS_PER_SECOND}
_HEX_PREFIX = re.compile(r"^[0-9a-fA-F]{16}$")
_TOKEN = re.compile(r"(\d+\.?\d*)\s*([dhms])", re.IGNORECASE)


def hash_to_duration(digest: str, max_interval: int = MAX_INTERVAL_MS) -> int:
    """
    Map a hex digest to an integer duration in [0, max_interval).

    duration = floor(h * max_interval / (2**64 - 1)) where h is the unsigned value of
    the first 16 hex characters. Python ints keep the product exact at any size.
    The all-ones prefix would land exactly on max_interval and is pulled back by one.
    """
    max_interval = int(max_interval)
    if max_interval <= 0:
        raise InvalidInput(f"max_interval must be positive, got {max_interval}")
    prefix = digest[:PREFIX_HEX_CHARS]
    if len(prefix) < PREFIX_HEX_CHARS:
        raise HashFailure(f"digest too short to derive a duration: {digest!r}")
    # int(x, 16) would also accept "0x", "_" and whitespace
    if not _HEX_PREFIX.match(prefix):
        raise HashFailure(f"digest is not hexadecimal: {digest!r}")
    h = int(prefix, 16)
    duration = (h * max_interval) // MAX_UINT64
    if duration >= max_interval:
        duration = max_interval - 1
    return duration


def format_duration(duration_ms: int) -> str:
    days = duration_ms // MS_PER_DAY
    hours = (duration_ms % MS_PER_DAY) // MS_PER_HOUR
    minutes = (duration_ms % MS_PER_HOUR) // MS_PER_MINUTE
    seconds = (duration_ms % MS_PER_MINUTE) // MS_PER_SECOND

    parts: List[str] = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if seconds > 0 or not parts:
        parts.append(f"{seconds}s")
    return " ".join(parts)


def parse_duration(text: str) -> int:
    """Sum every `<number><unit>` token (d/h/m/s). Anything else is ignored."""
    total = 0.0
    for value, unit in _TOKEN.findall(text or ""):
        total += float(value) * _UNIT_MS[unit.lower()]
    return int(total)


def parse_interval_string(text: str) -> List[int]:
    """Parse "3d 14h 23m, 2.5d, 48h" into millisecond intervals, dropping empty entries."""
    intervals: List[int] = []
    for part in (text or "").split(","):
        ms = parse_duration(part.strip())
        if ms > 0:
            intervals.append(ms)
    return intervals
