from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from quantumwalk.core.duration import MAX_INTERVAL_MS
from quantumwalk.core.errors import InvalidInput

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def iso_from_millis(timestamp: int) -> str:
    dt = EPOCH + timedelta(milliseconds=int(timestamp))
    return dt.strftime("%Y-%m-%dT%H:%M:%S") + f".{dt.microsecond // 1000:03d}Z"


def to_millis(value: Any) -> int:
    """
    Normalize an int/float millisecond count or a datetime into integer ms since the epoch.
    Naive datetimes are read as UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - EPOCH
        return (delta.days * 86_400_000) + (delta.seconds * 1000) + (delta.microseconds // 1000)
    if isinstance(value, bool):
        raise InvalidInput(f"not a timestamp: {value!r}")
    return int(value)


@dataclass(frozen=True)
class QuantumConfig:
    max_interval: int = MAX_INTERVAL_MS
    start_timestamp: int = 0

    def __post_init__(self) -> None:
        if int(self.max_interval) <= 0:
            raise InvalidInput(f"max_interval must be positive, got {self.max_interval}")


@dataclass(frozen=True)
class QuantumStep:
    index: int
    timestamp: int
    interval: int
    hash: str

    @property
    def iso_string(self) -> str:
        return iso_from_millis(self.timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "timestamp": self.timestamp,
            "interval": self.interval,
            "hash": self.hash,
            "isoString": self.iso_string,
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "QuantumStep":
        return QuantumStep(
            index=int(d["index"]),
            timestamp=int(d["timestamp"]),
            interval=int(d.get("interval", 0)),
            hash=str(d["hash"]),
        )


@dataclass(frozen=True)
class StepCacheEntry:
    step: QuantumStep
    cached_at: int = field(default=0, compare=False)
