from __future__ import annotations
from typing import Optional, Protocol
import hashlib
import logging
import re

from quantumwalk.core.errors import HashFailure, HashUnavailable

logger = logging.getLogger(__name__)

_HEX64 = re.compile(r"^[0-9a-fA-F]{64}$")


class Hasher(Protocol):
    def digest(self, data: bytes) -> str: ...


class Sha256Hasher:
    """SHA-256 over raw bytes, returned as 64 lowercase hex characters."""

    def __init__(self) -> None:
        try:
            hashlib.new("sha256")
        except ValueError as e:
            raise HashUnavailable(
                "SHA-256 is not available in this interpreter; the chain cannot be computed without it"
            ) from e

    def digest(self, data: bytes) -> str:
        return hashlib.sha256(data).hexdigest()


_default_hasher: Optional[Sha256Hasher] = None


def default_hasher() -> Sha256Hasher:
    global _default_hasher
    if _default_hasher is None:
        _default_hasher = Sha256Hasher()
    return _default_hasher


def is_valid_hash(value: str) -> bool:
    return isinstance(value, str) and bool(_HEX64.match(value))


def hash_timestamp(timestamp: int, hasher: Optional[Hasher] = None) -> str:
    """
    Digest the decimal string form of a millisecond timestamp.

    HashUnavailable propagates untouched; any other failure of the underlying
    primitive, or output that is not a 64-char hex digest, becomes HashFailure.
    """
    h = hasher if hasher is not None else default_hasher()
    data = str(int(timestamp)).encode("utf-8")
    try:
        out = h.digest(data)
    except HashUnavailable:
        raise
    except Exception as e:
        raise HashFailure(f"failed to hash timestamp {timestamp}: {e}") from e
    if not is_valid_hash(out):
        logger.error("Hasher returned malformed digest for timestamp %s: %r", timestamp, out)
        raise HashFailure(f"malformed digest for timestamp {timestamp}: {out!r}")
    return out.lower()
