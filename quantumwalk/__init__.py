"""
QuantumWalk: a reproducible SHA-256 hash-chain of timestamps and a matcher for it.

This package provides:
- A deterministic step generator: each timestamp is hashed and the leading 64 bits
  of the digest become a bounded interval to the next timestamp
- An in-memory step cache with periodic checkpoints for long-range navigation
- A hybrid (ratio / error / correlation) similarity score between interval sequences
- An exhaustive sliding-window matcher that aligns user intervals against the chain

The chain is defined entirely by the hash, the maximum interval and the start
timestamp, so any step can be rebuilt from the origin on any platform.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
