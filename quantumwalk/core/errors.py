from __future__ import annotations


class QuantumWalkError(Exception):
    """Base class for every error raised by the quantumwalk core."""


class HashUnavailable(QuantumWalkError, RuntimeError):
    """The SHA-256 primitive cannot be invoked at all."""


class HashFailure(QuantumWalkError, RuntimeError):
    """The hash primitive was invoked but failed or returned malformed output."""


class ResourceExhausted(QuantumWalkError, RuntimeError):
    """A chain walk exceeded its step ceiling."""


class InvalidInput(QuantumWalkError, ValueError):
    """User-supplied data cannot be matched (empty, too long for the window, ...)."""
