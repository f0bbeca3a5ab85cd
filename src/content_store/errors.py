"""Exceptions raised by content store adapters."""

from __future__ import annotations


class StoreUnavailableError(RuntimeError):
    """A read against the content store failed (network, API or credentials).

    A miss is never an error: adapters return None or an empty list for that.
    """

    def __init__(self, operation: str, reason: str = ""):
        self.operation = operation
        self.reason = reason
        message = f"Content store unavailable during {operation}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
