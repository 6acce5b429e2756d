# application/exceptions.py
from __future__ import annotations


class TransportError(Exception):
    """The HTTP call itself failed (DNS, connection refused, client timeout)."""

    def __init__(self, message: str, method: str = "", url: str = ""):
        super().__init__(message)
        self.method = method
        self.url = url


class NoFlowsFoundError(Exception):
    """Nothing runnable after discovery, loading and tag filtering."""
