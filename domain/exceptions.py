# domain/exceptions.py
from __future__ import annotations


class FlowValidationError(ValueError):
    """Raised when a flow, step or request definition is malformed."""
