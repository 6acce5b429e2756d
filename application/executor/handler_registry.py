# application/executor/handler_registry.py
from __future__ import annotations

from typing import List

from application.handlers.base import StepHandler
from domain.steps.base import Step


class HandlerRegistry:
    """Ordered step phases; every handler that supports a step runs, in registration order."""

    def __init__(self, handlers: List[StepHandler]):
        self._handlers = handlers

    def get_handlers(self, step: Step) -> List[StepHandler]:
        handlers = [h for h in self._handlers if h.supports(step)]
        if not handlers:
            raise RuntimeError(f"No handler found for step: {type(step).__name__} ({step.name})")
        return handlers
