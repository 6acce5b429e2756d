from __future__ import annotations

from typing import Protocol


class ClockPort(Protocol):
    def monotonic_ms(self) -> float:
        ...

    def sleep_ms(self, ms: float) -> None:
        ...
