# infrastructure/clock/system_clock.py
from __future__ import annotations

import time


class SystemClock:
    def monotonic_ms(self) -> float:
        return time.perf_counter() * 1000

    def sleep_ms(self, ms: float) -> None:
        if ms > 0:
            time.sleep(ms / 1000)
