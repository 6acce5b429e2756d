# domain/steps/capture.py
from dataclasses import dataclass


@dataclass(frozen=True)
class CaptureSpec:
    name: str
    path: str  # dot/bracket path into the response body, e.g. data.items[0].id
