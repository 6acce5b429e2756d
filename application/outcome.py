# application/outcome.py
from dataclasses import dataclass

from application.ports.http_client import HttpResponse


@dataclass(frozen=True)
class PollOutcome:
    response: HttpResponse
    met: bool
    attempts: int  # requests issued by the poller, not counting the initial one
    elapsed_ms: int
