# application/ports/http_client.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from domain.values import MISSING


@dataclass(frozen=True)
class HttpResponse:
    status: int
    headers: Dict[str, str]
    body: Any  # parsed JSON when the payload is JSON, otherwise the text
    url: str = ""
    elapsed_ms: int = 0


class HttpClientPort(ABC):
    @abstractmethod
    def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: Any = MISSING,
    ) -> HttpResponse:
        """
        Send one request. Non-2xx statuses are returned, not raised.
        Transport failures (DNS, refused connection, timeout) raise TransportError.
        """
        ...
