# infrastructure/http/requests_client.py
from __future__ import annotations

import json
from typing import Any, Dict, Optional

import requests

from application.exceptions import TransportError
from application.ports.http_client import HttpClientPort, HttpResponse
from domain.values import MISSING


class RequestsSessionHttpClient(HttpClientPort):
    """
    requests-based transport. JSON bodies are sent as JSON, JSON responses
    are decoded, and only transport-level failures raise.
    """

    def __init__(self, base_headers: Optional[Dict[str, str]] = None, timeout_sec: float = 30):
        self._session = requests.Session()
        self._base_headers = base_headers or {}
        self._timeout = timeout_sec

    def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: Any = MISSING,
    ) -> HttpResponse:
        merged = dict(self._base_headers)
        if headers:
            merged.update(headers)

        kwargs: Dict[str, Any] = {}
        if body is not MISSING and body is not None:
            if isinstance(body, (str, bytes)):
                kwargs["data"] = body
            else:
                kwargs["json"] = body

        try:
            resp = self._session.request(
                method=method.upper(),
                url=url,
                headers=merged,
                timeout=self._timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            raise TransportError(str(e), method=method, url=url) from e

        return HttpResponse(
            status=resp.status_code,
            headers=dict(resp.headers),
            body=_decode_body(resp),
            url=str(resp.url),
            elapsed_ms=int(resp.elapsed.total_seconds() * 1000),
        )

    def close(self) -> None:
        self._session.close()


def _decode_body(resp: requests.Response) -> Any:
    text = resp.text
    if not text:
        return ""
    try:
        return json.loads(text)
    except ValueError:
        return text
