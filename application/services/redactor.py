# application/services/redactor.py
from __future__ import annotations

from typing import Any, Dict, Optional

SENSITIVE_KEYS = {
    "password",
    "passwd",
    "pass",
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
    "x-api-key",
    "api-key",
    "apikey",
    "api_key",
    "x-auth-token",
}


def mask_value(key: str, value: Any) -> Any:
    if key.lower() in SENSITIVE_KEYS and value is not None:
        return "********"
    return value


def mask_dict(d: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {k: mask_value(k, v) for k, v in (d or {}).items()}
