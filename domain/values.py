# domain/values.py
"""
JSON value helpers shared by extraction, interpolation and assertions.

MISSING stands for "no value here" (a path that resolved to nothing) and is
distinct from None, which is JSON null.
"""
from __future__ import annotations

import json
from typing import Any, Optional


class _Missing:
    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __copy__(self) -> "_Missing":
        return self

    def __deepcopy__(self, _memo) -> "_Missing":
        return self


MISSING: Any = _Missing()


def is_missing(value: Any) -> bool:
    return value is MISSING


def normalize_json(value: Any) -> Any:
    """Collapse integral floats so 1 and 1.0 compare equal; tuples become lists."""
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {str(k): normalize_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize_json(v) for v in value]
    return value


def canonical_json(value: Any) -> Optional[str]:
    """Order-insensitive JSON text used for structural equality. MISSING has none."""
    if value is MISSING:
        return None
    return json.dumps(normalize_json(value), sort_keys=True, separators=(",", ":"), default=str)


def json_equals(left: Any, right: Any) -> bool:
    return canonical_json(left) == canonical_json(right)


def to_json_text(value: Any) -> str:
    """Compact JSON in insertion order, used when a value is rendered into text."""
    if value is MISSING:
        return "undefined"
    return json.dumps(normalize_json(value), ensure_ascii=False, separators=(",", ":"), default=str)


def to_plain(value: Any) -> Any:
    """Deep copy of a JSON value with MISSING replaced by None, for serialisation."""
    if value is MISSING:
        return None
    if isinstance(value, dict):
        return {k: to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value
