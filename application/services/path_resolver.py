# application/services/path_resolver.py
from __future__ import annotations

import re
from typing import Any, Mapping, Sequence

from domain.values import MISSING

_INDEXED_SEGMENT = re.compile(r"^(\w+)((?:\[\d+\])+)$")
_INDEX = re.compile(r"\[(\d+)\]")


def extract_value(obj: Any, path: str) -> Any:
    """
    Walk `obj` along a dot-separated path and return what is found there.

    path examples:
      status
      data.user.id
      data.items[0].tags[1]
      matrix[0][1]

    Never raises: a null/missing value on the way, a key looked up on a
    non-object, an index on a non-sequence or an out-of-range index all
    yield MISSING.
    """
    current = obj
    for part in path.split("."):
        if current is None or current is MISSING:
            return MISSING

        m = _INDEXED_SEGMENT.match(part)
        if m:
            current = _get_key(current, m.group(1))
            for idx in _INDEX.findall(m.group(2)):
                if not _is_sequence(current) or int(idx) >= len(current):
                    return MISSING
                current = current[int(idx)]
        else:
            current = _get_key(current, part)

    return current


def _get_key(cur: Any, key: str) -> Any:
    if isinstance(cur, Mapping):
        return cur.get(key, MISSING)
    # JS-like: "length" and numeric keys work on sequences too
    if _is_sequence(cur):
        if key == "length":
            return len(cur)
        if key.isdigit() and int(key) < len(cur):
            return cur[int(key)]
    return MISSING


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))
