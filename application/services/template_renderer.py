from __future__ import annotations

import json
import re
from typing import Any, Dict

from application.services.path_resolver import extract_value
from domain.values import MISSING, to_json_text

# ${name}, ${a.b}, ${items[0].id}, ${a[0][1]}
_TOKEN = re.compile(r"\$\{(\w+(?:\[\d+\])*(?:\.\w+(?:\[\d+\])*)*)\}")


class TemplateRenderer:
    """
    Expands ${...} references against a flow's variable bag.
    - Dot and index paths: ${user.id}, ${items[0].name}
    - Unresolved references are left verbatim so they stay visible.
    - Objects/arrays are spliced in as compact JSON text.
    """

    def interpolate(self, text: Any, variables: Dict[str, Any]) -> Any:
        if text is None or text is MISSING:
            return ""
        if not isinstance(text, str):
            return text
        if "${" not in text:
            return text

        def _replace(m: "re.Match[str]") -> str:
            value = extract_value(variables, m.group(1))
            if value is MISSING:
                return m.group(0)
            return to_text(value)

        return _TOKEN.sub(_replace, text)

    def resolve_variables(self, value: Any, variables: Dict[str, Any]) -> Any:
        """
        Interpolate every string inside `value`, at any depth. A string that
        reads as a JSON object/array after substitution is parsed back into
        structured data; if it does not parse, the string is kept.
        """
        if isinstance(value, str):
            rendered = self.interpolate(value, variables)
            return _maybe_parse_json(rendered)
        if isinstance(value, list):
            return [self.resolve_variables(item, variables) for item in value]
        if isinstance(value, tuple):
            return [self.resolve_variables(item, variables) for item in value]
        if isinstance(value, dict):
            return {k: self.resolve_variables(v, variables) for k, v in value.items()}
        return value

    def parse_json_strings(self, value: Any) -> Any:
        """Recursively turn JSON-looking strings into structured values."""
        if isinstance(value, str):
            return _maybe_parse_json(value)
        if isinstance(value, list):
            return [self.parse_json_strings(item) for item in value]
        if isinstance(value, dict):
            return {k: self.parse_json_strings(v) for k, v in value.items()}
        return value


def to_text(value: Any) -> str:
    """String form used when a resolved value is substituted into text."""
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list, tuple)):
        return to_json_text(value)
    return str(value)


def _maybe_parse_json(text: Any) -> Any:
    if not isinstance(text, str):
        return text
    stripped = text.strip()
    if not (stripped.startswith("{") or stripped.startswith("[")):
        return text
    try:
        return json.loads(stripped)
    except ValueError:
        return text
