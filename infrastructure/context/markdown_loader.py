# infrastructure/context/markdown_loader.py
"""
Project context from a Markdown file.

    # Todo API                     -> name
    Free text                      -> description
    ## Base URLs                   -> key: value lines
    ## Endpoints                   -> - [name:] METHOD /path [- description]
    ## Rules                       -> bullet list
    ## AI Configuration            -> provider/url/model/key
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Optional, Union

from domain.context import AiConfig, AiProvider, EndpointDefinition, ProjectContext

_H1 = re.compile(r"^#\s+(.+)$")
_HEADING = re.compile(r"^#{2,}\s+(.+)$")
_KEY_VALUE = re.compile(r"^-?\s*(\w+):\s*(.+)$")
_ENDPOINT = re.compile(r"^-\s+(?:(\w+):\s+)?(GET|POST|PUT|DELETE|PATCH)\s+(\S+)(?:\s+-\s+(.+))?$", re.I)
_BULLET = re.compile(r"^-\s+(.+)$")


class MarkdownContextLoader:
    def load_from_file(self, path: Union[str, Path]) -> ProjectContext:
        p = Path(path)
        return self.load_from_string(p.read_text(encoding="utf-8"), fallback_name=p.stem)

    def load_from_string(self, content: str, fallback_name: str = "API") -> ProjectContext:
        sections = _extract_sections(content)
        return ProjectContext(
            name=sections.get("name") or fallback_name,
            description=sections.get("description", ""),
            base_urls=_parse_key_values(sections.get("base urls") or sections.get("urls") or ""),
            endpoints=_parse_endpoints(sections.get("endpoints", "")),
            rules=_parse_list(sections.get("rules") or sections.get("business rules") or ""),
            ai=_parse_ai_config(sections.get("ai configuration") or sections.get("ai") or ""),
        )


def _extract_sections(content: str) -> Dict[str, str]:
    sections: Dict[str, str] = {}
    current = "description"
    buffer: List[str] = []

    def _flush() -> None:
        if buffer:
            sections[current.lower()] = "\n".join(buffer).strip()

    for line in content.splitlines():
        h1 = _H1.match(line)
        heading = _HEADING.match(line)
        if h1 and "name" not in sections:
            _flush()
            sections["name"] = h1.group(1).strip()
            current = "description"
            buffer = []
        elif heading:
            _flush()
            current = heading.group(1).strip()
            buffer = []
        else:
            buffer.append(line)
    _flush()

    return sections


def _parse_key_values(content: str) -> Dict[str, str]:
    result: Dict[str, str] = {}
    for line in content.splitlines():
        m = _KEY_VALUE.match(line.strip())
        if m:
            result[m.group(1)] = m.group(2).strip()
    return result


def _parse_endpoints(content: str) -> List[EndpointDefinition]:
    endpoints: List[EndpointDefinition] = []
    for line in content.splitlines():
        m = _ENDPOINT.match(line.strip())
        if m:
            method = m.group(2).upper()
            endpoints.append(
                EndpointDefinition(
                    name=m.group(1) or f"{method} {m.group(3)}",
                    method=method,
                    path=m.group(3),
                    description=m.group(4),
                )
            )
    return endpoints


def _parse_list(content: str) -> List[str]:
    items: List[str] = []
    for line in content.splitlines():
        m = _BULLET.match(line.strip())
        if m:
            items.append(m.group(1).strip())
    return items


def _parse_ai_config(content: str) -> Optional[AiConfig]:
    if not content:
        return None
    kv = _parse_key_values(content)
    if not kv.get("url") and not kv.get("model"):
        return None
    try:
        provider = AiProvider((kv.get("provider") or "ollama").lower())
    except ValueError:
        provider = AiProvider.OLLAMA
    return AiConfig(
        provider=provider,
        url=kv.get("url", ""),
        model=kv.get("model", ""),
        api_key=kv.get("key") or kv.get("apiKey"),
    )
