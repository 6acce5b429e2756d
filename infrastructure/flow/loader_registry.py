# infrastructure/flow/loader_registry.py
from __future__ import annotations

from pathlib import Path
from typing import Dict

from infrastructure.flow.base_loader import FlowLoaderBase, FlowLoadError
from infrastructure.flow.json_loader import JsonFlowLoader
from infrastructure.flow.yaml_loader import YamlFlowLoader


class FlowLoaderRegistry:
    def __init__(self) -> None:
        self._loaders: Dict[str, FlowLoaderBase] = {
            ".yaml": YamlFlowLoader(),
            ".yml": YamlFlowLoader(),
            ".json": JsonFlowLoader(),
        }

    def get_loader(self, path: Path) -> FlowLoaderBase:
        ext = path.suffix.lower()
        loader = self._loaders.get(ext)
        if loader is None:
            raise FlowLoadError(f"Unsupported flow format: {ext}")
        return loader
