# infrastructure/flow/yaml_loader.py
"""
YAMLフロー定義からFlowドメインオブジェクトを生成
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from domain.flow import Flow
from infrastructure.flow.base_loader import FlowLoadError, FlowLoaderBase


class YamlFlowLoader(FlowLoaderBase):
    def _load_file(self, path: Path) -> Any:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)

    def load_from_string(self, content: str) -> Flow:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise FlowLoadError(f"Invalid YAML: {e}") from e
        if not isinstance(data, dict):
            raise FlowLoadError("Flow document must be a mapping")
        return self.load_from_dict(data)
