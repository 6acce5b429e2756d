from infrastructure.flow.base_loader import FlowLoadError, FlowLoaderBase
from infrastructure.flow.file_finder import FlowFileFinder
from infrastructure.flow.json_loader import JsonFlowLoader
from infrastructure.flow.loader_registry import FlowLoaderRegistry
from infrastructure.flow.yaml_loader import YamlFlowLoader

__all__ = [
    "FlowLoadError",
    "FlowLoaderBase",
    "FlowFileFinder",
    "FlowLoaderRegistry",
    "YamlFlowLoader",
    "JsonFlowLoader",
]
