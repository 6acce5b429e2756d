"""Find flow files under a directory."""
from pathlib import Path
from typing import List


class FlowFileFinder:
    """Search flow files under the given base directory."""

    patterns = ("*.yaml", "*.yml")

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)

    def discover(self) -> List[Path]:
        """
        Recursively collect YAML flow files.

        Returns:
            Sorted list of paths; empty when the directory does not exist.
        """
        if not self.base_dir.is_dir():
            return []

        found = {p for pattern in self.patterns for p in self.base_dir.rglob(pattern) if p.is_file()}
        return sorted(found)
