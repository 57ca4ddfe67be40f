"""
Analyzer configuration.

Defaults suit small and medium graphs. Configuration can also be read from
a YAML mapping, either at the top level or under an `analyzer:` key:

    analyzer:
      normalize: true
      edge_betweenness: false
      max_vertices: 50000
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from ..model.base import TOLERANCE, ConfigError


@dataclass
class AnalyzerConfig:
    """Configuration for centrality and accessibility analysis."""

    # Output
    normalize: bool = False  # Min-max normalize betweenness after all sources
    edge_betweenness: bool = True  # Also accumulate betweenness on edges

    # Safety
    max_vertices: int | None = None  # Refuse larger graphs (None = no limit)

    # Numerics
    tolerance: float = TOLERANCE  # Path lengths closer than this are equal

    def __post_init__(self):
        if not isinstance(self.normalize, bool):
            raise ConfigError(f"normalize must be a boolean, got {self.normalize!r}")
        if not isinstance(self.edge_betweenness, bool):
            raise ConfigError(
                f"edge_betweenness must be a boolean, got {self.edge_betweenness!r}"
            )
        if self.max_vertices is not None and (
            isinstance(self.max_vertices, bool)
            or not isinstance(self.max_vertices, int)
            or self.max_vertices < 0
        ):
            raise ConfigError(
                f"max_vertices must be a non-negative integer, got {self.max_vertices!r}"
            )
        if isinstance(self.tolerance, bool) or not isinstance(self.tolerance, (int, float)):
            raise ConfigError(f"tolerance must be a number, got {self.tolerance!r}")
        if not 0 < self.tolerance < 1:
            raise ConfigError(f"tolerance must be in (0, 1), got {self.tolerance!r}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalyzerConfig":
        """
        Build a config from a mapping, rejecting unknown keys.

        Raises:
            ConfigError: If a key is unknown or a value is invalid
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown analyzer option(s): {', '.join(unknown)}")
        return cls(**data)


def load_config(path: str | Path) -> AnalyzerConfig:
    """
    Load an AnalyzerConfig from a YAML file.

    An empty file yields the defaults.

    Raises:
        ConfigError: If the file does not hold a mapping or has invalid values
    """
    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return AnalyzerConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping, got {type(data).__name__}")
    if "analyzer" in data:
        data = data["analyzer"] or {}
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: 'analyzer' must be a mapping")
    return AnalyzerConfig.from_dict(data)
