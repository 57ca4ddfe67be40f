"""
Shortest-path based analyzers.

This package provides:
- centrality: Brandes betweenness and closeness (BFS or Dijkstra)
- accessibility: closest member of a destination set for every vertex
- config: AnalyzerConfig and its YAML loader
- guards: size, vertex type and edge weight preconditions
"""

from .accessibility import AccessibilityAnalyzer, closest_destinations
from .centrality import (
    CentralitySearch,
    GraphAnalyzer,
    UnweightedGraphAnalyzer,
    WeightedGraphAnalyzer,
    analyze,
    closeness,
)
from .config import AnalyzerConfig, load_config
from .guards import check_positive_weights, check_size, check_vertex_type

__all__ = [
    # Configuration
    "AnalyzerConfig",
    "load_config",
    # Guards
    "check_size",
    "check_vertex_type",
    "check_positive_weights",
    # Centrality
    "CentralitySearch",
    "GraphAnalyzer",
    "UnweightedGraphAnalyzer",
    "WeightedGraphAnalyzer",
    "analyze",
    "closeness",
    # Accessibility
    "AccessibilityAnalyzer",
    "closest_destinations",
]
