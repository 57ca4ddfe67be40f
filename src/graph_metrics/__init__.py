"""
Graph Metrics - shortest-path based structural metrics on graphs.

This package computes distances, shortest-path counts, betweenness and
closeness centrality, nearest-destination accessibility and Strahler
stream order over NetworkX-backed graphs and their directed, undirected,
edge-reversed and unweighted views.
"""

__version__ = "0.1.0"
