"""Immutable dependency graph snapshots.

This module contains:
- DependencyGraph[T]: A generic, immutable view of "depends on" edges
- topological_sort: Ordering of nodes with dependencies first
"""

from ._algorithms import topological_sort
from ._dependency_graph import DependencyGraph

__all__ = ["DependencyGraph", "topological_sort"]
