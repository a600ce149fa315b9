"""Incremental computation graph with memoization and dependency-driven invalidation."""

__all__ = [
    "Computation",
    "ConfigError",
    "Constant",
    "ContextExpiredError",
    "CycleError",
    "DependencyGraph",
    "EdgePolicy",
    "EvaluationContext",
    "FunctionComputation",
    "Graph",
    "GraphConfig",
    "GraphError",
    "KeyPolicy",
    "NodeDetail",
    "NodeID",
    "NodeInfo",
    "NodeStats",
    "ReentrantUpdateError",
    "TreeNode",
    "UnknownNodeError",
    "get_config",
    "get_dependency_tree",
    "get_node_detail",
    "list_nodes",
    "load_config",
    "make_key",
    "render_node_detail",
    "render_node_table",
    "render_tree",
]

from ._computation import Computation, Constant, FunctionComputation
from ._config import EdgePolicy, GraphConfig, get_config, load_config
from ._context import EvaluationContext
from ._engine import Graph
from ._errors import (
    ConfigError,
    ContextExpiredError,
    CycleError,
    GraphError,
    ReentrantUpdateError,
    UnknownNodeError,
)
from ._graph import DependencyGraph
from ._ids import NodeID
from ._keys import KeyPolicy, make_key
from ._node import NodeStats
from ._query import NodeDetail, NodeInfo, TreeNode, get_dependency_tree, get_node_detail, list_nodes
from ._render import render_node_detail, render_node_table, render_tree
