"""Core arborist package: structural transformations on phylogenetic trees."""

from arborist.config import DEFAULT_CONFIG, RootingConfig
from arborist.exceptions import ArboristError, EdgeNotFoundError, NodeNotFoundError
from arborist.tree import (
    Node,
    structural_children,
    find_node_by_id,
    clone_tree,
    count_tips,
    count_nodes,
    expand_all_collapsed,
)
from arborist.graph import Edge, TreeGraph, build_tree_graph
from arborist.distances import PathEdge, distances_from, path_between
from arborist.rooting import (
    reroot_on_edge,
    reroot_at_node,
    reroot_at_edge,
    unroot,
    midpoint_root,
    least_squares_root,
)
from arborist.edits import (
    toggle_collapse,
    swap_children,
    can_toggle_collapse,
    can_swap,
)
from arborist.metrics import (
    is_bifurcating,
    is_ultrametric,
    root_to_tip_distances,
    total_branch_length,
    format_length,
)

__all__ = [
    "DEFAULT_CONFIG",
    "RootingConfig",
    "ArboristError",
    "EdgeNotFoundError",
    "NodeNotFoundError",
    "Node",
    "structural_children",
    "find_node_by_id",
    "clone_tree",
    "count_tips",
    "count_nodes",
    "expand_all_collapsed",
    "Edge",
    "TreeGraph",
    "build_tree_graph",
    "PathEdge",
    "distances_from",
    "path_between",
    "reroot_on_edge",
    "reroot_at_node",
    "reroot_at_edge",
    "unroot",
    "midpoint_root",
    "least_squares_root",
    "toggle_collapse",
    "swap_children",
    "can_toggle_collapse",
    "can_swap",
    "is_bifurcating",
    "is_ultrametric",
    "root_to_tip_distances",
    "total_branch_length",
    "format_length",
]
