"""
Unified rooting interface.

Re-exports the rerooting engine (core_rooting.py) and the automatic rooting
strategies (midpoint.py, least_squares.py).
"""

from .core_rooting import (
    # Rerooting engine
    reroot_on_edge,
    reroot_at_node,
    reroot_at_edge,
    unroot,
    # Helpers used by callers building their own pivots
    collapse_unary_nodes,
    merge_branch_lengths,
    create_synthetic_root_id,
)

from .midpoint import (
    find_farthest_tips,
    midpoint_root,
)

from .least_squares import (
    root_to_tip_variance,
    least_squares_root,
)

__all__ = [
    "reroot_on_edge",
    "reroot_at_node",
    "reroot_at_edge",
    "unroot",
    "collapse_unary_nodes",
    "merge_branch_lengths",
    "create_synthetic_root_id",
    "find_farthest_tips",
    "midpoint_root",
    "root_to_tip_variance",
    "least_squares_root",
]
