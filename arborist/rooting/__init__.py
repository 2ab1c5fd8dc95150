"""
Rooting module for phylogenetic trees.

This module provides rerooting algorithms organized into focused submodules:
- core_rooting: rerooting on an edge or at a node, unrooting
- midpoint: midpoint rooting
- least_squares: root-to-tip variance minimizing rooting
- rooting: unified interface importing from the above modules
"""

from .rooting import *  # noqa: F401,F403

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
