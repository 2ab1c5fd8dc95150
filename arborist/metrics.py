"""
Whole-tree metrics.

All functions walk structural children, so a collapsed clade still counts
with its hidden tips.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Tuple

from arborist.config import RootingConfig, resolve_config
from arborist.graph import finite_or_none, numeric_length
from arborist.tree import Node


def is_bifurcating(tree: Optional[Node]) -> Optional[bool]:
    """True if every internal node has exactly two children."""
    if tree is None:
        return None
    for node in tree.traverse_structural():
        children = node.structural_children()
        if children and len(children) != 2:
            return False
    return True


def root_to_tip_distances(
    tree: Node, config: Optional[RootingConfig] = None
) -> Dict[str, float]:
    """
    Distance from the root to each tip, keyed by tip id.
    Missing lengths count as the default branch length.
    """
    config = resolve_config(config)
    distances: Dict[str, float] = {}
    stack: List[Tuple[Node, float]] = [(tree, 0.0)]
    while stack:
        node, dist = stack.pop()
        children = node.structural_children()
        if not children:
            distances[node.id] = dist
            continue
        for child in children:
            step = numeric_length(child.length, config.default_branch_length)
            stack.append((child, dist + step))
    return distances


def is_ultrametric(
    tree: Optional[Node],
    tolerance: Optional[float] = None,
    config: Optional[RootingConfig] = None,
) -> Optional[bool]:
    """
    True if all tips are equidistant from the root.

    The tolerance is relative to the largest distance (at least 1).
    Returns ``None`` for trees with fewer than two tips.
    """
    if tree is None:
        return None
    config = resolve_config(config)
    if tolerance is None:
        tolerance = config.ultrametric_tolerance

    distances = list(root_to_tip_distances(tree, config).values())
    if len(distances) < 2:
        return None
    min_d = min(distances)
    max_d = max(distances)
    scale = max(1.0, abs(max_d), abs(min_d))
    return abs(max_d - min_d) <= scale * tolerance


def total_branch_length(tree: Node) -> float:
    """Sum of all specified branch lengths below the root."""
    total = 0.0
    for node in tree.traverse_structural():
        if node is tree:
            continue
        length = finite_or_none(node.length)
        if length is not None:
            total += length
    return total


def format_length(value: Optional[float]) -> str:
    """Compact label for a branch length."""
    if value is None or not math.isfinite(value):
        return "0"
    magnitude = abs(value)
    if 0 < magnitude < 0.001:
        return f"{value:.2e}"
    if magnitude >= 1000:
        return f"{value:.1f}"
    return f"{value:.4g}"
