"""
Midpoint rooting.

The root is placed halfway along the longest tip-to-tip path.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np

from arborist.config import RootingConfig, resolve_config
from arborist.distances import distances_from, path_between
from arborist.exceptions import ArboristError
from arborist.graph import TreeGraph, build_tree_graph
from arborist.rooting.core_rooting import clamp_fraction, reroot_on_edge
from arborist.tree import Node, expand_all_collapsed

logger = logging.getLogger(__name__)


def find_farthest_tips(
    graph: TreeGraph, config: Optional[RootingConfig] = None
) -> Optional[Tuple[str, str, float]]:
    """
    Find the two tips that are farthest apart.

    Brute force over all tip pairs, one row of distances at a time. Ties
    resolve to the first pair in tip-enumeration order (row-major over the
    upper triangle).

    Returns:
        ``(tip_a, tip_b, distance)``, or ``None`` with fewer than two tips
    """
    config = resolve_config(config)
    tips = graph.tip_ids()
    if len(tips) < 2:
        return None

    best_pair = None
    best_distance = -np.inf
    for i, tip in enumerate(tips[:-1]):
        dist = distances_from(graph, tip, config.default_branch_length)
        row = np.array([dist.get(other, np.nan) for other in tips[i + 1 :]], dtype=float)
        row = np.where(np.isnan(row), -np.inf, row)
        j = int(np.argmax(row))
        if row[j] > best_distance:
            best_distance = float(row[j])
            best_pair = (tip, tips[i + 1 + j])

    if best_pair is None or not np.isfinite(best_distance):
        return None
    return best_pair[0], best_pair[1], best_distance


def midpoint_root(tree: Node, config: Optional[RootingConfig] = None) -> Node:
    """
    Reroot the tree at the midpoint of its longest tip-to-tip path.

    Args:
        tree: Tree to reroot (left untouched)

    Returns:
        The rerooted tree; an expanded copy of the input when there are fewer
        than two tips or all tips coincide
    """
    config = resolve_config(config)
    expanded = expand_all_collapsed(tree)
    graph = build_tree_graph(expanded)

    farthest = find_farthest_tips(graph, config)
    if farthest is None or farthest[2] <= 0:
        logger.debug("Midpoint rooting skipped: no pair of distinct tips")
        return expanded
    tip_a, tip_b, total_distance = farthest
    logger.debug(f"Farthest tips: {tip_a}, {tip_b} at distance {total_distance}")

    path = path_between(graph, tip_a, tip_b, config.default_branch_length)
    if not path:
        return expanded

    target = total_distance / 2.0
    pivot = path[-1]
    fraction = 0.5
    walked = 0.0
    for edge in path:
        if walked + edge.length >= target:
            along = target - walked
            pivot = edge
            fraction = clamp_fraction(along / edge.length) if edge.length > 0 else 0.5
            break
        walked += edge.length

    try:
        return reroot_on_edge(
            graph, pivot.from_id, pivot.to_id, fraction, expanded, config
        )
    except ArboristError as e:
        logger.warning(f"Midpoint rooting failed: {e}")
        return expanded
