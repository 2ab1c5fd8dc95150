"""
Distance and path queries over the undirected tree graph.

The graph is a tree, so a walk that never steps back along the edge it
arrived on already yields shortest paths; no priority queue is needed. A
visited set guards against malformed (cyclic) input.
"""

from __future__ import annotations

import logging
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from arborist.config import DEFAULT_CONFIG
from arborist.graph import TreeGraph, numeric_length

logger = logging.getLogger(__name__)


class PathEdge(NamedTuple):
    from_id: str
    to_id: str
    length: float


def distances_from(
    graph: TreeGraph,
    source_id: str,
    default_length: float = DEFAULT_CONFIG.default_branch_length,
) -> Dict[str, float]:
    """
    Single-source distances from ``source_id`` to every reachable node.

    Missing or non-finite edge lengths count as ``default_length``.
    An unknown source yields an empty mapping.
    """
    if source_id not in graph:
        return {}

    dist: Dict[str, float] = {}
    stack: List[Tuple[str, Optional[str], float]] = [(source_id, None, 0.0)]
    while stack:
        node_id, parent_id, d = stack.pop()
        if node_id in dist:
            continue
        dist[node_id] = d
        for edge in graph.neighbors(node_id):
            if edge.to == parent_id:
                continue
            stack.append((edge.to, node_id, d + numeric_length(edge.length, default_length)))
    return dist


def path_between(
    graph: TreeGraph,
    from_id: str,
    to_id: str,
    default_length: float = DEFAULT_CONFIG.default_branch_length,
) -> Optional[List[PathEdge]]:
    """
    The unique simple path from ``from_id`` to ``to_id``.

    Returns the edges in source-to-target order with numeric lengths, an empty
    list when both ids are equal, and ``None`` when either id is unknown or
    the target is unreachable.
    """
    if from_id not in graph or to_id not in graph:
        return None
    if from_id == to_id:
        return []

    # node id -> (previous node id, length of the edge used to reach it)
    came_from: Dict[str, Tuple[Optional[str], float]] = {from_id: (None, 0.0)}
    stack: List[str] = [from_id]
    while stack:
        current = stack.pop()
        if current == to_id:
            break
        for edge in graph.neighbors(current):
            if edge.to in came_from:
                continue
            came_from[edge.to] = (current, numeric_length(edge.length, default_length))
            stack.append(edge.to)

    if to_id not in came_from:
        return None

    reversed_path: List[PathEdge] = []
    cur = to_id
    while cur != from_id:
        prev, length = came_from[cur]
        if prev is None:
            return None
        reversed_path.append(PathEdge(prev, cur, length))
        cur = prev
    reversed_path.reverse()
    return reversed_path


def path_length(path: Sequence[PathEdge]) -> float:
    return float(sum(edge.length for edge in path))


def tip_distance_matrix(
    graph: TreeGraph,
    tip_ids: Sequence[str],
    default_length: float = DEFAULT_CONFIG.default_branch_length,
) -> np.ndarray:
    """
    Pairwise patristic distances between tips.

    Entry ``[i, j]`` is the path length between ``tip_ids[i]`` and
    ``tip_ids[j]``; unreachable pairs are ``nan``.
    """
    n = len(tip_ids)
    matrix = np.full((n, n), np.nan, dtype=float)
    for i, tip in enumerate(tip_ids):
        dist = distances_from(graph, tip, default_length)
        matrix[i] = [dist.get(other, np.nan) for other in tip_ids]
    logger.debug(f"Computed {n}x{n} tip distance matrix")
    return matrix
