"""
Least-squares rooting.

Every edge is sampled at evenly spaced fractions; the candidate root that
minimizes the population variance of root-to-tip distances wins.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Sequence

import numpy as np

from arborist.config import RootingConfig, resolve_config
from arborist.distances import distances_from
from arborist.exceptions import ArboristError
from arborist.graph import TreeGraph, build_tree_graph, numeric_length
from arborist.rooting.core_rooting import reroot_on_edge
from arborist.tree import Node, expand_all_collapsed

logger = logging.getLogger(__name__)


class _DistanceCache:
    def __init__(self, graph: TreeGraph, default_length: float):
        self._graph = graph
        self._default_length = default_length
        self._cache: Dict[str, Dict[str, float]] = {}

    def __call__(self, node_id: str) -> Dict[str, float]:
        if node_id not in self._cache:
            self._cache[node_id] = distances_from(
                self._graph, node_id, self._default_length
            )
        return self._cache[node_id]


def root_to_tip_variance(
    graph: TreeGraph,
    u: str,
    v: str,
    fractions: Sequence[float],
    config: Optional[RootingConfig] = None,
    distances: Optional[Callable[[str], Dict[str, float]]] = None,
) -> np.ndarray:
    """
    Variance of root-to-tip distances for roots placed on the edge ``u``-``v``.

    For a root at fraction ``t`` the distance to a tip is
    ``min(t*L + d(u, tip), (1-t)*L + d(v, tip))``. One of the two terms may
    route back across the candidate edge; in a tree the smaller one is always
    the true path.

    Args:
        graph: Undirected tree graph
        u, v: Ends of the candidate edge
        fractions: Positions along u->v to evaluate
        distances: Optional callable returning single-source distances,
            used to share work across edges

    Returns:
        One population variance per fraction; ``inf`` where fewer than two
        tips are reachable
    """
    config = resolve_config(config)
    if distances is None:
        distances = _DistanceCache(graph, config.default_branch_length)

    tips = graph.tip_ids()
    edge_length = numeric_length(graph.edge_length(u, v), config.default_branch_length)
    dist_u = distances(u)
    dist_v = distances(v)
    du = np.array([dist_u.get(tip, np.nan) for tip in tips], dtype=float)
    dv = np.array([dist_v.get(tip, np.nan) for tip in tips], dtype=float)
    reachable = np.isfinite(du) & np.isfinite(dv)

    t = np.asarray(fractions, dtype=float)
    if reachable.sum() < 2:
        return np.full(t.shape, np.inf)

    t = t[:, np.newaxis]
    estimates = np.minimum(
        t * edge_length + du[reachable], (1.0 - t) * edge_length + dv[reachable]
    )
    return estimates.var(axis=1)


def least_squares_root(tree: Node, config: Optional[RootingConfig] = None) -> Node:
    """
    Reroot the tree where root-to-tip distances vary the least.

    Edges are enumerated once each, parent first, in pre-order (see
    ``TreeGraph.edges``) and sampled at ``config.least_squares_samples + 1``
    fractions. Ties keep the first candidate found.

    Args:
        tree: Tree to reroot (left untouched)

    Returns:
        The rerooted tree; an expanded copy of the input with fewer than two
        tips or when no candidate can be scored
    """
    config = resolve_config(config)
    expanded = expand_all_collapsed(tree)
    graph = build_tree_graph(expanded)
    if len(graph.tip_ids()) < 2:
        logger.debug("Least-squares rooting skipped: fewer than two tips")
        return expanded

    samples = max(1, config.least_squares_samples)
    fractions = np.arange(samples + 1) / samples
    distances = _DistanceCache(graph, config.default_branch_length)

    best_score = np.inf
    best_candidate = None
    for u, v, _ in graph.edges():
        scores = root_to_tip_variance(graph, u, v, fractions, config, distances)
        i = int(np.argmin(scores))
        if scores[i] < best_score:
            best_score = float(scores[i])
            best_candidate = (u, v, float(fractions[i]))

    if best_candidate is None:
        logger.debug("Least-squares rooting found no candidate edge")
        return expanded

    u, v, t = best_candidate
    logger.debug(f"Least-squares root on {u}-{v} at {t} (variance {best_score})")
    try:
        return reroot_on_edge(graph, u, v, t, expanded, config)
    except ArboristError as e:
        logger.warning(f"Least-squares rooting failed: {e}")
        return expanded
