"""
Core rerooting implementation for phylogenetic trees.

This module provides the fundamental rerooting operations:
- Re-materializing a rooted tree from the undirected graph around a pivot edge
- Collapsing unary nodes left behind by a reroot
- Rerooting at a node or on an edge
- Unrooting a tree with a binary root

Rerooting never edits the rooted representation in place. The tree is
projected onto a ``TreeGraph``, and a fresh rooted tree is rebuilt by walking
the graph outward from the new root.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Set, Tuple

from arborist.config import RootingConfig, resolve_config
from arborist.exceptions import ArboristError, EdgeNotFoundError, NodeNotFoundError
from arborist.graph import TreeGraph, build_tree_graph, finite_or_none
from arborist.tree import Node, clone_tree, count_nodes, expand_all_collapsed

logger = logging.getLogger(__name__)

# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def merge_branch_lengths(
    a: Optional[float], b: Optional[float]
) -> Optional[float]:
    """
    Length of the branch obtained by joining two consecutive branches.

    Both missing gives ``None``; one missing gives the other; otherwise the sum.
    """
    fa = finite_or_none(a)
    fb = finite_or_none(b)
    if fa is not None and fb is not None:
        return fa + fb
    if fa is not None:
        return fa
    return fb


def clamp_fraction(value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.5
    if not math.isfinite(number):
        return 0.5
    return max(0.0, min(1.0, number))


def create_synthetic_root_id(existing_ids: Iterable[str], prefix: str = "root") -> str:
    """
    Try ``prefix``, then ``prefix_1``, ``prefix_2``, ... and return the first
    id not already used in the tree.
    """
    taken = (
        existing_ids
        if isinstance(existing_ids, (set, frozenset, dict))
        else set(existing_ids)
    )
    if prefix not in taken:
        return prefix
    index = 1
    while f"{prefix}_{index}" in taken:
        index += 1
    return f"{prefix}_{index}"


def _build_rooted_from(
    graph: TreeGraph,
    current_id: str,
    parent_id: Optional[str],
    incoming_length: Optional[float],
) -> Node:
    """
    Rebuild the rooted subtree hanging from ``current_id``, walking away from
    ``parent_id``. The returned node gets ``incoming_length`` as its length;
    every other node keeps the length of the edge it was reached through.
    """
    original = graph.node_by_id.get(current_id)
    if original is None:
        raise NodeNotFoundError(current_id)

    subtree_root = Node(
        id=original.id,
        name=original.name,
        length=incoming_length,
        start=original.start,
        end=original.end,
    )
    visited: Set[str] = {current_id}
    if parent_id is not None:
        visited.add(parent_id)

    stack: List[Tuple[str, Node]] = [(current_id, subtree_root)]
    while stack:
        node_id, new_node = stack.pop()
        for edge in graph.neighbors(node_id):
            if edge.to in visited:
                continue
            child_original = graph.node_by_id.get(edge.to)
            if child_original is None:
                raise NodeNotFoundError(edge.to)
            visited.add(edge.to)
            child = Node(
                id=child_original.id,
                name=child_original.name,
                length=edge.length,
                start=child_original.start,
                end=child_original.end,
            )
            new_node.append_child(child)
            stack.append((edge.to, child))
    return subtree_root


def collapse_unary_nodes(node: Node, is_root: bool = True) -> Node:
    """
    Remove nodes with exactly one child from a freshly built tree, in place.

    The child of a removed node takes the merged length of both branches and
    inherits the removed node's name if it has none. A unary root is replaced
    by its child, whose length becomes ``None``.
    """
    resolved = {}
    for current in reversed(node.traverse()):
        current.children = [resolved.pop(id(child)) for child in current.children]
        for child in current.children:
            child.parent = current

        replacement = current
        if len(current.children) == 1:
            only_child = current.children[0]
            if current is node and is_root:
                only_child.length = None
            else:
                only_child.length = merge_branch_lengths(current.length, only_child.length)
            if current.name and not only_child.name:
                only_child.name = current.name
            replacement = only_child
        resolved[id(current)] = replacement

    result = resolved[id(node)]
    result.parent = None
    return result


def _root_between(
    graph: TreeGraph,
    u: str,
    v: str,
    left_length: Optional[float],
    right_length: Optional[float],
    template: Optional[Node],
    config: RootingConfig,
) -> Node:
    """
    Hang both sides of the edge ``u``-``v`` under a synthetic root, then
    collapse the unary nodes left behind.
    """
    left = _build_rooted_from(graph, u, v, left_length)
    right = _build_rooted_from(graph, v, u, right_length)

    synthetic_root = Node(
        id=create_synthetic_root_id(graph.node_by_id, config.synthetic_root_prefix),
        name="",
        length=None,
        children=[left, right],
        start=template.start if template is not None else None,
        end=template.end if template is not None else None,
    )
    return collapse_unary_nodes(synthetic_root, is_root=True)


# =============================================================================
# CORE REROOTING OPERATIONS
# =============================================================================


def reroot_on_edge(
    graph: TreeGraph,
    u: str,
    v: str,
    fraction: float,
    template: Optional[Node] = None,
    config: Optional[RootingConfig] = None,
) -> Node:
    """
    Place a new root on the edge ``u``-``v``.

    Args:
        graph: Undirected view of the (expanded) tree
        u: Node id at one end of the pivot edge
        v: Node id at the other end
        fraction: Position of the new root along u->v; 0 is at ``u``, 1 at ``v``
        template: Original root; its ``start``/``end`` span is copied to the
            new root
        config: Rooting constants

    Returns:
        The new rooted tree, with unary nodes collapsed

    Raises:
        NodeNotFoundError: If ``u`` or ``v`` is not in the graph
        EdgeNotFoundError: If ``u`` and ``v`` are not adjacent
    """
    config = resolve_config(config)
    for node_id in (u, v):
        if node_id not in graph:
            raise NodeNotFoundError(node_id)
    if not graph.has_edge(u, v):
        raise EdgeNotFoundError(u, v)

    stored = finite_or_none(graph.edge_length(u, v))
    edge_length = max(0.0, stored) if stored is not None else config.default_branch_length
    left_length = edge_length * clamp_fraction(fraction)
    right_length = edge_length - left_length

    logger.debug(
        f"Rerooted on edge {u}-{v} (length {edge_length}) at fraction {fraction}"
    )
    return _root_between(graph, u, v, left_length, right_length, template, config)


def reroot_at_node(
    tree: Node, target_id: str, config: Optional[RootingConfig] = None
) -> Optional[Node]:
    """
    Reroot the tree so that the new root sits exactly at ``target_id``.

    The pivot is the edge between the target and its parent, with the whole
    edge length kept on the parent side. When the target is already the root,
    its first incident edge is used instead. An unspecified pivot length
    stays unspecified on both sides.

    Args:
        tree: Tree to reroot (left untouched)
        target_id: Id of the node to reroot at

    Returns:
        A new rooted tree, or ``None`` if ``target_id`` is not in the tree
    """
    expanded = expand_all_collapsed(tree)
    graph = build_tree_graph(expanded)
    if target_id not in graph:
        logger.debug(f"Cannot reroot: node '{target_id}' not found")
        return None

    anchor_id = graph.parent_by_id.get(target_id)
    if anchor_id is None:
        neighbors = graph.neighbors(target_id)
        if not neighbors:
            logger.debug("Cannot reroot a single-node tree; returning a copy")
            return expanded
        anchor_id = neighbors[0].to

    stored = finite_or_none(graph.edge_length(target_id, anchor_id))
    target_length = 0.0 if stored is not None else None
    anchor_length = max(0.0, stored) if stored is not None else None
    try:
        return _root_between(
            graph,
            target_id,
            anchor_id,
            target_length,
            anchor_length,
            expanded,
            resolve_config(config),
        )
    except ArboristError as e:
        logger.warning(f"Reroot at '{target_id}' failed: {e}")
        return None


def reroot_at_edge(
    tree: Node,
    child_id: str,
    fraction: float = 0.5,
    config: Optional[RootingConfig] = None,
) -> Optional[Node]:
    """
    Reroot on the branch above ``child_id``.

    ``fraction`` is measured from the child: 0 puts the root at the child,
    1 at its parent, 0.5 halfway along the branch.

    Returns:
        A new rooted tree, or ``None`` if the id is missing or is the root
    """
    expanded = expand_all_collapsed(tree)
    graph = build_tree_graph(expanded)
    parent_id = graph.parent_by_id.get(child_id)
    if parent_id is None:
        logger.debug(f"Cannot reroot above '{child_id}': missing node or root")
        return None
    try:
        return reroot_on_edge(graph, child_id, parent_id, fraction, expanded, config)
    except ArboristError as e:
        logger.warning(f"Reroot above '{child_id}' failed: {e}")
        return None


# =============================================================================
# UNROOTING
# =============================================================================


def unroot(tree: Node) -> Node:
    """
    Remove a binary root.

    The heavier child (more descendants; ties go to the first child) is
    dissolved into the root and its sibling hangs from the root with the
    merged length of both root branches. When both children are tips the
    second one absorbs the merged length. A tree whose root does not have
    exactly two children is returned unchanged (as a copy).

    Collapsed clades stay collapsed. Only the dissolved nodes lose their
    collapse state, and their hidden children hang from the new root.
    """
    root = clone_tree(tree)
    children = root.structural_children()
    if len(children) != 2:
        logger.debug(f"Root has {len(children)} children; treating tree as unrooted")
        return root

    left, right = children
    pivot = left if count_nodes(left) >= count_nodes(right) else right
    sibling = right if pivot is left else left

    new_root = Node(
        id=root.id,
        name=root.name,
        length=None,
        start=root.start,
        end=root.end,
    )
    lifted = pivot.structural_children()
    if lifted:
        for child in list(lifted):
            new_root.append_child(child)
        sibling.length = merge_branch_lengths(pivot.length, sibling.length)
        new_root.append_child(sibling)
    else:
        merged = merge_branch_lengths(left.length, right.length)
        left.length = None
        right.length = merged
        new_root.append_child(left)
        new_root.append_child(right)

    return collapse_unary_nodes(new_root, is_root=True)
