"""
Structural edits that do not touch the root: collapse/expand and child swaps.

Each edit returns a new tree; the input is never modified. The ``can_*``
predicates mirror the edits' preconditions so callers can enable or disable
controls without performing the edit.
"""

from __future__ import annotations

import logging
from typing import Optional

from arborist.tree import Node, clone_tree, find_node_by_id

logger = logging.getLogger(__name__)


def can_toggle_collapse(tree: Optional[Node], node_id: Optional[str]) -> bool:
    node = find_node_by_id(tree, node_id)
    if node is None:
        return False
    return bool(node.children) or bool(node.collapsed_children)


def toggle_collapse(tree: Node, node_id: str) -> Node:
    """
    Collapse or expand the node ``node_id``.

    A collapsed node gets its hidden children back and loses the collapsed
    slot. Otherwise its visible children move to the collapsed slot. Tips and
    missing ids leave the copy unchanged.
    """
    result = clone_tree(tree)
    node = find_node_by_id(result, node_id)
    if node is None:
        logger.debug(f"toggle_collapse: node '{node_id}' not found")
        return result

    if node.collapsed_children:
        node.children = node.collapsed_children
        node.collapsed_children = None
    elif node.children:
        node.collapsed_children = node.children
        node.children = []
    return result


def can_swap(tree: Optional[Node], node_id: Optional[str]) -> bool:
    node = find_node_by_id(tree, node_id)
    if node is None:
        return False
    return len(node.children) >= 2 or len(node.collapsed_children or ()) >= 2


def swap_children(tree: Node, node_id: str) -> Node:
    """
    Reverse the child order of ``node_id``.

    The visible slot is reversed when it holds two or more children, else the
    collapsed slot under the same condition. Otherwise the copy is unchanged.
    """
    result = clone_tree(tree)
    node = find_node_by_id(result, node_id)
    if node is None:
        logger.debug(f"swap_children: node '{node_id}' not found")
        return result

    if len(node.children) >= 2:
        node.children.reverse()
    elif node.collapsed_children and len(node.collapsed_children) >= 2:
        node.collapsed_children.reverse()
    return result
