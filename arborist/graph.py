"""
Undirected view of a rooted tree.

Every rooting algorithm projects the rooted tree onto an adjacency structure,
computes on that, and re-materializes a fresh rooted tree from it. The rooted
representation itself is never edited in place.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

from arborist.tree import Node


class Edge(NamedTuple):
    to: str
    length: Optional[float]


@dataclass
class TreeGraph:
    node_by_id: Dict[str, Node] = field(default_factory=dict)
    adjacency: Dict[str, List[Edge]] = field(default_factory=dict)
    parent_by_id: Dict[str, str] = field(default_factory=dict)
    root_id: Optional[str] = None

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.node_by_id

    def neighbors(self, node_id: str) -> List[Edge]:
        return self.adjacency.get(node_id, [])

    def has_edge(self, u: str, v: str) -> bool:
        return any(edge.to == v for edge in self.neighbors(u))

    def edge_length(self, u: str, v: str) -> Optional[float]:
        """Stored length of the edge u-v; ``None`` if unspecified or absent."""
        for edge in self.neighbors(u):
            if edge.to == v:
                return edge.length
        return None

    def tip_ids(self) -> List[str]:
        """Ids of nodes without children, in traversal order."""
        return [
            node_id for node_id, node in self.node_by_id.items() if not node.children
        ]

    def edges(self) -> Iterator[Tuple[str, str, Optional[float]]]:
        """
        Each undirected edge once, as ``(parent, child, length)``.

        Enumeration follows node insertion order (pre-order) and then
        adjacency order, which makes tie-breaking in the rooting strategies
        deterministic. Ids are never compared with each other.
        """
        for u, edges in self.adjacency.items():
            for edge in edges:
                if self.parent_by_id.get(edge.to) == u:
                    yield u, edge.to, edge.length


def finite_or_none(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def numeric_length(value: Optional[float], default: float = 1.0) -> float:
    """
    Weight of an edge for distance accumulation.

    Missing or non-finite lengths count as ``default``; negative lengths are
    clamped to zero.
    """
    number = finite_or_none(value)
    if number is None:
        return default
    return max(0.0, number)


def build_tree_graph(root: Node) -> TreeGraph:
    """
    Build the undirected adjacency view of ``root`` in one pass.

    Only visible children are followed; callers expand collapsed subtrees
    first. Edge lengths are the child's stored length, with non-finite values
    mapped to ``None``. No default is applied here.
    """
    graph = TreeGraph(root_id=root.id)

    stack: List[Tuple[Node, Optional[str]]] = [(root, None)]
    while stack:
        node, parent_id = stack.pop()
        if node.id in graph.node_by_id:
            # Duplicate id or cycle; the first occurrence wins.
            continue
        graph.node_by_id[node.id] = node
        graph.adjacency[node.id] = []
        if parent_id is not None:
            length = finite_or_none(node.length)
            graph.parent_by_id[node.id] = parent_id
            graph.adjacency[parent_id].append(Edge(node.id, length))
            graph.adjacency[node.id].append(Edge(parent_id, length))
        # Reverse to keep left-to-right visit order (pre-order)
        for child in reversed(node.children):
            stack.append((child, node.id))
    return graph
