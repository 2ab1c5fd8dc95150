"""
Custom exceptions for the tree transformation engine.

Only the low-level rerooting walk raises these. Public entry points catch them
and fall back to their documented no-op results.
"""

from __future__ import annotations


class ArboristError(Exception):
    """Base exception for tree transformation errors."""

    pass


class NodeNotFoundError(ArboristError, KeyError):
    """Raised when a node id is not present in the tree graph."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Missing node '{node_id}' in graph")

    def __str__(self) -> str:
        return self.args[0]


class EdgeNotFoundError(ArboristError):
    """Raised when two node ids are not joined by an edge."""

    def __init__(self, u: str, v: str):
        self.u = u
        self.v = v
        super().__init__(f"No edge between '{u}' and '{v}'")
