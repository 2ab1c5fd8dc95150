from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Set
from uuid import uuid4

try:
    from typing import Self
except ImportError:
    from typing_extensions import Self


class Node:
    """
    Phylogenetic tree node.

    A node owns two child slots. ``children`` holds the visible children in
    display order. ``collapsed_children`` holds children hidden by a collapse
    edit; it is ``None`` when the node is not collapsed. Traversal-relevant
    children ("structural children") are the visible ones if any, else the
    collapsed ones.

    ``length`` is the branch length to the parent. ``None`` means the length
    is unspecified, which is not the same as ``0.0``.

    ``start`` and ``end`` are source-span metadata owned by external callers;
    they are copied through every transformation and never interpreted.
    """

    __slots__ = (
        "id",
        "name",
        "length",
        "children",
        "collapsed_children",
        "start",
        "end",
        "parent",
    )

    id: str
    name: str
    length: Optional[float]
    children: List[Self]
    collapsed_children: Optional[List[Self]]
    start: Optional[int]
    end: Optional[int]
    parent: Optional[Self]

    def __init__(
        self,
        id: Optional[str] = None,
        name: str = "",
        length: Optional[float] = None,
        children: Optional[List[Self]] = None,
        collapsed_children: Optional[List[Self]] = None,
        start: Optional[int] = None,
        end: Optional[int] = None,
    ):
        self.id = id if id is not None else str(uuid4())
        self.name = name or ""
        self.length = length
        # Avoid mutable default arguments; create fresh containers
        self.children = list(children) if children is not None else []
        self.collapsed_children = (
            list(collapsed_children) if collapsed_children is not None else None
        )
        self.start = start
        self.end = end
        self.parent = None
        for child in self.children:
            child.parent = self
        for child in self.collapsed_children or ():
            child.parent = self

    def __repr__(self) -> str:
        return f"Node('{self.id}', name='{self.name}')"

    # ------------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------------

    def append_child(self, node: Self) -> None:
        node.parent = self
        self.children.append(node)

    def structural_children(self) -> List[Self]:
        if self.children:
            return self.children
        return self.collapsed_children or []

    def is_leaf(self) -> bool:
        """A node is a tip when it has no structural children."""
        return not self.structural_children()

    def is_collapsed(self) -> bool:
        return bool(self.collapsed_children)

    def traverse(self) -> List[Self]:
        """
        Return all nodes reachable through visible children (pre-order).
        Uses an explicit stack to avoid recursion depth issues.
        """
        nodes: List[Self] = []
        stack: List[Self] = [self]
        while stack:
            current = stack.pop()
            nodes.append(current)
            # Reverse to keep left-to-right visit order
            stack.extend(reversed(current.children))
        return nodes

    def traverse_structural(self) -> Iterator[Self]:
        """Pre-order walk over structural children."""
        stack: List[Self] = [self]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.structural_children()))

    def get_leaves(self) -> List[Self]:
        return [node for node in self.traverse_structural() if node.is_leaf()]

    def get_root(self) -> Self:
        cur = self
        while cur.parent is not None:
            cur = cur.parent
        return cur

    # ------------------------------------------------------------------------
    # Copying and expansion
    # ------------------------------------------------------------------------

    def deep_copy(self) -> Self:
        """
        Independent copy of the subtree, both child slots included.
        The copy's root has no parent.
        """
        new_root = self._shallow_copy()
        stack = [(self, new_root)]
        while stack:
            original, copy = stack.pop()
            for child in original.children:
                child_copy = child._shallow_copy()
                child_copy.parent = copy
                copy.children.append(child_copy)
                stack.append((child, child_copy))
            if original.collapsed_children is not None:
                copy.collapsed_children = []
                for child in original.collapsed_children:
                    child_copy = child._shallow_copy()
                    child_copy.parent = copy
                    copy.collapsed_children.append(child_copy)
                    stack.append((child, child_copy))
        return new_root

    def _shallow_copy(self) -> Self:
        # Skip __init__; the caller wires children and parent.
        new_node = object.__new__(type(self))
        new_node.id = self.id
        new_node.name = self.name
        new_node.length = self.length
        new_node.children = []
        new_node.collapsed_children = None
        new_node.start = self.start
        new_node.end = self.end
        new_node.parent = None
        return new_node

    def expand_all(self) -> None:
        """Promote every collapsed slot in this subtree to visible, in place."""
        for node in self.traverse_structural():
            if node.collapsed_children:
                node.children = node.collapsed_children
            node.collapsed_children = None

    # ------------------------------------------------------------------------
    # Dict contract
    # ------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "length": self.length,
            "children": [child.to_dict() for child in self.children],
            "start": self.start,
            "end": self.end,
        }
        if self.collapsed_children is not None:
            data["collapsed_children"] = [
                child.to_dict() for child in self.collapsed_children
            ]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Self:
        """
        Build a tree from the dict shape produced by ``to_dict``.

        The camel-case ``_collapsedChildren`` key written by JavaScript hosts
        is accepted as an alias of ``collapsed_children``.
        """
        collapsed = data.get("collapsed_children", data.get("_collapsedChildren"))
        length = data.get("length")
        return cls(
            id=data.get("id"),
            name=data.get("name") or "",
            length=float(length) if length is not None else None,
            children=[cls.from_dict(child) for child in data.get("children") or []],
            collapsed_children=(
                [cls.from_dict(child) for child in collapsed]
                if collapsed is not None
                else None
            ),
            start=data.get("start"),
            end=data.get("end"),
        )


# ----------------------------------------------------------------------------
# Functional interface
# ----------------------------------------------------------------------------


def structural_children(node: Optional[Node]) -> List[Node]:
    """Visible children if any, else collapsed children, else an empty list."""
    if node is None:
        return []
    return node.structural_children()


def find_node_by_id(root: Optional[Node], node_id: Optional[str]) -> Optional[Node]:
    """
    Find a node by id, searching visible and collapsed children so that
    collapsed subtrees stay addressable.
    """
    if root is None or not node_id:
        return None
    stack: List[Node] = [root]
    seen: Set[int] = set()
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        if node.id == node_id:
            return node
        stack.extend(node.children)
        stack.extend(node.collapsed_children or ())
    return None


def clone_tree(root: Node) -> Node:
    return root.deep_copy()


def count_tips(root: Optional[Node]) -> int:
    if root is None:
        return 0
    return sum(1 for node in root.traverse_structural() if node.is_leaf())


def count_nodes(root: Optional[Node]) -> int:
    if root is None:
        return 0
    return sum(1 for _ in root.traverse_structural())


def expand_all_collapsed(root: Node) -> Node:
    """
    Return a copy of the tree with every collapsed subtree expanded.

    Rerooting and the rooting strategies run on the expanded copy; rooting
    around a collapsed boundary would hide part of the topology.
    """
    expanded = root.deep_copy()
    expanded.expand_all()
    return expanded
