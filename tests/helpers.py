"""Tree builders shared by the test modules. Node ids equal node names."""

from typing import Any, Dict, List, Optional

from arborist import Node
from arborist.metrics import root_to_tip_distances


def leaf(name: str, length: Optional[float] = None) -> Node:
    return Node(id=name, name=name, length=length)


def clade(name: str, length: Optional[float], *children: Node) -> Node:
    return Node(id=name, name=name, length=length, children=list(children))


def mammals() -> Node:
    r"""
    ((Human:0.2,Chimpanzee:0.2)Primates:0.3,(Mouse:0.5,Rat:0.45)Rodents:0.1)Mammals;
    """
    return clade(
        "Mammals",
        None,
        clade("Primates", 0.3, leaf("Human", 0.2), leaf("Chimpanzee", 0.2)),
        clade("Rodents", 0.1, leaf("Mouse", 0.5), leaf("Rat", 0.45)),
    )


def skewed() -> Node:
    r"""
    ((A:1,B:1)X:1,(C:1,D:1)Y:3)R;
    """
    return clade(
        "R",
        None,
        clade("X", 1.0, leaf("A", 1.0), leaf("B", 1.0)),
        clade("Y", 3.0, leaf("C", 1.0), leaf("D", 1.0)),
    )


def balanced() -> Node:
    r"""
    ((A:1,B:1)X:1,(C:1,D:1)Y:1)R;
    """
    return clade(
        "R",
        None,
        clade("X", 1.0, leaf("A", 1.0), leaf("B", 1.0)),
        clade("Y", 1.0, leaf("C", 1.0), leaf("D", 1.0)),
    )


def caterpillar() -> Node:
    r"""
    (A:1,(B:2,(C:3,(D:4,E:5)W:1)V:2)U:0.5,F:1.5)T;  (trifurcating root)
    """
    return clade(
        "T",
        None,
        leaf("A", 1.0),
        clade(
            "U",
            0.5,
            leaf("B", 2.0),
            clade("V", 2.0, leaf("C", 3.0), clade("W", 1.0, leaf("D", 4.0), leaf("E", 5.0))),
        ),
        leaf("F", 1.5),
    )


def tip_names(tree: Node) -> List[str]:
    return sorted(node.name for node in tree.get_leaves())


def tip_depths(tree: Node) -> Dict[str, float]:
    """Root-to-tip distance keyed by tip name."""
    by_id = {node.id: node.name for node in tree.traverse_structural()}
    return {by_id[k]: v for k, v in root_to_tip_distances(tree).items()}


def shape(tree: Node) -> Any:
    """Nested (id, length, children) tuples for structural comparison."""
    return (tree.id, tree.length, [shape(child) for child in tree.children])


def integer_ids() -> Node:
    r"""
    The ``skewed`` shape with integer ids: ((4:1,5:1)2:1,(6:1,7:1)3:3)1;
    """

    def tip(node_id: int) -> Dict[str, Any]:
        return {"id": node_id, "length": 1.0}

    return Node.from_dict(
        {
            "id": 1,
            "children": [
                {"id": 2, "length": 1.0, "children": [tip(4), tip(5)]},
                {"id": 3, "length": 3.0, "children": [tip(6), tip(7)]},
            ],
        }
    )
