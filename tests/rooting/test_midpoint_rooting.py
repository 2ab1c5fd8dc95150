import numpy as np
import pytest

from arborist import (
    build_tree_graph,
    count_tips,
    find_node_by_id,
    midpoint_root,
    toggle_collapse,
    total_branch_length,
)
from arborist.distances import tip_distance_matrix
from arborist.rooting import find_farthest_tips
from tests.helpers import caterpillar, clade, leaf, mammals, skewed, tip_depths, tip_names


def test_find_farthest_tips():
    graph = build_tree_graph(skewed())
    a, b, dist = find_farthest_tips(graph)
    # First maximal pair in tip order
    assert (a, b) == ("A", "C")
    assert dist == pytest.approx(6.0)


def test_find_farthest_tips_needs_two_tips():
    assert find_farthest_tips(build_tree_graph(leaf("solo"))) is None


def test_midpoint_root_inside_long_edge():
    rooted = midpoint_root(skewed())
    assert rooted.id == "root"
    x, y = rooted.children
    assert x.id == "X"
    assert y.id == "Y"
    # Root sits one third of the way from R to Y; R is dissolved
    assert x.length == pytest.approx(2.0)
    assert y.length == pytest.approx(2.0)
    depths = tip_depths(rooted)
    assert depths == pytest.approx({"A": 3.0, "B": 3.0, "C": 3.0, "D": 3.0})


def test_midpoint_symmetry_on_longest_path():
    tree = mammals()
    rooted = midpoint_root(tree)
    assert len(rooted.children) == 2
    depths = tip_depths(rooted)
    assert depths["Human"] == pytest.approx(0.55)
    assert depths["Mouse"] == pytest.approx(0.55)
    assert depths["Human"] + depths["Mouse"] == pytest.approx(1.1)


def test_midpoint_root_on_caterpillar():
    tree = caterpillar()
    rooted = midpoint_root(tree)
    assert count_tips(rooted) == count_tips(tree)
    assert total_branch_length(rooted) == pytest.approx(total_branch_length(tree))
    depths = tip_depths(rooted)
    # B..E and E..F both have length 10; B..E comes first in tip order and
    # its midpoint lands exactly on node W
    assert depths["B"] == pytest.approx(5.0)
    assert depths["E"] == pytest.approx(5.0)
    assert depths["D"] == pytest.approx(4.0)
    assert max(depths.values()) == pytest.approx(5.0)


def test_midpoint_root_keeps_tip_set():
    tree = mammals()
    rooted = midpoint_root(tree)
    assert tip_names(rooted) == tip_names(tree)
    assert count_tips(rooted) == 4


def test_midpoint_root_single_tip_is_noop():
    tree = clade("R", None, leaf("A", 1.0))
    rooted = midpoint_root(tree)
    assert rooted is not tree
    assert rooted.to_dict() == tree.to_dict()


def test_midpoint_root_zero_lengths_is_noop():
    tree = clade("R", None, leaf("A", 0.0), leaf("B", 0.0), leaf("C", 0.0))
    rooted = midpoint_root(tree)
    assert rooted.to_dict() == tree.to_dict()


def test_midpoint_root_expands_collapsed_clades():
    collapsed = toggle_collapse(skewed(), "Y")
    rooted = midpoint_root(collapsed)
    assert tip_depths(rooted) == pytest.approx({"A": 3.0, "B": 3.0, "C": 3.0, "D": 3.0})


def test_midpoint_root_does_not_mutate_input():
    tree = skewed()
    before = tree.to_dict()
    midpoint_root(tree)
    assert tree.to_dict() == before


def test_midpoint_on_zero_length_pivot_edge():
    # Midpoint falls exactly on node X; the first edge reaching it is A-X
    tree = clade("R", None, clade("X", 0.0, leaf("A", 2.0), leaf("B", 1.0)), leaf("C", 2.0))
    rooted = midpoint_root(tree)
    assert count_tips(rooted) == 3
    depths = tip_depths(rooted)
    assert depths["A"] == pytest.approx(2.0)
    assert depths["C"] == pytest.approx(2.0)


def test_find_farthest_tips_agrees_with_distance_matrix():
    for tree in (mammals(), skewed(), caterpillar()):
        graph = build_tree_graph(tree)
        tips = graph.tip_ids()
        matrix = tip_distance_matrix(graph, tips)
        rows, cols = np.triu_indices(len(tips), k=1)
        best = int(np.argmax(matrix[rows, cols]))
        a, b, dist = find_farthest_tips(graph)
        assert (a, b) == (tips[rows[best]], tips[cols[best]])
        assert dist == pytest.approx(matrix[rows[best], cols[best]])


def test_find_farthest_tips_tie_keeps_first_pair():
    # B..E and E..F are both 10 apart
    a, b, dist = find_farthest_tips(build_tree_graph(caterpillar()))
    assert (a, b) == ("B", "E")
    assert dist == pytest.approx(10.0)


def test_midpoint_root_with_missing_lengths():
    # A and B have no length and count as 1: A..C = 1 + 1 + 4
    tree = clade("R", None, clade("X", 1.0, leaf("A"), leaf("B")), leaf("C", 4.0))
    rooted = midpoint_root(tree)
    assert rooted.id == "root"
    x, c = rooted.children
    assert (x.id, c.id) == ("X", "C")
    assert x.length == pytest.approx(2.0)
    assert c.length == pytest.approx(3.0)
    assert find_node_by_id(rooted, "A").length is None
    assert find_node_by_id(rooted, "B").length is None
    assert tip_depths(rooted) == pytest.approx({"A": 3.0, "B": 3.0, "C": 3.0})
