import pytest

from arborist import (
    format_length,
    is_bifurcating,
    is_ultrametric,
    root_to_tip_distances,
    toggle_collapse,
    total_branch_length,
)
from tests.helpers import balanced, caterpillar, clade, leaf, mammals, skewed


def test_is_bifurcating():
    assert is_bifurcating(mammals()) is True
    assert is_bifurcating(caterpillar()) is False
    assert is_bifurcating(None) is None
    assert is_bifurcating(leaf("solo")) is True


def test_is_bifurcating_sees_collapsed_clades():
    tree = clade("R", None, clade("X", 1.0, leaf("A"), leaf("B"), leaf("C")), leaf("D"))
    assert is_bifurcating(toggle_collapse(tree, "X")) is False


def test_is_ultrametric():
    assert is_ultrametric(balanced()) is True
    assert is_ultrametric(skewed()) is False
    assert is_ultrametric(leaf("solo")) is None
    assert is_ultrametric(None) is None


def test_is_ultrametric_tolerance():
    tree = clade("R", None, leaf("A", 1.0), leaf("B", 1.0 + 1e-9))
    assert is_ultrametric(tree) is True
    tree = clade("R", None, leaf("A", 1.0), leaf("B", 1.01))
    assert is_ultrametric(tree) is False
    assert is_ultrametric(tree, tolerance=0.05) is True


def test_root_to_tip_distances():
    assert root_to_tip_distances(mammals()) == pytest.approx(
        {"Human": 0.5, "Chimpanzee": 0.5, "Mouse": 0.6, "Rat": 0.55}
    )
    # Missing lengths count as one
    tree = clade("R", None, leaf("A"), leaf("B", 2.0))
    assert root_to_tip_distances(tree) == {"A": 1.0, "B": 2.0}


def test_total_branch_length():
    assert total_branch_length(mammals()) == pytest.approx(1.75)
    tree = clade("R", 5.0, leaf("A"), leaf("B", 2.0))
    assert total_branch_length(tree) == pytest.approx(2.0)


def test_format_length():
    assert format_length(None) == "0"
    assert format_length(float("nan")) == "0"
    assert format_length(0.0) == "0"
    assert format_length(0.2) == "0.2"
    assert format_length(12.34567) == "12.35"
    assert format_length(0.0001234) == "1.23e-04"
    assert format_length(1234.56) == "1234.6"
