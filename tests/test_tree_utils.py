import math

import pytest

from symbolic_printer.expression_tree import (
    NumberNode, ConstantNode, BinaryOpNode, UnaryOpNode, RootNode, PowerNode
)
from symbolic_printer.expression_tree.utils.tree_utils import (
    get_children, get_all_nodes, calculate_tree_depth, count_nodes,
    find_nodes_by_type
)


@pytest.fixture
def tree():
    # (2·π + √3) - (-e)²
    product = BinaryOpNode('*', NumberNode(2), ConstantNode('π', math.pi))
    total = BinaryOpNode('+', product, RootNode(NumberNode(3)))
    power = PowerNode(UnaryOpNode('neg', ConstantNode('e', math.e)), NumberNode(2))
    return BinaryOpNode('-', total, power)


def test_get_children(tree):
    assert get_children(tree) == [tree.left, tree.right]
    assert get_children(tree.right) == [tree.right.base, tree.right.exponent]
    assert get_children(NumberNode(1)) == []


def test_traversal_orders(tree):
    breadth = get_all_nodes(tree)
    depth = get_all_nodes(tree, 'depth_first')
    assert len(breadth) == len(depth) == 11
    assert breadth[0] is tree and depth[0] is tree
    assert breadth[1] is tree.left and breadth[2] is tree.right
    assert depth[1] is tree.left and depth[2] is tree.left.left


def test_invalid_traversal_order(tree):
    with pytest.raises(ValueError):
        get_all_nodes(tree, 'sideways')


def test_depth_and_size(tree):
    assert calculate_tree_depth(tree) == 4
    assert calculate_tree_depth(NumberNode(1)) == 1
    assert count_nodes(tree) == 11


def test_find_nodes(tree):
    constants = find_nodes_by_type(tree, ConstantNode)
    assert sorted(c.symbol for c in constants) == ['e', 'π']
    assert len(find_nodes_by_type(tree, NumberNode)) == 3
    assert len(find_nodes_by_type(tree, BinaryOpNode)) == 3
    assert len(find_nodes_by_type(tree, UnaryOpNode)) == 1
