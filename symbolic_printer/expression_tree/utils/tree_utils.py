"""
Tree Utility Functions

Traversal and inspection helpers for expression trees. Used for diagnostics
(node counts and depth in the conversion log) and for checking structural
properties of converted trees.
"""

from collections import deque
from typing import List

from ..core.node import Node, BinaryOpNode, UnaryOpNode, RootNode, PowerNode


def get_children(node: Node) -> List[Node]:
    """Direct children of a node, left to right"""
    if isinstance(node, BinaryOpNode):
        return [node.left, node.right]
    elif isinstance(node, (UnaryOpNode, RootNode)):
        return [node.operand]
    elif isinstance(node, PowerNode):
        return [node.base, node.exponent]
    return []


def get_all_nodes(node: Node, traversal_order: str = 'breadth_first') -> List[Node]:
    """
    Get all nodes in the tree using specified traversal order.

    Args:
        node: Root node of the tree
        traversal_order: 'breadth_first' (default) or 'depth_first'

    Returns:
        List of all nodes in the tree
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Node) -> List[Node]:
    nodes_to_visit = deque([node])
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.popleft()
        all_nodes.append(current_node)
        nodes_to_visit.extend(get_children(current_node))

    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    nodes = [node]
    for child in get_children(node):
        nodes.extend(_depth_first_traversal(child))
    return nodes


def calculate_tree_depth(node: Node) -> int:
    """Maximum depth of the tree (leaf nodes have depth 1)"""
    children = get_children(node)
    if not children:
        return 1
    return 1 + max(calculate_tree_depth(child) for child in children)


def count_nodes(node: Node) -> int:
    return len(get_all_nodes(node))


def find_nodes_by_type(node: Node, node_type: type) -> List[Node]:
    """
    Find all nodes of a specific type in the tree.

    Args:
        node: Root node of the tree
        node_type: Type of nodes to find (e.g., RootNode, NumberNode)

    Returns:
        List of nodes matching the specified type
    """
    return [n for n in get_all_nodes(node) if isinstance(n, node_type)]
