"""Expression Tree Module

Immutable expression trees for symbolic number rendering.
"""

from .core.node import (
  Node,
  NumberNode,
  ConstantNode,
  BinaryOpNode,
  UnaryOpNode,
  RootNode,
  PowerNode
)
from .core.operators import (
  NodeType,
  OpType,
  BINARY_OP_MAP,
  UNARY_OP_MAP,
  evaluate_binary_op,
  evaluate_unary_op,
  evaluate_power
)
from .utils.exact_form import parse_exact_form
from .utils.tree_utils import get_all_nodes, calculate_tree_depth, count_nodes

__all__ = [
  "Node", "NumberNode", "ConstantNode", "BinaryOpNode", "UnaryOpNode", "RootNode", "PowerNode",
  "NodeType", "OpType",
  "BINARY_OP_MAP", "UNARY_OP_MAP",
  "evaluate_binary_op", "evaluate_unary_op", "evaluate_power",
  "parse_exact_form",
  "get_all_nodes", "calculate_tree_depth", "count_nodes"
]
