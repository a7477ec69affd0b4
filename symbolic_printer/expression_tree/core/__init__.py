"""Core expression tree components."""

from .node import (
  Node, NumberNode, ConstantNode, BinaryOpNode, UnaryOpNode, RootNode, PowerNode,
  is_zero, is_one, is_root_like, get_root_operand,
  get_expression_priority, order_product_operands, display_fraction
)
from .operators import (
  NodeType, OpType, BINARY_OP_MAP, UNARY_OP_MAP,
  evaluate_binary_op, evaluate_unary_op, evaluate_power
)

__all__ = [
  'Node', 'NumberNode', 'ConstantNode', 'BinaryOpNode', 'UnaryOpNode', 'RootNode', 'PowerNode',
  'is_zero', 'is_one', 'is_root_like', 'get_root_operand',
  'get_expression_priority', 'order_product_operands', 'display_fraction',
  'NodeType', 'OpType', 'BINARY_OP_MAP', 'UNARY_OP_MAP',
  'evaluate_binary_op', 'evaluate_unary_op', 'evaluate_power'
]
