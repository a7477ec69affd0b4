import math
import numpy as np
import sympy as sp
from abc import ABC, abstractmethod
from typing import Optional, Tuple
from .operators import (
  NodeType, BINARY_OP_MAP, UNARY_OP_MAP, MAX_SAFE_INTEGER,
  MUL_GLYPH, SQRT_GLYPH, CBRT_GLYPH, SUPERSCRIPTS,
  evaluate_binary_op, evaluate_unary_op, evaluate_power
)
from ..utils.factorization import find_gcd, factorize_radicand
from ...config import ConversionConfig, DEFAULT_CONFIG
from ...constants import find_constant

# Largest denominator tried when rendering a float as a fraction
MAX_DISPLAY_DENOMINATOR = 1000

# Longest plain decimal rendering before switching to fixed precision
MAX_DECIMAL_LENGTH = 10

# Multiplication ordering: lower value is rendered first
PRIORITY_NUMBER = 1
PRIORITY_ROOT = 2
PRIORITY_OTHER = 6


class Node(ABC):
  """Immutable expression tree node"""

  __slots__ = ('_frozen',)

  node_type: NodeType

  def __setattr__(self, name, value):
    if getattr(self, '_frozen', False):
      raise AttributeError(f"{type(self).__name__} is immutable")
    object.__setattr__(self, name, value)

  def _freeze(self):
    object.__setattr__(self, '_frozen', True)

  @abstractmethod
  def evaluate(self) -> float:
    pass

  @abstractmethod
  def to_string(self, config: ConversionConfig = DEFAULT_CONFIG) -> str:
    pass

  @abstractmethod
  def simplify(self, config: ConversionConfig = DEFAULT_CONFIG) -> 'Node':
    pass

  @abstractmethod
  def equals(self, other: 'Node', config: ConversionConfig = DEFAULT_CONFIG) -> bool:
    pass

  @abstractmethod
  def to_sympy(self, config: ConversionConfig = DEFAULT_CONFIG) -> sp.Expr:
    pass

  def __str__(self) -> str:
    return self.to_string()


class NumberNode(Node):
  __slots__ = ('value',)
  node_type = NodeType.NUMBER

  def __init__(self, value: float):
    self.value = float(value)
    self._freeze()

  def evaluate(self) -> float:
    return self.value

  def to_string(self, config: ConversionConfig = DEFAULT_CONFIG) -> str:
    value = self.value
    if math.isnan(value):
      return "NaN"
    if math.isinf(value):
      return "∞" if value > 0 else "-∞"
    if abs(value) < config.epsilon:
      return "0"
    if value.is_integer():
      return str(int(value))

    fraction = display_fraction(value, config)
    if fraction is not None:
      numerator, denominator = fraction
      separator = ' / ' if config.space_separation else '/'
      return f"{numerator}{separator}{denominator}"

    text = np.format_float_positional(value, trim='-')
    if len(text) > MAX_DECIMAL_LENGTH:
      return f"{value:.{config.precision}f}"
    return text

  def simplify(self, config: ConversionConfig = DEFAULT_CONFIG) -> 'Node':
    return self

  def equals(self, other: Node, config: ConversionConfig = DEFAULT_CONFIG) -> bool:
    if not isinstance(other, NumberNode):
      return False
    return _values_close(self.value, other.value, config.epsilon)

  def to_sympy(self, config: ConversionConfig = DEFAULT_CONFIG) -> sp.Expr:
    value = self.value
    if math.isnan(value):
      return sp.nan
    if math.isinf(value):
      return sp.oo if value > 0 else -sp.oo
    if value.is_integer():
      return sp.Integer(int(value))
    fraction = display_fraction(value, config)
    if fraction is not None:
      return sp.Rational(*fraction)
    return sp.Float(value)

  def __repr__(self) -> str:
    return f"NumberNode({self.value!r})"


class ConstantNode(Node):
  __slots__ = ('symbol', 'value')
  node_type = NodeType.CONSTANT

  def __init__(self, symbol: str, value: float):
    self.symbol = symbol
    self.value = float(value)
    self._freeze()

  def evaluate(self) -> float:
    return self.value

  def to_string(self, config: ConversionConfig = DEFAULT_CONFIG) -> str:
    entry = find_constant(self.symbol)
    if entry is not None:
      return entry.symbol_for(config)
    return self.symbol

  def simplify(self, config: ConversionConfig = DEFAULT_CONFIG) -> 'Node':
    return self

  def equals(self, other: Node, config: ConversionConfig = DEFAULT_CONFIG) -> bool:
    if not isinstance(other, ConstantNode):
      return False
    return self.symbol == other.symbol and _values_close(self.value, other.value, config.epsilon)

  def to_sympy(self, config: ConversionConfig = DEFAULT_CONFIG) -> sp.Expr:
    entry = find_constant(self.symbol)
    if entry is not None:
      return entry.sympy()
    return sp.Float(self.value)

  def __repr__(self) -> str:
    return f"ConstantNode({self.symbol!r}, {self.value!r})"


class BinaryOpNode(Node):
  __slots__ = ('operator', 'left', 'right')
  node_type = NodeType.BINARY_OP

  def __init__(self, operator: str, left: Node, right: Node):
    if operator not in BINARY_OP_MAP:
      raise ValueError(f"Unknown binary operator: {operator}")
    if operator == '*':
      left, right = order_product_operands(left, right)
    self.operator = operator
    self.left = left
    self.right = right
    self._freeze()

  def evaluate(self) -> float:
    return evaluate_binary_op(self.left.evaluate(), self.right.evaluate(), self.operator)

  def to_string(self, config: ConversionConfig = DEFAULT_CONFIG) -> str:
    if self.operator == '*':
      # Ordering is re-derived here, not trusted from construction
      first, second = order_product_operands(self.left, self.right)
      return _join(first.to_string(config), MUL_GLYPH, second.to_string(config), config)

    left_str = self.left.to_string(config)
    right_str = self.right.to_string(config)
    # + - / all group additive children explicitly
    if _is_additive(self.left):
      left_str = f"({left_str})"
    if _is_additive(self.right):
      right_str = f"({right_str})"
    return _join(left_str, self.operator, right_str, config)

  def simplify(self, config: ConversionConfig = DEFAULT_CONFIG) -> Node:
    left = self.left.simplify(config)
    right = self.right.simplify(config)

    if isinstance(left, NumberNode) and isinstance(right, NumberNode):
      return NumberNode(evaluate_binary_op(left.value, right.value, self.operator))

    if self.operator == '+':
      result = _simplify_sum(left, right, config)
    elif self.operator == '-':
      result = _simplify_difference(left, right, config)
    elif self.operator == '*':
      result = _simplify_product(left, right, config)
    else:
      result = _simplify_quotient(left, right, config)

    if result is not None:
      return result
    return BinaryOpNode(self.operator, left, right)

  def equals(self, other: Node, config: ConversionConfig = DEFAULT_CONFIG) -> bool:
    if not isinstance(other, BinaryOpNode):
      return False
    return (self.operator == other.operator
            and self.left.equals(other.left, config)
            and self.right.equals(other.right, config))

  def to_sympy(self, config: ConversionConfig = DEFAULT_CONFIG) -> sp.Expr:
    left = self.left.to_sympy(config)
    right = self.right.to_sympy(config)
    if self.operator == '+':
      return sp.Add(left, right)
    elif self.operator == '-':
      return sp.Add(left, sp.Mul(-1, right))
    elif self.operator == '*':
      return sp.Mul(left, right)
    return sp.Mul(left, sp.Pow(right, -1))

  def __repr__(self) -> str:
    return f"BinaryOpNode({self.operator!r}, {self.left!r}, {self.right!r})"


class UnaryOpNode(Node):
  __slots__ = ('operator', 'operand')
  node_type = NodeType.UNARY_OP

  def __init__(self, operator: str, operand: Node):
    if operator not in UNARY_OP_MAP:
      raise ValueError(f"Unknown unary operator: {operator}")
    self.operator = operator
    self.operand = operand
    self._freeze()

  def evaluate(self) -> float:
    return evaluate_unary_op(self.operand.evaluate(), self.operator)

  def to_string(self, config: ConversionConfig = DEFAULT_CONFIG) -> str:
    operand_str = self.operand.to_string(config)
    if operand_str == '0':
      return '0'

    if self.operator == 'neg':
      if config.space_separation and _is_compound(self.operand, operand_str):
        return f"-({operand_str})"
      return f"-{operand_str}"

    glyph = SQRT_GLYPH if self.operator == 'sqrt' else CBRT_GLYPH
    if config.space_separation:
      return f"{glyph}({operand_str})"
    return f"{glyph}{operand_str}"

  def simplify(self, config: ConversionConfig = DEFAULT_CONFIG) -> Node:
    operand = self.operand.simplify(config)

    # --a = a
    if (self.operator == 'neg' and isinstance(operand, UnaryOpNode)
        and operand.operator == 'neg'):
      return operand.operand

    if self.operator in ('sqrt', 'cbrt') and isinstance(operand, NumberNode):
      root = evaluate_unary_op(operand.value, self.operator)
      if math.isfinite(root) and root.is_integer():
        return NumberNode(root)

    return UnaryOpNode(self.operator, operand)

  def equals(self, other: Node, config: ConversionConfig = DEFAULT_CONFIG) -> bool:
    if self.operator == 'sqrt' and isinstance(other, RootNode):
      return self.operand.equals(other.operand, config)
    if not isinstance(other, UnaryOpNode):
      return False
    return self.operator == other.operator and self.operand.equals(other.operand, config)

  def to_sympy(self, config: ConversionConfig = DEFAULT_CONFIG) -> sp.Expr:
    operand = self.operand.to_sympy(config)
    if self.operator == 'neg':
      return -operand
    elif self.operator == 'sqrt':
      return sp.sqrt(operand)
    return operand**(sp.Rational(1, 3))

  def __repr__(self) -> str:
    return f"UnaryOpNode({self.operator!r}, {self.operand!r})"


class RootNode(Node):
  """Square root kept separate from UnaryOpNode('sqrt') for nicer formatting"""

  __slots__ = ('operand',)
  node_type = NodeType.ROOT

  def __init__(self, operand: Node):
    self.operand = operand
    self._freeze()

  def evaluate(self) -> float:
    return evaluate_unary_op(self.operand.evaluate(), 'sqrt')

  def to_string(self, config: ConversionConfig = DEFAULT_CONFIG) -> str:
    operand_str = self.operand.to_string(config)
    if config.space_separation and _is_compound(self.operand, operand_str):
      return f"{SQRT_GLYPH}({operand_str})"
    return f"{SQRT_GLYPH}{operand_str}"

  def simplify(self, config: ConversionConfig = DEFAULT_CONFIG) -> Node:
    operand = self.operand.simplify(config)

    if isinstance(operand, NumberNode):
      root = evaluate_unary_op(operand.value, 'sqrt')
      if math.isfinite(root) and root.is_integer():
        return NumberNode(root)

      coefficient, radicand = factorize_radicand(operand.value)
      if coefficient > 1:
        return BinaryOpNode('*', NumberNode(coefficient), RootNode(NumberNode(radicand)))

    # √(a·b) with numeric factors
    if (isinstance(operand, BinaryOpNode) and operand.operator == '*'
        and isinstance(operand.left, NumberNode) and isinstance(operand.right, NumberNode)):
      coefficient, radicand = factorize_radicand(operand.left.value * operand.right.value)
      if coefficient > 1:
        return BinaryOpNode(
          '*', NumberNode(coefficient), RootNode(NumberNode(radicand))
        ).simplify(config)

    return RootNode(operand)

  def equals(self, other: Node, config: ConversionConfig = DEFAULT_CONFIG) -> bool:
    if not is_root_like(other):
      return False
    return self.operand.equals(get_root_operand(other), config)

  def to_sympy(self, config: ConversionConfig = DEFAULT_CONFIG) -> sp.Expr:
    return sp.sqrt(self.operand.to_sympy(config))

  def __repr__(self) -> str:
    return f"RootNode({self.operand!r})"


class PowerNode(Node):
  __slots__ = ('base', 'exponent')
  node_type = NodeType.POWER

  def __init__(self, base: Node, exponent: Node):
    self.base = base
    self.exponent = exponent
    self._freeze()

  def evaluate(self) -> float:
    return evaluate_power(self.base.evaluate(), self.exponent.evaluate())

  def to_string(self, config: ConversionConfig = DEFAULT_CONFIG) -> str:
    base_str = self.base.to_string(config)
    if _needs_grouping_as_base(self.base, base_str):
      base_str = f"({base_str})"
    exponent_val = self.exponent.evaluate()
    for power, glyph in SUPERSCRIPTS.items():
      if abs(exponent_val - power) < config.epsilon:
        return f"{base_str}{glyph}"
    return _join(base_str, '^', self.exponent.to_string(config), config)

  def simplify(self, config: ConversionConfig = DEFAULT_CONFIG) -> Node:
    base = self.base.simplify(config)
    exponent = self.exponent.simplify(config)
    eps = config.epsilon

    if isinstance(exponent, NumberNode):
      if abs(exponent.value) < eps:
        return NumberNode(1)
      if abs(exponent.value - 1) < eps:
        return base
    if isinstance(base, NumberNode):
      if abs(base.value) < eps and isinstance(exponent, NumberNode) and exponent.value > 0:
        return NumberNode(0)
      if abs(base.value - 1) < eps:
        return NumberNode(1)
      if isinstance(exponent, NumberNode):
        return NumberNode(evaluate_power(base.value, exponent.value))

    return PowerNode(base, exponent)

  def equals(self, other: Node, config: ConversionConfig = DEFAULT_CONFIG) -> bool:
    if not isinstance(other, PowerNode):
      return False
    return self.base.equals(other.base, config) and self.exponent.equals(other.exponent, config)

  def to_sympy(self, config: ConversionConfig = DEFAULT_CONFIG) -> sp.Expr:
    return sp.Pow(self.base.to_sympy(config), self.exponent.to_sympy(config))

  def __repr__(self) -> str:
    return f"PowerNode({self.base!r}, {self.exponent!r})"


# ---------------------------------------------------------------------------
# Predicates and ordering
# ---------------------------------------------------------------------------

def is_zero(node: Node, config: ConversionConfig = DEFAULT_CONFIG) -> bool:
  return isinstance(node, NumberNode) and abs(node.value) < config.epsilon


def is_one(node: Node, config: ConversionConfig = DEFAULT_CONFIG) -> bool:
  return isinstance(node, NumberNode) and abs(node.value - 1) < config.epsilon


def is_root_like(node: Node) -> bool:
  return isinstance(node, RootNode) or (isinstance(node, UnaryOpNode) and node.operator == 'sqrt')


def get_root_operand(node: Node) -> Node:
  """Radicand of a RootNode or UnaryOpNode('sqrt'); anything else is a caller bug"""
  if isinstance(node, RootNode):
    return node.operand
  if isinstance(node, UnaryOpNode) and node.operator == 'sqrt':
    return node.operand
  raise TypeError(f"Not a root node: {node!r}")


def get_expression_priority(node: Node) -> int:
  if isinstance(node, NumberNode):
    return PRIORITY_NUMBER
  if is_root_like(node):
    return PRIORITY_ROOT
  return PRIORITY_OTHER


def order_product_operands(left: Node, right: Node) -> Tuple[Node, Node]:
  """Return the factors of a product with the lower-priority one first"""
  if get_expression_priority(left) > get_expression_priority(right):
    return right, left
  return left, right


def display_fraction(value: float, config: ConversionConfig = DEFAULT_CONFIG) -> Optional[Tuple[int, int]]:
  """Smallest-denominator fraction (2..1000) within epsilon of value, in lowest terms"""
  if abs(value) * MAX_DISPLAY_DENOMINATOR > MAX_SAFE_INTEGER:
    return None
  for denominator in range(2, MAX_DISPLAY_DENOMINATOR + 1):
    numerator = round(value * denominator)
    if abs(value - numerator / denominator) < config.epsilon:
      gcd = find_gcd(numerator, denominator)
      return numerator // gcd, denominator // gcd
  return None


def _values_close(a: float, b: float, epsilon: float) -> bool:
  if math.isnan(a) or math.isnan(b):
    return math.isnan(a) and math.isnan(b)
  if math.isinf(a) or math.isinf(b):
    return a == b
  return abs(a - b) < epsilon


def _join(left: str, operator: str, right: str, config: ConversionConfig) -> str:
  if config.space_separation:
    return f"{left} {operator} {right}"
  return f"{left}{operator}{right}"


def _is_additive(node: Node) -> bool:
  return isinstance(node, BinaryOpNode) and node.operator in ('+', '-')


def _is_compound(node: Node, rendered: str) -> bool:
  return not isinstance(node, NumberNode) or '/' in rendered


def _needs_grouping_as_base(node: Node, rendered: str) -> bool:
  if isinstance(node, BinaryOpNode) or rendered.startswith('-'):
    return True
  # Only a slash outside parentheses splits the base
  nesting = 0
  for char in rendered:
    if char == '(':
      nesting += 1
    elif char == ')':
      nesting -= 1
    elif char == '/' and nesting == 0:
      return True
  return False


def _is_binary(node: Node, operator: str) -> bool:
  return isinstance(node, BinaryOpNode) and node.operator == operator


# ---------------------------------------------------------------------------
# Binary simplification rules; each returns None when no rule applies
# ---------------------------------------------------------------------------

def _simplify_sum(left: Node, right: Node, config: ConversionConfig) -> Optional[Node]:
  if is_zero(right, config):
    return left
  if is_zero(left, config):
    return right
  return None


def _simplify_difference(left: Node, right: Node, config: ConversionConfig) -> Optional[Node]:
  if is_zero(right, config):
    return left
  if is_zero(left, config):
    return UnaryOpNode('neg', right).simplify(config)
  if left.equals(right, config):
    return NumberNode(0)
  return None


def _simplify_product(left: Node, right: Node, config: ConversionConfig) -> Optional[Node]:
  eps = config.epsilon
  if is_zero(left, config) or is_zero(right, config):
    return NumberNode(0)
  if is_one(right, config):
    return left
  if is_one(left, config):
    return right

  # n·(√m/2) = (n/2)·√m
  if (isinstance(left, NumberNode) and _is_binary(right, '/')
      and isinstance(right.right, NumberNode) and abs(right.right.value - 2) < eps
      and is_root_like(right.left)):
    return BinaryOpNode('*', NumberNode(left.value / 2), right.left).simplify(config)

  # (a/b)·c = (a·c)/b
  if _is_binary(left, '/'):
    return BinaryOpNode('/', BinaryOpNode('*', left.left, right), left.right).simplify(config)

  # c·(a/b) = (c·a)/b
  if _is_binary(right, '/'):
    return BinaryOpNode('/', BinaryOpNode('*', left, right.left), right.right).simplify(config)

  # n1·(n2·rest) = (n1·n2)·rest
  if (isinstance(left, NumberNode) and _is_binary(right, '*')
      and isinstance(right.left, NumberNode)):
    return BinaryOpNode('*', NumberNode(left.value * right.left.value), right.right).simplify(config)

  # √a·√b = √(a·b)
  if is_root_like(left) and is_root_like(right):
    left_operand = get_root_operand(left)
    right_operand = get_root_operand(right)
    if isinstance(left_operand, NumberNode) and isinstance(right_operand, NumberNode):
      return RootNode(NumberNode(left_operand.value * right_operand.value)).simplify(config)

  return None


def _simplify_quotient(left: Node, right: Node, config: ConversionConfig) -> Optional[Node]:
  eps = config.epsilon
  if is_zero(left, config):
    return NumberNode(0)
  if is_one(right, config):
    return left
  if left.equals(right, config):
    return NumberNode(1)

  if isinstance(left, NumberNode) and isinstance(right, NumberNode):
    if left.value.is_integer() and right.value.is_integer():
      gcd = find_gcd(left.value, right.value)
      if gcd > 1:
        return BinaryOpNode('/', NumberNode(left.value / gcd), NumberNode(right.value / gcd))

  # (a·b)/b = a
  if _is_binary(left, '*'):
    product = left
    if (isinstance(product.left, NumberNode) and isinstance(right, NumberNode)
        and abs(product.left.value - right.value) < eps):
      return product.right
    if (isinstance(product.right, NumberNode) and isinstance(right, NumberNode)
        and abs(product.right.value - right.value) < eps):
      return product.left
    if product.left.equals(right, config):
      return product.right
    if product.right.equals(right, config):
      return product.left

  return None
