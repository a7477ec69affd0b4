"""
Number decomposition: turns a float into an (unsimplified) expression tree.

``NumberDecomposer`` runs an ordered list of recognizers and returns the
first match. Cheap exact matches (integers, fractions, table constants)
come first; recursive decompositions such as ``2·π+1`` are only attempted
while the recursion depth is below ``max_depth``.
"""

import math
from typing import Callable, List, Optional, Tuple

import numpy as np

from .config import ConversionConfig, resolve_config
from .constants import ALL_VALUES, CONSTANTS, COMMON_VALUES, TRIG_VALUES, MathConstant
from .continued_fractions import (
    best_rational_approximation, get_convergents, identify_quadratic_irrational,
    to_continued_fraction
)
from .expression_tree.core.node import (
    Node, NumberNode, ConstantNode, BinaryOpNode, UnaryOpNode, RootNode, PowerNode
)
from .expression_tree.utils.exact_form import parse_exact_form
from .expression_tree.utils.factorization import (
    factorize_radicand, find_gcd, is_prime, should_preserve_direct_radical
)
from .logging_system import LogLevel, log_debug, log_info

DEFAULT_MAX_DEPTH = 3

# Rational recognizer bounds
RATIONAL_TERMS = 20
RATIONAL_MAX_DENOMINATOR = 1000
RATIONAL_MAX_NUMERATOR = 10000

# Niceness bounds
NICE_TERMS = 10
NICE_MAX_DENOMINATOR = 20
NICE_MAX_NUMERATOR = 50
NICE_MAX_RADICAND = 30
NICE_SMALL_RADICAND = 20

MAX_ROOT_ARGUMENT = 100
MAX_CONSTANT_DIVISOR = 12
MAX_PRODUCT_ADDEND = 10
CONSTANT_MULTIPLES = range(2, 6)
POWERS = (2, 3)

# Multipliers left to the fraction path rather than read as m·c
EXCLUDED_MULTIPLIERS = (0.75, 0.5, 0.25, 1 / 3, 2 / 3)

# Factor order inside m·c when both factors are constants
SPECIAL_CONSTANT_PRIORITY = {'e': 1, 'π': 2, 'φ': 3}
RADICAL_CONSTANT_PRIORITY = 10
OTHER_CONSTANT_PRIORITY = 50
NON_CONSTANT_PRIORITY = 100

Recognizer = Callable[[float, int], Optional[Node]]


def is_prime_radical_symbol(symbol: str) -> bool:
    """True for table symbols of the form √p with p a prime integer"""
    if not symbol.startswith('√'):
        return False
    radicand = symbol[1:]
    return radicand.isdigit() and is_prime(int(radicand))


def constant_priority(node: Node) -> int:
    if not isinstance(node, ConstantNode):
        return NON_CONSTANT_PRIORITY
    if node.symbol in SPECIAL_CONSTANT_PRIORITY:
        return SPECIAL_CONSTANT_PRIORITY[node.symbol]
    if node.symbol.startswith('√'):
        return RADICAL_CONSTANT_PRIORITY
    return OTHER_CONSTANT_PRIORITY


def constant_node(constant: MathConstant) -> Node:
    """Table entry as a tree: its parsed exact form when it has one"""
    if constant.exact_form is not None:
        return parse_exact_form(constant.exact_form)
    return ConstantNode(constant.symbol, constant.value)


class NumberDecomposer:
    """
    Ordered recognizer cascade from float to expression tree.

    Each recognizer takes ``(x, depth)`` and returns a node or None. The
    bounded ones only run while ``depth < max_depth`` and may recurse into
    ``parse_number`` at ``depth + 1``.
    """

    def __init__(self, config: Optional[ConversionConfig] = None,
                 max_depth: int = DEFAULT_MAX_DEPTH):
        self.config = resolve_config(config)
        self.epsilon = self.config.epsilon
        self.max_depth = max_depth

        self.recognizers: List[Tuple[str, Recognizer, bool]] = [
            ('zero', self._match_zero, False),
            ('negative', self._match_negative, False),
            ('integer', self._match_integer, False),
            ('rational', self._match_rational, False),
            ('constant', self._match_constant, False),
            ('trig', self._match_trig, False),
            ('quadratic', self._match_quadratic, False),
            ('square_root', self._match_square_root, False),
            ('power', self._match_power, False),
            ('constant_fraction', self._match_constant_fraction, True),
            ('scaled_product', self._match_scaled_product, True),
            ('constant_sum', self._match_constant_sum, True),
            ('constant_multiple_sum', self._match_constant_multiple_sum, True),
            ('cube_root', self._match_cube_root, True),
            ('radical_fallback', self._match_radical_fallback, False),
        ]

    def parse_number(self, x: float, depth: int = 0) -> Node:
        x = float(x)
        if not math.isfinite(x):
            return NumberNode(x)

        for name, recognizer, bounded in self.recognizers:
            if bounded and depth >= self.max_depth:
                continue
            node = recognizer(x, depth)
            if node is not None:
                log_debug(f"{name} matched {x!r} at depth {depth}")
                return node

        log_info(f"No symbolic form for {x!r}, keeping decimal", LogLevel.DETAILED)
        return NumberNode(x)

    def is_nice_value(self, value: float) -> bool:
        """Whether ``value`` is simple enough to appear as a factor or remainder"""
        eps = self.epsilon
        if not math.isfinite(value):
            return False
        if abs(value - round(value)) < eps:
            return True

        terms = to_continued_fraction(value, NICE_TERMS, eps)
        for numerator, denominator in get_convergents(terms):
            if denominator <= NICE_MAX_DENOMINATOR and abs(numerator) <= NICE_MAX_NUMERATOR:
                if abs(value - numerator / denominator) < eps:
                    return True

        for i in range(2, NICE_MAX_RADICAND + 1):
            if abs(value - math.sqrt(i)) < eps:
                if is_prime(i) or i <= NICE_SMALL_RADICAND:
                    return True

        if any(abs(value - c.value) < eps for c in ALL_VALUES):
            return True
        return any(abs(value - v) < eps for v in COMMON_VALUES)

    # ------------------------------------------------------------------
    # Exact recognizers
    # ------------------------------------------------------------------

    def _match_zero(self, x: float, depth: int) -> Optional[Node]:
        if abs(x) < self.epsilon:
            return NumberNode(0)
        return None

    def _match_negative(self, x: float, depth: int) -> Optional[Node]:
        if x < 0:
            return UnaryOpNode('neg', self.parse_number(-x, depth))
        return None

    def _match_integer(self, x: float, depth: int) -> Optional[Node]:
        if abs(x - round(x)) < self.epsilon:
            return NumberNode(round(x))
        return None

    def _match_rational(self, x: float, depth: int) -> Optional[Node]:
        fraction = best_rational_approximation(
            x, RATIONAL_TERMS, RATIONAL_MAX_DENOMINATOR, RATIONAL_MAX_NUMERATOR, self.epsilon
        )
        if fraction is None:
            return None
        numerator, denominator = fraction
        gcd = find_gcd(numerator, denominator)
        return BinaryOpNode('/', NumberNode(numerator // gcd), NumberNode(denominator // gcd))

    def _match_constant(self, x: float, depth: int) -> Optional[Node]:
        for constant in CONSTANTS:
            if abs(x - constant.value) < self.epsilon:
                return constant_node(constant)
        return None

    def _match_trig(self, x: float, depth: int) -> Optional[Node]:
        for trig_value in TRIG_VALUES:
            if abs(x - trig_value.value) < self.epsilon:
                return constant_node(trig_value)
        return None

    def _match_quadratic(self, x: float, depth: int) -> Optional[Node]:
        form = identify_quadratic_irrational(x, self.epsilon)
        if form is None:
            return None
        return parse_exact_form(form)

    def _match_square_root(self, x: float, depth: int) -> Optional[Node]:
        for i in range(2, MAX_ROOT_ARGUMENT + 1):
            if abs(x - math.sqrt(i)) < self.epsilon:
                if should_preserve_direct_radical(i):
                    return RootNode(NumberNode(i))
                coefficient, radicand = factorize_radicand(i)
                return BinaryOpNode('*', NumberNode(coefficient), RootNode(NumberNode(radicand)))
        return None

    def _match_power(self, x: float, depth: int) -> Optional[Node]:
        for constant in ALL_VALUES:
            for power in POWERS:
                if abs(x - constant.value ** power) < self.epsilon:
                    return PowerNode(constant_node(constant), NumberNode(power))
        return None

    # ------------------------------------------------------------------
    # Depth-bounded recognizers
    # ------------------------------------------------------------------

    def _match_constant_fraction(self, x: float, depth: int) -> Optional[Node]:
        for constant in CONSTANTS:
            for denominator in range(2, MAX_CONSTANT_DIVISOR + 1):
                if abs(x - constant.value / denominator) < self.epsilon:
                    return BinaryOpNode('/', constant_node(constant), NumberNode(denominator))
        return None

    def _match_scaled_product(self, x: float, depth: int) -> Optional[Node]:
        eps = self.epsilon
        for constant in ALL_VALUES:
            if abs(constant.value) <= eps:
                continue
            if is_prime_radical_symbol(constant.symbol):
                continue
            multiplier = x / constant.value
            if any(abs(multiplier - excluded) < eps for excluded in EXCLUDED_MULTIPLIERS):
                continue
            if not self.is_nice_value(multiplier):
                continue

            multiplier_node = self.parse_number(multiplier, depth + 1)
            value_node = constant_node(constant)
            if isinstance(multiplier_node, NumberNode) and abs(multiplier_node.value - 1) < eps:
                return value_node

            product = self._ordered_product(multiplier_node, value_node)
            product_value = product.evaluate()
            for addend in range(1, MAX_PRODUCT_ADDEND + 1):
                if abs(x - (product_value + addend)) < eps:
                    return BinaryOpNode('+', product, NumberNode(addend))
            return product
        return None

    def _ordered_product(self, multiplier: Node, value: Node) -> Node:
        if isinstance(multiplier, ConstantNode) and isinstance(value, ConstantNode):
            if constant_priority(multiplier) <= constant_priority(value):
                return BinaryOpNode('*', multiplier, value)
            return BinaryOpNode('*', value, multiplier)
        if isinstance(multiplier, NumberNode):
            return BinaryOpNode('*', multiplier, value)
        if constant_priority(value) < OTHER_CONSTANT_PRIORITY:
            return BinaryOpNode('*', value, multiplier)
        return BinaryOpNode('*', multiplier, value)

    def _offset_node(self, base: Node, remainder: float, depth: int) -> Node:
        """``base`` plus a nice remainder, as a sum or a difference"""
        remainder_node = self.parse_number(remainder, depth + 1)
        if isinstance(remainder_node, NumberNode) and abs(remainder_node.value) < self.epsilon:
            return base
        if remainder < 0:
            return BinaryOpNode('-', base, self.parse_number(-remainder, depth + 1))
        return BinaryOpNode('+', base, remainder_node)

    def _match_constant_sum(self, x: float, depth: int) -> Optional[Node]:
        for constant in ALL_VALUES:
            remainder = x - constant.value
            if self.is_nice_value(remainder):
                return self._offset_node(constant_node(constant), remainder, depth)
        return None

    def _match_constant_multiple_sum(self, x: float, depth: int) -> Optional[Node]:
        for constant in ALL_VALUES:
            for multiple in CONSTANT_MULTIPLES:
                remainder = x - multiple * constant.value
                if self.is_nice_value(remainder):
                    multiple_node = BinaryOpNode('*', NumberNode(multiple), constant_node(constant))
                    return self._offset_node(multiple_node, remainder, depth)
        return None

    def _match_cube_root(self, x: float, depth: int) -> Optional[Node]:
        for i in range(2, MAX_ROOT_ARGUMENT + 1):
            if abs(x - np.cbrt(i)) < self.epsilon:
                return UnaryOpNode('cbrt', NumberNode(i))
        return None

    # ------------------------------------------------------------------
    # Last resort
    # ------------------------------------------------------------------

    def _match_radical_fallback(self, x: float, depth: int) -> Optional[Node]:
        radicand = round(x * x)
        if radicand > 0 and abs(x - math.sqrt(radicand)) < self.epsilon:
            return RootNode(NumberNode(radicand))
        return None
