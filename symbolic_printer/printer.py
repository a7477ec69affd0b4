"""
Public conversion entry points.

``convert`` turns a float into its compact symbolic rendering, e.g.
``convert(math.sqrt(50)) == "5·√2"``. ``to_expression`` exposes the
simplified tree and ``to_latex`` renders it through SymPy.
"""

import math
import numbers
from typing import Optional

import sympy as sp

from .config import ConversionConfig, resolve_config
from .decomposer import NumberDecomposer
from .expression_tree.core.node import ConstantNode, Node, NumberNode
from .expression_tree.utils.tree_utils import calculate_tree_depth, count_nodes, find_nodes_by_type
from .logging_system import LogLevel, log_debug, log_info, log_warning

# Renderings that bypass decomposition entirely
NAN_TEXT = "NaN"
POSITIVE_INFINITY_TEXT = "∞"
NEGATIVE_INFINITY_TEXT = "-∞"


def _coerce(number) -> float:
    # bool is an int subclass but never a meaningful input
    if isinstance(number, bool) or not isinstance(number, numbers.Real):
        raise TypeError(f"Expected a real number, got {type(number).__name__}")
    return float(number)


def _sentinel(value: float) -> Optional[str]:
    if math.isnan(value):
        return NAN_TEXT
    if math.isinf(value):
        return POSITIVE_INFINITY_TEXT if value > 0 else NEGATIVE_INFINITY_TEXT
    return None


def to_expression(number, config: Optional[ConversionConfig] = None, **options) -> Node:
    """
    Decompose and simplify ``number`` into an expression tree.

    Non-finite input yields a bare ``NumberNode`` holding NaN or ±inf.
    """
    value = _coerce(number)
    config = resolve_config(config, **options)
    if not math.isfinite(value):
        return NumberNode(value)

    tree = NumberDecomposer(config).parse_number(value).simplify(config)

    # The tree must evaluate back to the input
    tolerance = max(config.epsilon, config.epsilon * abs(value))
    result = tree.evaluate()
    if not abs(result - value) <= tolerance:
        log_warning(f"Expression {tree} evaluates to {result!r}, expected {value!r}")
    symbols = sorted({node.symbol for node in find_nodes_by_type(tree, ConstantNode)})
    log_info(f"{value!r}: {count_nodes(tree)} nodes, depth {calculate_tree_depth(tree)}, "
             f"constants [{', '.join(symbols)}]", LogLevel.DETAILED)
    return tree


def convert(number, config: Optional[ConversionConfig] = None, **options) -> str:
    """
    Render ``number`` as a compact symbolic string.

    Args:
        number: any real number (int, float, numpy scalar, Fraction, ...)
        config: a ConversionConfig or a mapping of options
        **options: overrides such as ``space_separation=True`` or ``precision=5``
            (the camelCase ``spaceSeparation`` is accepted too)

    Returns:
        The symbolic rendering, e.g. "2·π", "5·√2", "1/2", "∞" or "NaN"

    Raises:
        TypeError: if ``number`` is not a real number
        ValueError: if an option is unknown or out of range
    """
    value = _coerce(number)
    config = resolve_config(config, **options)

    text = _sentinel(value)
    if text is not None:
        log_debug(f"Sentinel rendering for {value!r}")
        return text

    return to_expression(value, config).to_string(config)


def to_latex(number, config: Optional[ConversionConfig] = None, **options) -> str:
    """LaTeX rendering of the simplified expression, e.g. ``\\frac{\\pi}{2}``"""
    config = resolve_config(config, **options)
    tree = to_expression(number, config)
    return sp.latex(tree.to_sympy(config))
