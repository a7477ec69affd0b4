"""
Static tables of named constants and exact trigonometric values.

Both tables are read-only tuples consumed by the decomposer (lookup and
iteration), the exact-form parser and the SymPy bridge.
"""

import math
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import sympy as sp

from .config import ConversionConfig


@dataclass(frozen=True)
class MathConstant:
    """A named value with optional spaced rendering and exact form"""
    symbol: str
    value: float
    sympy: Callable[[], sp.Expr]
    spaced_symbol: Optional[str] = None
    exact_form: Optional[str] = None

    def symbol_for(self, config: ConversionConfig) -> str:
        if config.space_separation and self.spaced_symbol is not None:
            return self.spaced_symbol
        return self.symbol


def _root(n: int) -> MathConstant:
    return MathConstant(f'√{n}', math.sqrt(n), lambda: sp.sqrt(n), spaced_symbol=f'√({n})')


CONSTANTS: Tuple[MathConstant, ...] = (
    MathConstant('π', math.pi, lambda: sp.pi),
    MathConstant('e', math.e, lambda: sp.E),
    MathConstant('φ', (1 + math.sqrt(5)) / 2, lambda: sp.GoldenRatio),
    _root(2),
    _root(3),
    _root(5),
    _root(7),
    _root(11),
    _root(13),
    _root(17),
    _root(19),
    MathConstant('√π', math.sqrt(math.pi), lambda: sp.sqrt(sp.pi), spaced_symbol='√(π)'),
    MathConstant('ln(2)', math.log(2), lambda: sp.log(2)),
    MathConstant('ln(10)', math.log(10), lambda: sp.log(10)),
    MathConstant('log₂(e)', math.log2(math.e), lambda: 1 / sp.log(2)),
    MathConstant('log₁₀(e)', math.log10(math.e), lambda: 1 / sp.log(10)),
)


def _trig(name: str, fraction: Optional[Tuple[int, int]], value: float,
          exact_form: str, sympy_fn) -> MathConstant:
    if fraction is None:
        symbol = f'{name}(0)'
        spaced = None
        argument = sp.Integer(0)
    else:
        numerator, denominator = fraction
        symbol = f'{name}(π/{denominator})'
        spaced = f'{name}(π / {denominator})'
        argument = sp.pi * numerator / denominator
    return MathConstant(symbol, value, lambda: sympy_fn(argument),
                        spaced_symbol=spaced, exact_form=exact_form)


TRIG_VALUES: Tuple[MathConstant, ...] = (
    # sin values
    _trig('sin', (1, 6), math.sin(math.pi / 6), '1/2', sp.sin),
    _trig('sin', (1, 4), math.sin(math.pi / 4), '√2/2', sp.sin),
    _trig('sin', (1, 3), math.sin(math.pi / 3), '√3/2', sp.sin),
    _trig('sin', (1, 2), math.sin(math.pi / 2), '1', sp.sin),

    # cos values
    _trig('cos', None, math.cos(0), '1', sp.cos),
    _trig('cos', (1, 6), math.cos(math.pi / 6), '√3/2', sp.cos),
    _trig('cos', (1, 4), math.cos(math.pi / 4), '√2/2', sp.cos),
    _trig('cos', (1, 3), math.cos(math.pi / 3), '1/2', sp.cos),
    _trig('cos', (1, 2), math.cos(math.pi / 2), '0', sp.cos),

    # tan values
    _trig('tan', (1, 6), math.tan(math.pi / 6), '1/√3', sp.tan),
    _trig('tan', (1, 4), math.tan(math.pi / 4), '1', sp.tan),
    _trig('tan', (1, 3), math.tan(math.pi / 3), '√3', sp.tan),
)

ALL_VALUES: Tuple[MathConstant, ...] = CONSTANTS + TRIG_VALUES

# Extra reference values that count as "nice" building blocks
COMMON_VALUES: Tuple[float, ...] = (
    math.sin(math.pi / 3),
    math.cos(math.pi / 4),
)


def find_constant(symbol: str) -> Optional[MathConstant]:
    """Look up a table entry by its compact or spaced symbol"""
    for constant in ALL_VALUES:
        if symbol == constant.symbol or symbol == constant.spaced_symbol:
            return constant
    return None
