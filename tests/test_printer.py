import math
from concurrent.futures import ThreadPoolExecutor
from fractions import Fraction

import numpy as np
import pytest

from symbolic_printer import ConversionConfig, convert, to_expression
from symbolic_printer.expression_tree.core.node import get_expression_priority
from symbolic_printer.expression_tree import BinaryOpNode
from symbolic_printer.expression_tree.utils.tree_utils import find_nodes_by_type

PI = math.pi
E = math.e
PHI = (1 + math.sqrt(5)) / 2

# ─── 1) Compact rendering ──────────────────────────────────────────────────────

@pytest.mark.parametrize("x, expected", [
    # integers and zero
    (0, "0"),
    (-0.0, "0"),
    (7, "7"),
    (1e6, "1000000"),
    (1e12, "1000000000000"),
    (1e-12, "0"),
    # fractions
    (0.5, "1/2"),
    (-0.5, "-1/2"),
    (0.25, "1/4"),
    (0.75, "3/4"),
    (0.2, "1/5"),
    (2 / 3, "2/3"),
    (1 / 3, "1/3"),
    (5 / 6, "5/6"),
    (1.5, "3/2"),
    (2 ** -3, "1/8"),
    (355 / 113, "355/113"),
    (22 / 7, "22/7"),
    # radicals
    (math.sqrt(50), "5·√2"),
    (math.sqrt(27), "3·√3"),
    (math.sqrt(75), "5·√3"),
    (math.sqrt(4), "2"),
    (math.sqrt(10), "√10"),
    (math.sqrt(2) * math.sqrt(3), "√6"),
    (math.sqrt(2) * math.sqrt(8), "4"),
    (-math.sqrt(2), "-√2"),
    (2 * math.sqrt(2), "2·√2"),
    (3 * math.sqrt(3), "3·√3"),
    (2 ** (1 / 3), "∛2"),
    # constants
    (PI, "π"),
    (E, "e"),
    (PHI, "φ"),
    (-PI, "-π"),
    (2 * PI, "2·π"),
    (-2 * PI, "-2·π"),
    (3 * E, "3·e"),
    (PI / 2, "π/2"),
    (PI / 3, "π/3"),
    (PI / 4, "π/4"),
    (PI / 6, "π/6"),
    (E / 2, "e/2"),
    (PI / 2 + PI / 2, "π"),
    (PI ** 2, "π²"),
    (E ** 2, "e²"),
    # trig values
    (math.sin(PI / 6), "1/2"),
    (math.sqrt(2) / 2, "√2/2"),
    (math.sqrt(3) / 2, "√3/2"),
    (math.sqrt(3) / 3, "1/√3"),
    (math.tan(PI / 3), "√3"),
    (math.cos(PI / 2), "0"),
    (12 * math.cos(PI / 6), "6·√3"),
    # sums
    (2 * PI + 1, "2·π+1"),
    (PI - 1, "π-1"),
    (2 * PI - 3, "2·π-3"),
    (math.sqrt(2) + math.sqrt(3), "√2+√3"),
    # decimals
    (0.1234567890123456789, "0.12345679"),
    (1e-6, "0.000001"),
    (round(PI, 5), "3.14159"),
])
def test_convert(x, expected):
    assert convert(x) == expected


# ─── 2) Spaced rendering ───────────────────────────────────────────────────────

@pytest.mark.parametrize("x, expected", [
    (345 / 456, "115 / 152"),
    (2 * PI, "2 · π"),
    (3 * E, "3 · e"),
    (-PI, "-(π)"),
    (-2 * PI, "-(2 · π)"),
    (2 * math.sqrt(2), "2 · √2"),
    (2 * PI + 1, "2 · π + 1"),
    (PI - 1, "π - 1"),
    (2 * PI - 3, "2 · π - 3"),
])
def test_convert_spaced(x, expected):
    assert convert(x, space_separation=True) == expected


def test_option_spellings_are_equivalent():
    expected = "2 · π"
    assert convert(2 * PI, spaceSeparation=True) == expected
    assert convert(2 * PI, {"spaceSeparation": True}) == expected
    assert convert(2 * PI, ConversionConfig(space_separation=True)) == expected


def test_power_of_fraction_is_grouped():
    x = math.sin(PI / 4) ** 3
    assert convert(x) == "(√2/2)³"
    assert to_expression(x).evaluate() == pytest.approx(x)


# ─── 3) Precision and sentinels ────────────────────────────────────────────────

def test_precision():
    x = 0.1234567890123456789
    assert convert(x, precision=5) == "0.12346"
    assert convert(x, ConversionConfig(precision=2)) == "0.12"


@pytest.mark.parametrize("x, expected", [
    (float('inf'), "∞"),
    (float('-inf'), "-∞"),
    (float('nan'), "NaN"),
    (np.inf, "∞"),
])
def test_non_finite_sentinels(x, expected):
    assert convert(x) == expected
    assert convert(x, space_separation=True) == expected


# ─── 4) Input handling ─────────────────────────────────────────────────────────

@pytest.mark.parametrize("x, expected", [
    (np.float64(0.5), "1/2"),
    (np.float32(0.25), "1/4"),
    (np.int64(12), "12"),
    (Fraction(1, 3), "1/3"),
])
def test_numeric_types(x, expected):
    assert convert(x) == expected


@pytest.mark.parametrize("x", ["1.5", None, True, [1.0], 1 + 2j])
def test_rejects_non_real_input(x):
    with pytest.raises(TypeError):
        convert(x)


def test_unknown_option_raises():
    with pytest.raises(ValueError):
        convert(1.0, colour=True)


def test_invalid_option_value_raises():
    with pytest.raises(ValueError):
        convert(1.0, precision=-1)


# ─── 5) Properties ─────────────────────────────────────────────────────────────

PROPERTY_INPUTS = [
    0.5, -0.75, 7.0, math.sqrt(50), math.sqrt(75), 2 * PI, -2 * PI, 2 * PI + 1,
    PI - 1, 2 * PI - 3, math.sqrt(2) + math.sqrt(3), 12 * math.cos(PI / 6),
    PI ** 2, E / 2, 3 * E + 2, (math.sqrt(7) + 2) / 3, 2 ** (1 / 3), 0.1234567890123456789,
]


@pytest.mark.parametrize("x", PROPERTY_INPUTS)
def test_expression_evaluates_back_to_input(x):
    assert to_expression(x).evaluate() == pytest.approx(x, abs=1e-9)


@pytest.mark.parametrize("x", PROPERTY_INPUTS)
def test_simplify_is_idempotent(x):
    tree = to_expression(x)
    assert tree.simplify().to_string() == tree.to_string()


@pytest.mark.parametrize("x", PROPERTY_INPUTS)
def test_products_render_coefficients_first(x):
    products = [n for n in find_nodes_by_type(to_expression(x), BinaryOpNode) if n.operator == '*']
    for product in products:
        assert get_expression_priority(product.left) <= get_expression_priority(product.right)


@pytest.mark.parametrize("x", PROPERTY_INPUTS)
def test_formatting_is_deterministic(x):
    assert convert(x) == convert(x)


def test_concurrent_conversions_with_different_configs():
    compact = ConversionConfig()
    spaced = ConversionConfig(space_separation=True)
    jobs = [(2 * PI + 1, compact), (2 * PI + 1, spaced)] * 20

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(lambda job: convert(*job), jobs))

    assert results == ["2·π+1", "2 · π + 1"] * 20
