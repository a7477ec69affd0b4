import math

import pytest

from symbolic_printer.continued_fractions import (
    KNOWN_PERIODS, identify_quadratic_irrational, _match_periodic_expansion
)

SQRT5 = math.sqrt(5)


@pytest.mark.parametrize("n", [2, 3, 5, 7, 8, 10, 11, 12, 13, 18])
def test_square_roots(n):
    assert identify_quadratic_irrational(math.sqrt(n)) == f"√{n}"


@pytest.mark.parametrize("x, expected", [
    ((1 + SQRT5) / 2, "φ"),
    ((SQRT5 - 1) / 2, "(√5-1)/2"),
    ((math.sqrt(2) + 1) / 2, "(√2+1)/2"),
    ((math.sqrt(3) - 1) / 2, "(√3-1)/2"),
    ((math.sqrt(7) + 2) / 3, "(√7+2)/3"),
    ((math.sqrt(13) - 3) / 2, "(√13-3)/2"),
])
def test_shifted_and_scaled_roots(x, expected):
    assert identify_quadratic_irrational(x) == expected


def test_periodic_expansion_beyond_brute_force_range():
    # √50 = [7; 14, 14, ...] ends its period in 2·a0
    assert identify_quadratic_irrational(math.sqrt(50)) == "√50"


@pytest.mark.parametrize("n", sorted(KNOWN_PERIODS.values()))
def test_known_period_table(n):
    assert _match_periodic_expansion(math.sqrt(n), 1e-10) == f"√{n}"


# periods of length 3 to 12, all closing in 2·a0
@pytest.mark.parametrize("n", [31, 41, 43, 44, 46])
def test_long_periods_above_brute_force_range(n):
    assert _match_periodic_expansion(math.sqrt(n), 1e-10) == f"√{n}"
    assert identify_quadratic_irrational(math.sqrt(n)) == f"√{n}"


@pytest.mark.parametrize("x, expected", [
    (1.4142135623730952, "√2"),
    (1.6180339887498947, "φ"),
])
def test_literal_doubles(x, expected):
    assert identify_quadratic_irrational(x) == expected


@pytest.mark.parametrize("x", [
    math.pi,
    math.e,
    math.log(2),
    0.123456789,
    float('nan'),
    float('inf'),
])
def test_non_quadratic_values(x):
    assert identify_quadratic_irrational(x) is None
