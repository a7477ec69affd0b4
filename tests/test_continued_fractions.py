import math

import pytest

from symbolic_printer.continued_fractions import (
    to_continued_fraction, from_continued_fraction, get_convergents,
    best_rational_approximation, has_repeating_pattern, find_period,
    reliable_prefix, square_root_period
)

# ─── 1) Expansion ──────────────────────────────────────────────────────────────

@pytest.mark.parametrize("x, expected", [
    (math.pi, [3, 7, 15, 1, 292]),
    (math.e, [2, 1, 2, 1, 1]),
    (math.sqrt(2), [1, 2, 2, 2, 2]),
    (1.75, [1, 1, 3]),
    (4.0, [4]),
])
def test_to_continued_fraction(x, expected):
    assert to_continued_fraction(x, 5) == expected


def test_expansion_terms_are_ints():
    assert all(isinstance(t, int) for t in to_continued_fraction(math.pi, 10))


def test_expansion_respects_max_terms():
    assert len(to_continued_fraction(math.sqrt(3), 12)) == 12


# ─── 2) Folding and convergents ────────────────────────────────────────────────

@pytest.mark.parametrize("terms, expected", [
    ([1, 2, 2, 2], (17, 12)),
    ([3, 7, 15, 1], (355, 113)),
    ([0, 1, 2], (2, 3)),
    ([0, 2, 2], (2, 5)),
    ([1, 1, 3], (7, 4)),
    ([5], (5, 1)),
    ([], (0, 1)),
])
def test_from_continued_fraction(terms, expected):
    assert from_continued_fraction(terms) == expected


def test_convergents_of_pi():
    assert get_convergents([3, 7, 15, 1, 292]) == [
        (3, 1), (22, 7), (333, 106), (355, 113), (103993, 33102)
    ]


def test_convergents_of_empty_expansion():
    assert get_convergents([]) == []


@pytest.mark.parametrize("x, expected", [
    (0.75, (3, 4)),
    (2 / 3, (2, 3)),
    (355 / 113, (355, 113)),
    (math.pi, None),
    (math.sqrt(2), None),
])
def test_best_rational_approximation(x, expected):
    assert best_rational_approximation(x, 20, 1000, 10000) == expected


# ─── 3) Periodicity ────────────────────────────────────────────────────────────

@pytest.mark.parametrize("terms, expected", [
    ([1, 2, 2, 2, 2, 2], True),
    ([1, 2, 2, 2, 2], False),
    ([3, 7, 15, 1, 292, 1], False),
])
def test_has_repeating_pattern(terms, expected):
    assert has_repeating_pattern(terms) is expected


@pytest.mark.parametrize("terms, expected", [
    ([1, 2, 2, 2, 2], (2,)),
    ([2, 2, 4, 2, 4, 2, 4], (2, 4)),
    ([7, 14, 14, 14], (14,)),
    ([3, 7, 15, 1, 292], None),
    ([3], None),
    # √7: a repeated first term is not a period
    ([2, 1, 1, 1, 4, 1, 1, 1, 4], (1, 1, 1, 4)),
    ([2, 1, 1, 1, 4], None),
    ([6, 2, 2, 12, 2, 2, 12], (2, 2, 12)),
])
def test_find_period(terms, expected):
    assert find_period(terms) == expected


def test_find_period_checks_whole_tail():
    terms = to_continued_fraction(math.sqrt(7), 30)
    assert find_period(reliable_prefix(terms)) == (1, 1, 1, 4)


@pytest.mark.parametrize("terms, expected", [
    ([6, 1, 1, 3, 1, 5, 1, 3, 1, 1, 12, 1], (1, 1, 3, 1, 5, 1, 3, 1, 1, 12)),
    ([7, 14], (14,)),
    ([3, 7, 15, 1, 292], None),
    # not a palindrome before 2·a0
    ([2, 1, 3, 4], None),
    # breaks the period after 2·a0
    ([2, 1, 4, 2], None),
    ([0, 1, 2], None),
])
def test_square_root_period(terms, expected):
    assert square_root_period(terms) == expected


def test_reliable_prefix_drops_noisy_terms():
    terms = to_continued_fraction(math.pi, 30)
    trusted = reliable_prefix(terms)
    assert trusted == [3, 7, 15, 1, 292, 1, 1, 1, 2, 1]
    assert reliable_prefix([1, 2, 2]) == [1, 2, 2]
    assert reliable_prefix([3, 7, 15], max_denominator=10) == [3, 7]
