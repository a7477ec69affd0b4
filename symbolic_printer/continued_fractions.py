"""
Continued fraction utilities.

Rational approximation via convergents, plus a best-effort recognizer for
quadratic irrationals such as √7 or (√13-3)/2. The recognizer only ever
returns a candidate it has checked against the input within epsilon.
"""

import math
from typing import List, Optional, Tuple

DEFAULT_EPSILON = 1e-10

# Search bounds for the (√n ± m)/k brute force
MAX_RADICAND = 30
MAX_ADDEND = 10
MAX_DIVISOR = 10

# Longest period considered by find_period
MAX_PERIOD = 16

# Convergent denominators beyond this carry double rounding noise
RELIABLE_DENOMINATOR = 10 ** 6

# Well-known periodic expansions: (a0, period) -> radicand
KNOWN_PERIODS = {
    (1, (2,)): 2,
    (1, (1, 2)): 3,
    (2, (4,)): 5,
    (2, (2, 4)): 6,
    (2, (1, 1, 1, 4)): 7,
    (2, (1, 4)): 8,
}

GOLDEN_RATIO = (1 + math.sqrt(5)) / 2
GOLDEN_CONJUGATE = (math.sqrt(5) - 1) / 2


def to_continued_fraction(x: float, max_terms: int = 20,
                          epsilon: float = DEFAULT_EPSILON) -> List[int]:
    """
    Expand ``x`` into continued fraction terms [a0, a1, a2, ...].

    Stops early once the fractional remainder is within epsilon of zero.
    """
    terms: List[int] = []
    for _ in range(max_terms):
        if not math.isfinite(x):
            break
        a = math.floor(x)
        terms.append(a)
        remainder = x - a
        if abs(remainder) < epsilon:
            break
        x = 1 / remainder
    return terms


def from_continued_fraction(terms: List[int]) -> Tuple[int, int]:
    """Fold terms back into a (numerator, denominator) pair"""
    if not terms:
        return 0, 1
    numerator, denominator = terms[-1], 1
    for term in reversed(terms[:-1]):
        numerator, denominator = term * numerator + denominator, numerator
    return numerator, denominator


def get_convergents(terms: List[int]) -> List[Tuple[int, int]]:
    """Every convergent, one per non-empty prefix of ``terms``"""
    return [from_continued_fraction(terms[:i]) for i in range(1, len(terms) + 1)]


def best_rational_approximation(x: float, max_terms: int, max_denominator: int,
                                max_numerator: int,
                                epsilon: float = DEFAULT_EPSILON) -> Optional[Tuple[int, int]]:
    """First convergent within bounds that matches ``x`` within epsilon"""
    for numerator, denominator in get_convergents(to_continued_fraction(x, max_terms, epsilon)):
        if denominator <= max_denominator and abs(numerator) <= max_numerator:
            if abs(x - numerator / denominator) < epsilon:
                return numerator, denominator
    return None


def has_repeating_pattern(terms: List[int]) -> bool:
    """True when every term after the first is identical (as for √2 = [1; 2, 2, ...])"""
    if len(terms) < 6:
        return False
    return all(t == terms[1] for t in terms[1:])


def reliable_prefix(terms: List[int],
                    max_denominator: int = RELIABLE_DENOMINATOR) -> List[int]:
    """
    Leading terms whose convergent denominators stay within ``max_denominator``.

    The error of a double is magnified by roughly q² at each convergent, so
    later terms of an expansion computed from a float are noise.
    """
    previous, denominator = 0, 1
    for i, term in enumerate(terms[1:], start=1):
        previous, denominator = denominator, term * denominator + previous
        if denominator > max_denominator:
            return terms[:i]
    return terms


def _repeats_with_period(tail: List[int], period: int) -> bool:
    return all(tail[i] == tail[i - period] for i in range(period, len(tail)))


def find_period(terms: List[int], max_period: int = MAX_PERIOD) -> Optional[Tuple[int, ...]]:
    """
    Smallest period of the tail, checked against every available term.

    The period must fit at least twice. Callers trim noisy trailing terms
    first (see ``reliable_prefix``).
    """
    tail = terms[1:]
    for period in range(1, max_period + 1):
        if len(tail) < 2 * period:
            break
        if _repeats_with_period(tail, period):
            return tuple(tail[:period])
    return None


def square_root_period(terms: List[int]) -> Optional[Tuple[int, ...]]:
    """
    Period of a pure square root expansion, found from a single repetition.

    For √N = [a0; a1, ..., a(r-1), 2·a0, ...] the terms before 2·a0 read the
    same backwards. The first 2·a0 closes the period.
    """
    if not terms or terms[0] < 1:
        return None
    tail = terms[1:]
    closing = 2 * terms[0]
    if closing not in tail:
        return None
    end = tail.index(closing) + 1
    body = tail[:end - 1]
    if body != body[::-1] or not _repeats_with_period(tail, end):
        return None
    return tuple(tail[:end])


def _is_perfect_square(n: int) -> bool:
    root = math.isqrt(n)
    return root * root == n


def _match_square_root(x: float, epsilon: float) -> Optional[str]:
    for n in range(2, MAX_RADICAND + 1):
        if _is_perfect_square(n):
            continue
        if abs(x - math.sqrt(n)) < epsilon:
            return f"√{n}"
    return None


def _match_golden_ratio(x: float, epsilon: float) -> Optional[str]:
    if abs(x - GOLDEN_RATIO) < epsilon:
        return "φ"
    if abs(x - GOLDEN_CONJUGATE) < epsilon:
        return "(√5-1)/2"
    return None


def _match_shifted_root(x: float, epsilon: float) -> Optional[str]:
    """Brute force over (√n ± m)/k"""
    for n in range(2, MAX_RADICAND + 1):
        if _is_perfect_square(n):
            continue
        root = math.sqrt(n)
        for m in range(1, MAX_ADDEND + 1):
            for k in range(1, MAX_DIVISOR + 1):
                for sign, value in (('+', root + m), ('-', root - m)):
                    if abs(x - value / k) < epsilon:
                        if k == 1:
                            return f"√{n}{sign}{m}"
                        return f"(√{n}{sign}{m})/{k}"
    return None


def _match_periodic_expansion(x: float, epsilon: float) -> Optional[str]:
    """
    Recognize √N from the periodic tail of its continued fraction.

    Known small patterns are looked up directly. For any other period that
    ends in 2·a0 (the shape of a pure square root expansion) the radicand
    is guessed as round(x²). This is a heuristic, not a Pell equation
    solver, and unlisted shapes return None. Radicands whose first period
    already outgrows ``RELIABLE_DENOMINATOR`` (√61 is one) stay out of reach.
    """
    terms = reliable_prefix(to_continued_fraction(x, 30, epsilon))
    if len(terms) < 3 or terms[0] < 1:
        return None
    if has_repeating_pattern(terms):
        period = (terms[1],)
    else:
        period = find_period(terms) or square_root_period(terms)
    if period is None:
        return None

    candidate = KNOWN_PERIODS.get((terms[0], period))
    if candidate is None and period[-1] == 2 * terms[0]:
        candidate = round(x * x)
    if candidate is None or candidate < 2 or _is_perfect_square(candidate):
        return None
    if abs(x - math.sqrt(candidate)) < epsilon:
        return f"√{candidate}"
    return None


def identify_quadratic_irrational(x: float, epsilon: float = DEFAULT_EPSILON) -> Optional[str]:
    """
    Try to express ``x`` as a quadratic irrational exact form.

    Returns strings like "√7", "φ", "(√5-1)/2" or "(√7+2)/3", or None when
    no candidate matches.
    """
    if not math.isfinite(x):
        return None
    for matcher in (_match_square_root, _match_golden_ratio,
                    _match_shifted_root, _match_periodic_expansion):
        form = matcher(x, epsilon)
        if form is not None:
            return form
    return None

