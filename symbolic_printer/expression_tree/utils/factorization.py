"""
Integer helpers for radicals and fractions.

Thin wrappers over the numba kernels in ``core.operators`` that accept any
integral number (int, integral float, numpy integer) and keep the kernels
inside the int64-safe range.
"""

import math
from typing import Tuple, Union

from ..core.operators import (
  MAX_SAFE_INTEGER, gcd_kernel, is_prime_kernel, factorize_radicand_kernel
)

Numeric = Union[int, float]


def as_safe_integer(value: Numeric):
  """Return ``value`` as an int if it is integral and int64-safe, else None"""
  try:
    as_float = float(value)
  except (TypeError, ValueError, OverflowError):
    return None
  if not math.isfinite(as_float) or not as_float.is_integer():
    return None
  if abs(as_float) > MAX_SAFE_INTEGER:
    return None
  return int(as_float)


def find_gcd(a: Numeric, b: Numeric) -> int:
  """Greatest common divisor of two integral numbers (sign ignored)"""
  int_a = as_safe_integer(a)
  int_b = as_safe_integer(b)
  if int_a is None or int_b is None:
    raise ValueError(f"find_gcd expects integral values, got {a!r} and {b!r}")
  return int(gcd_kernel(int_a, int_b))


def is_prime(n: Numeric) -> bool:
  int_n = as_safe_integer(n)
  if int_n is None:
    return False
  return bool(is_prime_kernel(int_n))


def factorize_radicand(n: Numeric) -> Tuple[int, Numeric]:
  """
  Split ``n`` into ``coefficient**2 * radicand`` with the largest square factor.

  Non-integral, negative or oversized inputs have no square factor to
  extract and come back as ``(1, n)``.
  """
  int_n = as_safe_integer(n)
  if int_n is None or int_n < 1:
    return 1, n
  coefficient, radicand = factorize_radicand_kernel(int_n)
  return int(coefficient), int(radicand)


def should_preserve_direct_radical(n: Numeric) -> bool:
  """Whether √n should stay as written rather than be split into c·√r"""
  if is_prime(n):
    return True
  if n <= 30:
    return True
  coefficient, _ = factorize_radicand(n)
  return coefficient == 1
