"""Utilities for expression trees.

Only the integer helpers are re-exported here: ``core.node`` depends on them,
so the tree-aware modules (``exact_form``, ``tree_utils``) are imported by
their full path.
"""

from .factorization import (
  as_safe_integer, find_gcd, is_prime, factorize_radicand,
  should_preserve_direct_radical
)

__all__ = [
  'as_safe_integer', 'find_gcd', 'is_prime', 'factorize_radicand',
  'should_preserve_direct_radical'
]
