import numpy as np
import numba
from enum import IntEnum

class NodeType(IntEnum):
  NUMBER = 0
  CONSTANT = 1
  BINARY_OP = 2
  UNARY_OP = 3
  ROOT = 4
  POWER = 5

class OpType(IntEnum):
  # Binary ops
  ADD = 0
  SUB = 1
  MUL = 2
  DIV = 3
  # Unary ops
  NEG = 4
  SQRT = 5
  CBRT = 6

# Mapping dictionaries
BINARY_OP_MAP = {'+': OpType.ADD, '-': OpType.SUB, '*': OpType.MUL, '/': OpType.DIV}
UNARY_OP_MAP = {'neg': OpType.NEG, 'sqrt': OpType.SQRT, 'cbrt': OpType.CBRT}

# Display glyphs
MUL_GLYPH = '·'
SQRT_GLYPH = '√'
CBRT_GLYPH = '∛'
SUPERSCRIPTS = {2: '²', 3: '³'}

# Largest integer a float holds exactly; integer kernels refuse anything above it
MAX_SAFE_INTEGER = 2 ** 53 - 1


def evaluate_binary_op(left_val: float, right_val: float, operator: str) -> float:
  """IEEE scalar arithmetic: division by zero yields inf/nan instead of raising"""
  left = np.float64(left_val)
  right = np.float64(right_val)
  with np.errstate(all='ignore'):
    if operator == '+':
      result = left + right
    elif operator == '-':
      result = left - right
    elif operator == '*':
      result = left * right
    elif operator == '/':
      result = np.divide(left, right)
    else:
      raise ValueError(f"Unknown binary operator: {operator}")
  return float(result)


def evaluate_unary_op(operand_val: float, operator: str) -> float:
  value = np.float64(operand_val)
  with np.errstate(all='ignore'):
    if operator == 'neg':
      result = -value
    elif operator == 'sqrt':
      result = np.sqrt(value)
    elif operator == 'cbrt':
      result = np.cbrt(value)
    else:
      raise ValueError(f"Unknown unary operator: {operator}")
  return float(result)


def evaluate_power(base_val: float, exponent_val: float) -> float:
  with np.errstate(all='ignore'):
    return float(np.power(np.float64(base_val), np.float64(exponent_val)))


@numba.njit(cache=True)
def gcd_kernel(a, b):
  a = abs(a)
  b = abs(b)
  while b != 0:
    a, b = b, a % b
  return a


@numba.njit(cache=True)
def is_prime_kernel(n):
  if n <= 1:
    return False
  if n <= 3:
    return True
  if n % 2 == 0 or n % 3 == 0:
    return False
  i = 5
  while i * i <= n:
    if n % i == 0 or n % (i + 2) == 0:
      return False
    i += 6
  return True


@numba.njit(cache=True)
def factorize_radicand_kernel(n):
  # Pull out every square factor, retrying the same i for repeated powers
  coefficient = 1
  i = 2
  while i * i <= n:
    if n % (i * i) == 0:
      coefficient *= i
      n //= i * i
    else:
      i += 1
  return coefficient, n
