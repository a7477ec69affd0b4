"""
Parser for the exact-form strings stored in the constant tables and returned
by the quadratic irrational recognizer ("√3/2", "1/√3", "(√5-1)/2", "φ").

Grammar:
  expr    := term (('+' | '-') term)*
  term    := unary ('/' unary)*
  unary   := '-' unary | '√' unary | primary
  primary := NUMBER | SYMBOL | '(' expr ')'
"""

from typing import List, Tuple

from ..core.node import Node, NumberNode, ConstantNode, BinaryOpNode, UnaryOpNode, RootNode
from ...constants import ALL_VALUES, find_constant

Token = Tuple[str, str]

# Symbols recognized by the tokenizer; roots like '√2' are parsed structurally
_SYMBOLS = sorted(
  {s for c in ALL_VALUES for s in (c.symbol, c.spaced_symbol)
   if s is not None and not s.startswith('√')},
  key=len, reverse=True
)


def tokenize(text: str) -> List[Token]:
  tokens: List[Token] = []
  i = 0
  while i < len(text):
    char = text[i]
    if char.isspace():
      i += 1
      continue
    if char.isdigit() or char == '.':
      start = i
      while i < len(text) and (text[i].isdigit() or text[i] == '.'):
        i += 1
      tokens.append(('number', text[start:i]))
      continue
    symbol = next((s for s in _SYMBOLS if text.startswith(s, i)), None)
    if symbol is not None:
      tokens.append(('symbol', symbol))
      i += len(symbol)
      continue
    if char in '+-/()√':
      tokens.append(('op', char))
      i += 1
      continue
    raise ValueError(f"Unexpected character {char!r} at position {i} in {text!r}")
  return tokens


class _Parser:
  def __init__(self, text: str):
    self.text = text
    self.tokens = tokenize(text)
    self.pos = 0

  def peek(self):
    if self.pos < len(self.tokens):
      return self.tokens[self.pos]
    return None

  def accept(self, value: str) -> bool:
    token = self.peek()
    if token is not None and token[0] == 'op' and token[1] == value:
      self.pos += 1
      return True
    return False

  def parse(self) -> Node:
    if not self.tokens:
      raise ValueError("Empty exact form")
    node = self.expr()
    if self.peek() is not None:
      raise ValueError(f"Trailing input in exact form {self.text!r}")
    return node

  def expr(self) -> Node:
    node = self.term()
    while True:
      if self.accept('+'):
        node = BinaryOpNode('+', node, self.term())
      elif self.accept('-'):
        node = BinaryOpNode('-', node, self.term())
      else:
        return node

  def term(self) -> Node:
    node = self.unary()
    while self.accept('/'):
      node = BinaryOpNode('/', node, self.unary())
    return node

  def unary(self) -> Node:
    if self.accept('-'):
      return UnaryOpNode('neg', self.unary())
    if self.accept('√'):
      return RootNode(self.unary())
    return self.primary()

  def primary(self) -> Node:
    token = self.peek()
    if token is None:
      raise ValueError(f"Unexpected end of exact form {self.text!r}")
    kind, value = token
    if kind == 'number':
      self.pos += 1
      return NumberNode(float(value))
    if kind == 'symbol':
      self.pos += 1
      constant = find_constant(value)
      return ConstantNode(constant.symbol, constant.value)
    if self.accept('('):
      node = self.expr()
      if not self.accept(')'):
        raise ValueError(f"Unbalanced parentheses in exact form {self.text!r}")
      return node
    raise ValueError(f"Unexpected token {value!r} in exact form {self.text!r}")


def parse_exact_form(text: str) -> Node:
  """Build an (unsimplified) expression tree from an exact-form string"""
  return _Parser(text).parse()
