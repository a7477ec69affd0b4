import math

import pytest

from symbolic_printer.constants import ALL_VALUES
from symbolic_printer.expression_tree import (
    NumberNode, ConstantNode, BinaryOpNode, UnaryOpNode, RootNode
)
from symbolic_printer.expression_tree.utils.exact_form import parse_exact_form, tokenize


@pytest.mark.parametrize("text, value, rendered", [
    ("1", 1.0, "1"),
    ("1/2", 0.5, "1/2"),
    ("√3", math.sqrt(3), "√3"),
    ("√2/2", math.sqrt(2) / 2, "√2/2"),
    ("1/√3", 1 / math.sqrt(3), "1/√3"),
    ("φ", (1 + math.sqrt(5)) / 2, "φ"),
    ("(√5-1)/2", (math.sqrt(5) - 1) / 2, "(√5-1)/2"),
    ("√7+2", math.sqrt(7) + 2, "√7+2"),
    ("(√13-3)/2", (math.sqrt(13) - 3) / 2, "(√13-3)/2"),
    ("√(3) / 2", math.sqrt(3) / 2, "√3/2"),
    ("-π", -math.pi, "-π"),
])
def test_parse_exact_form(text, value, rendered):
    node = parse_exact_form(text)
    assert node.evaluate() == pytest.approx(value)
    assert node.to_string() == rendered


def test_tree_shape():
    node = parse_exact_form("√2/2")
    assert isinstance(node, BinaryOpNode) and node.operator == '/'
    assert isinstance(node.left, RootNode)
    assert isinstance(node.right, NumberNode)

    assert isinstance(parse_exact_form("π"), ConstantNode)
    assert isinstance(parse_exact_form("-2"), UnaryOpNode)


def test_tokenizer_prefers_longest_symbol():
    assert tokenize("ln(10)") == [('symbol', 'ln(10)')]
    assert tokenize("sin(π / 6)") == [('symbol', 'sin(π / 6)')]


@pytest.mark.parametrize("constant", [c for c in ALL_VALUES if c.exact_form is not None],
                         ids=lambda c: c.symbol)
def test_table_exact_forms_match_their_values(constant):
    assert parse_exact_form(constant.exact_form).evaluate() == pytest.approx(constant.value, abs=1e-12)


@pytest.mark.parametrize("text", ["", "x", "(√2", "√2)", "1/", "2 3"])
def test_malformed_input_raises(text):
    with pytest.raises(ValueError):
        parse_exact_form(text)
