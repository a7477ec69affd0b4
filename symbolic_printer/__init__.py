"""
Symbolic Printer Package

Render floating-point numbers as compact symbolic expressions such as
"5·√2", "2·π" or "π/2".
"""

from .config import ConversionConfig, DEFAULT_CONFIG
from .constants import CONSTANTS, TRIG_VALUES, MathConstant, find_constant
from .continued_fractions import (
    to_continued_fraction, from_continued_fraction, get_convergents,
    identify_quadratic_irrational
)
from .decomposer import NumberDecomposer
from .expression_tree import (
    Node, NumberNode, ConstantNode, BinaryOpNode, UnaryOpNode, RootNode, PowerNode
)
from .logging_system import LogLevel, configure_logging, get_logger, set_log_level
from .printer import convert, to_expression, to_latex

__version__ = "0.1.0"

__all__ = [
    'convert', 'to_expression', 'to_latex',
    'ConversionConfig', 'DEFAULT_CONFIG',
    'NumberDecomposer',
    'Node', 'NumberNode', 'ConstantNode', 'BinaryOpNode', 'UnaryOpNode', 'RootNode', 'PowerNode',
    'CONSTANTS', 'TRIG_VALUES', 'MathConstant', 'find_constant',
    'to_continued_fraction', 'from_continued_fraction', 'get_convergents',
    'identify_quadratic_irrational',
    'LogLevel', 'configure_logging', 'get_logger', 'set_log_level',
]
