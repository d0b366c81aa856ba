"""Equation Engine

Symbol table for user-defined constants and functions, and vectorized
expression trees evaluated over a domain of variable samples.
"""

from .errors import EquationParseError, NodeEvaluationError, DomainError
from .equation_set import EquationSet, Symbol
from .domain import DomainInterface, ArrayDomain
from .math_string import (
  get_function_name, get_function_args, parse_signature, is_matrix,
  INDEPENDENT_VARIABLE, INDEPENDENT_VARIABLE_1, INDEPENDENT_VARIABLE_2
)
from .expression_tree import (
  Expression, MathNode, ConstantNode, VariableNode,
  UnaryOpNode, BinaryOpNode, ReductionNode, ExpressionValidator
)
from .logging_system import LogLevel, configure_logging, get_logger, set_log_level

__version__ = "0.1.0"
__all__ = [
  "EquationParseError", "NodeEvaluationError", "DomainError",
  "EquationSet", "Symbol",
  "DomainInterface", "ArrayDomain",
  "get_function_name", "get_function_args", "parse_signature", "is_matrix",
  "INDEPENDENT_VARIABLE", "INDEPENDENT_VARIABLE_1", "INDEPENDENT_VARIABLE_2",
  "Expression", "MathNode", "ConstantNode", "VariableNode",
  "UnaryOpNode", "BinaryOpNode", "ReductionNode", "ExpressionValidator",
  "LogLevel", "configure_logging", "get_logger", "set_log_level",
]
