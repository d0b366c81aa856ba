"""Expression Tree Module

Vectorized expression trees evaluated against a domain of variable samples.
"""

from .expression import Expression
from .core.node import (
    MathNode,
    ConstantNode,
    VariableNode,
    UnaryOpNode,
    BinaryOpNode,
    ReductionNode
)
from .core.operators import (
    NodeType,
    OpType,
    BINARY_OP_MAP,
    UNARY_OP_MAP,
    REDUCTION_OP_MAP,
)
from .utils import ExpressionValidator

__all__ = [
    "Expression",
    "MathNode", "ConstantNode", "VariableNode", "UnaryOpNode", "BinaryOpNode", "ReductionNode",
    "NodeType", "OpType",
    "BINARY_OP_MAP", "UNARY_OP_MAP", "REDUCTION_OP_MAP",
    "ExpressionValidator"
]
