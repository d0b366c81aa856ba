"""Core expression tree components."""

from .node import MathNode, ConstantNode, VariableNode, UnaryOpNode, BinaryOpNode, ReductionNode
from .operators import (
    NodeType, OpType, BINARY_OP_MAP, UNARY_OP_MAP, REDUCTION_OP_MAP, NODE_ARITY,
    evaluate_variable, evaluate_constant, apply_unary_op_inplace, apply_binary_op_inplace,
    reduce_within_inplace, reduce_across_inplace
)

__all__ = [
    'MathNode', 'ConstantNode', 'VariableNode', 'UnaryOpNode', 'BinaryOpNode', 'ReductionNode',
    'NodeType', 'OpType', 'BINARY_OP_MAP', 'UNARY_OP_MAP', 'REDUCTION_OP_MAP', 'NODE_ARITY',
    'evaluate_variable', 'evaluate_constant', 'apply_unary_op_inplace', 'apply_binary_op_inplace',
    'reduce_within_inplace', 'reduce_across_inplace'
]
