"""Utilities for expression trees."""

from .tree_utils import (
    get_all_nodes, calculate_tree_depth, get_variables,
    find_nodes_by_type, find_nodes_by_operator
)
from .validator import ExpressionValidator

__all__ = [
    'get_all_nodes', 'calculate_tree_depth', 'get_variables',
    'find_nodes_by_type', 'find_nodes_by_operator',
    'ExpressionValidator'
]
