"""
Tree Utility Functions

Traversal and lookup helpers for expression trees. Every node exposes its
children uniformly, so these work for any node variant.
"""

from typing import List, Type

from ..core.node import MathNode, VariableNode


def get_all_nodes(node: MathNode, traversal_order: str = 'breadth_first') -> List[MathNode]:
    """
    Get all nodes in the tree using specified traversal order.

    Args:
        node: Root node of the tree
        traversal_order: 'breadth_first' (default) or 'depth_first'

    Returns:
        List of all nodes in the tree
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: MathNode) -> List[MathNode]:
    """Breadth-first traversal (iterative, non-recursive)"""
    nodes_to_visit = [node]
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.pop(0)  # FIFO for breadth-first
        all_nodes.append(current_node)
        nodes_to_visit.extend(current_node.children)

    return all_nodes


def _depth_first_traversal(node: MathNode) -> List[MathNode]:
    """Depth-first traversal (pre-order, recursive)"""
    nodes = [node]
    for child in node.children:
        nodes.extend(_depth_first_traversal(child))
    return nodes


def calculate_tree_depth(node: MathNode) -> int:
    """
    Calculate the maximum depth of the tree.

    Args:
        node: Root node of the tree

    Returns:
        Maximum depth (leaf nodes have depth 1)
    """
    if node.child_count == 0:
        return 1
    return 1 + max(calculate_tree_depth(child) for child in node.children)


def find_nodes_by_type(node: MathNode, node_class: Type[MathNode]) -> List[MathNode]:
    """All nodes that are instances of ``node_class``"""
    return [n for n in get_all_nodes(node) if isinstance(n, node_class)]


def find_nodes_by_operator(node: MathNode, operator: str) -> List[MathNode]:
    """All operator nodes whose operator string equals ``operator``"""
    return [n for n in get_all_nodes(node) if getattr(n, 'operator', None) == operator]


def get_variables(node: MathNode) -> List[str]:
    """Sorted distinct variable names referenced by the tree"""
    return sorted({n.name for n in find_nodes_by_type(node, VariableNode)})
