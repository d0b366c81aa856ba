import numpy as np
from typing import List, Optional
from ..core.node import MathNode, ConstantNode, UnaryOpNode, BinaryOpNode, ReductionNode
from ..core.operators import NODE_ARITY
from ...domain import DomainInterface
from ...errors import DomainError, NodeEvaluationError
from .tree_utils import get_all_nodes


class ExpressionValidator:
  """Construction-time checks for trees a parser has built"""

  @staticmethod
  def is_valid_expression(node: MathNode, domain: Optional[DomainInterface] = None) -> bool:
    if ExpressionValidator.find_arity_violations(node):
      return False

    for current in get_all_nodes(node):
      if isinstance(current, ConstantNode) and not np.isfinite(current.value):
        return False

    if domain is not None:
      return ExpressionValidator._test_evaluation(node, domain)

    return True

  @staticmethod
  def find_arity_violations(node: MathNode) -> List[object]:
    """Ids of nodes whose child count does not fit their variant"""
    violations = []
    for current in get_all_nodes(node, 'depth_first'):
      count = current.child_count
      required = NODE_ARITY[current.node_type]
      if isinstance(current, (UnaryOpNode, BinaryOpNode)):
        ok = count == required
      elif isinstance(current, ReductionNode):
        ok = count >= required
      else:
        ok = count == 0
      if not ok:
        violations.append(current.node_id)
    return violations

  @staticmethod
  def _test_evaluation(node: MathNode, domain: DomainInterface) -> bool:
    try:
      result = node.evaluate(domain)
    except (NodeEvaluationError, DomainError):
      return False

    if not isinstance(result, np.ndarray):
      return False

    return result.shape == (domain.sample_count,)
