import numpy as np
import sympy as sp
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from .operators import (
  NodeType, OpType, BINARY_OP_MAP, UNARY_OP_MAP, REDUCTION_OP_MAP, NODE_ARITY,
  evaluate_variable, evaluate_constant, apply_unary_op_inplace, apply_binary_op_inplace,
  reduce_within_inplace, reduce_across_inplace
)
from ...domain import DomainInterface
from ...errors import NodeEvaluationError


SYMPY_UNARY = {
  OpType.SIN: sp.sin,
  OpType.COS: sp.cos,
  OpType.TAN: sp.tan,
  OpType.ASIN: sp.asin,
  OpType.ACOS: sp.acos,
  OpType.ATAN: sp.atan,
  OpType.SINH: sp.sinh,
  OpType.COSH: sp.cosh,
  OpType.TANH: sp.tanh,
  OpType.EXP: sp.exp,
  OpType.LOG: sp.log,
  OpType.LOG10: lambda a: sp.log(a, 10),
  OpType.SQRT: sp.sqrt,
  OpType.ABS: sp.Abs,
  OpType.FLOOR: sp.floor,
  OpType.CEIL: sp.ceiling,
  OpType.ROUND: lambda a: sp.floor(a + sp.Rational(1, 2)),
  OpType.NEG: lambda a: -a,
  OpType.SIGN: sp.sign,
}


class MathNode(ABC):
  """
  Base node. Children are owned exclusively by their parent and evaluated
  depth first; arity is checked when the node is evaluated, not when it is
  built, so a parser may add children one at a time.

  Operator nodes reuse their first child's buffer: the array returned by
  ``evaluate`` may be the very object a child returned.
  """

  __slots__ = ('node_id', '_children', '_size_cache')

  node_type: NodeType = NodeType.CONSTANT

  def __init__(self, node_id=None, children: Optional[List['MathNode']] = None):
    self.node_id = node_id
    self._children: List['MathNode'] = []
    self._size_cache: Optional[int] = None
    for child in children or ():
      self.add_child(child)

  @property
  def children(self) -> Tuple['MathNode', ...]:
    return tuple(self._children)

  @property
  def child_count(self) -> int:
    return len(self._children)

  def get_child(self, index: int) -> 'MathNode':
    return self._children[index]

  def add_child(self, child: 'MathNode') -> 'MathNode':
    if child is None:
      return self
    self._children.append(child)
    self._size_cache = None
    return self

  @property
  def label(self) -> str:
    """Short operator name used in diagnostics"""
    return self.node_type.name.lower()

  def evaluate(self, domain: DomainInterface) -> np.ndarray:
    self._check_arity()
    return self.perform_calculation(domain)

  def _check_arity(self):
    required = NODE_ARITY[self.node_type]
    count = self.child_count
    if count >= required:
      return
    if count == 0:
      msg = f"{self.label} function ({self.node_id}) doesn't have any arguments"
    else:
      msg = (f"{self.label} function ({self.node_id}) needs {required} arguments "
             f"but has {count}")
    raise NodeEvaluationError(msg, node_id=self.node_id)

  def _evaluate_children(self, domain: DomainInterface, count: int) -> List[np.ndarray]:
    arrays = [self._children[i].evaluate(domain) for i in range(count)]
    n = arrays[0].shape[0]
    for arr in arrays[1:]:
      if arr.shape[0] != n:
        raise NodeEvaluationError(
          f"{self.label} function ({self.node_id}) has arguments of different lengths "
          f"({n} and {arr.shape[0]})", node_id=self.node_id)
    return arrays

  @abstractmethod
  def perform_calculation(self, domain: DomainInterface) -> np.ndarray:
    pass

  @abstractmethod
  def to_string(self) -> str:
    pass

  @abstractmethod
  def copy(self) -> 'MathNode':
    pass

  @abstractmethod
  def to_sympy(self) -> sp.Expr:
    pass

  def is_splittable(self) -> bool:
    return False

  def size(self) -> int:
    """Node count"""
    if self._size_cache is None:
      self._size_cache = 1 + sum(child.size() for child in self._children)
    return self._size_cache

  def _copy_children(self) -> List['MathNode']:
    return [child.copy() for child in self._children]

  def __repr__(self) -> str:
    return f"{type(self).__name__}({self.to_string()})"


class ConstantNode(MathNode):
  __slots__ = ('value',)

  node_type = NodeType.CONSTANT

  def __init__(self, value: float, node_id=None):
    super().__init__(node_id)
    self.value = float(value)

  def perform_calculation(self, domain: DomainInterface) -> np.ndarray:
    return evaluate_constant(domain.sample_count, self.value)

  def to_string(self) -> str:
    return f"{self.value:g}"

  def copy(self) -> 'ConstantNode':
    return ConstantNode(self.value, self.node_id)

  def to_sympy(self):
    return sp.Float(self.value)


class VariableNode(MathNode):
  __slots__ = ('name',)

  node_type = NodeType.VARIABLE

  def __init__(self, name: str, node_id=None):
    super().__init__(node_id)
    self.name = name

  def perform_calculation(self, domain: DomainInterface) -> np.ndarray:
    return evaluate_variable(domain.get_values(self.name))

  def to_string(self) -> str:
    return self.name

  def copy(self) -> 'VariableNode':
    return VariableNode(self.name, self.node_id)

  def to_sympy(self):
    return sp.Symbol(self.name)


class UnaryOpNode(MathNode):
  """Elementwise function of one argument, applied in place"""

  __slots__ = ('operator', 'op_type')

  node_type = NodeType.UNARY_OP

  def __init__(self, operator: str, operand: Optional[MathNode] = None, node_id=None):
    if operator not in UNARY_OP_MAP:
      raise ValueError(f"Unknown unary operator: {operator}")
    super().__init__(node_id, [operand])
    self.operator = operator
    self.op_type = UNARY_OP_MAP[operator]

  @property
  def label(self) -> str:
    return self.operator

  @property
  def operand(self) -> MathNode:
    return self._children[0]

  def perform_calculation(self, domain: DomainInterface) -> np.ndarray:
    values = self._children[0].evaluate(domain)
    apply_unary_op_inplace(values, self.op_type)
    return values

  def to_string(self) -> str:
    operand = self._children[0].to_string() if self._children else ''
    return f"{self.operator}({operand})"

  def copy(self) -> 'UnaryOpNode':
    node = UnaryOpNode(self.operator, node_id=self.node_id)
    for child in self._copy_children():
      node.add_child(child)
    return node

  def to_sympy(self):
    return SYMPY_UNARY[self.op_type](self._children[0].to_sympy())


class BinaryOpNode(MathNode):
  """Elementwise combination of two same-length arguments, into the left buffer"""

  __slots__ = ('operator', 'op_type')

  node_type = NodeType.BINARY_OP

  def __init__(self, operator: str, left: Optional[MathNode] = None,
               right: Optional[MathNode] = None, node_id=None):
    if operator not in BINARY_OP_MAP:
      raise ValueError(f"Unknown binary operator: {operator}")
    if left is None and right is not None:
      raise ValueError("a right operand needs a left operand")
    super().__init__(node_id, [left, right])
    self.operator = operator
    self.op_type = BINARY_OP_MAP[operator]

  @property
  def label(self) -> str:
    return self.operator

  @property
  def left(self) -> MathNode:
    return self._children[0]

  @property
  def right(self) -> MathNode:
    return self._children[1]

  def perform_calculation(self, domain: DomainInterface) -> np.ndarray:
    left_val, right_val = self._evaluate_children(domain, 2)
    apply_binary_op_inplace(left_val, right_val, self.op_type)
    return left_val

  def to_string(self) -> str:
    parts = [child.to_string() for child in self._children]
    if self.op_type == OpType.ATAN2:
      return f"atan2({', '.join(parts)})"
    return f"({f' {self.operator} '.join(parts)})"

  def copy(self) -> 'BinaryOpNode':
    node = BinaryOpNode(self.operator, node_id=self.node_id)
    for child in self._copy_children():
      node.add_child(child)
    return node

  def to_sympy(self):
    left = self._children[0].to_sympy()
    right = self._children[1].to_sympy()
    if self.op_type == OpType.ADD:
      return sp.Add(left, right)
    elif self.op_type == OpType.SUB:
      return sp.Add(left, sp.Mul(-1, right))
    elif self.op_type == OpType.MUL:
      return sp.Mul(left, right)
    elif self.op_type == OpType.DIV:
      return sp.Mul(left, sp.Pow(right, -1))
    elif self.op_type == OpType.POW:
      return sp.Pow(left, right)
    elif self.op_type == OpType.MOD:
      # sympy's Mod takes the sign of the divisor, fmod the dividend
      return sp.Function('fmod')(left, right)
    elif self.op_type == OpType.ATAN2:
      return sp.atan2(left, right)
    raise RuntimeWarning(f"to_sympy reached unexpected operation: {self.operator}")


class ReductionNode(MathNode):
  """
  min/max over one or more arguments.

  With a single argument the node reduces that array to its own min/max and
  every output element equals it. With several it reduces index by index
  across the arguments.
  """

  __slots__ = ('operator', 'op_type')

  node_type = NodeType.REDUCTION

  def __init__(self, operator: str, *operands: MathNode, node_id=None):
    if operator not in REDUCTION_OP_MAP:
      raise ValueError(f"Unknown reduction: {operator}")
    super().__init__(node_id, list(operands))
    self.operator = operator
    self.op_type = REDUCTION_OP_MAP[operator]

  @property
  def label(self) -> str:
    return self.operator

  def is_splittable(self) -> bool:
    return self.child_count > 1

  def perform_calculation(self, domain: DomainInterface) -> np.ndarray:
    if self.child_count == 1:
      values = self._children[0].evaluate(domain)
      return reduce_within_inplace(values, self.op_type)
    arrays = self._evaluate_children(domain, self.child_count)
    return reduce_across_inplace(arrays, self.op_type)

  def to_string(self) -> str:
    return f"{self.operator}({', '.join(child.to_string() for child in self._children)})"

  def copy(self) -> 'ReductionNode':
    return ReductionNode(self.operator, *self._copy_children(), node_id=self.node_id)

  def to_sympy(self):
    args = [child.to_sympy() for child in self._children]
    if len(args) == 1:
      # within-array reduction has no sympy counterpart
      return sp.Function(f"{self.operator}_over")(args[0])
    if self.op_type == OpType.MIN:
      return sp.Min(*args)
    return sp.Max(*args)
