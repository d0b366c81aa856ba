import numpy as np
import sympy as sp
from typing import Optional
from .core.node import MathNode
from ..domain import DomainInterface


class Expression:
  """Root wrapper around a node tree with a cached string form"""

  __slots__ = ('root', '_string_cache')

  def __init__(self, root: MathNode):
    self.root = root
    self._string_cache: Optional[str] = None

  def evaluate(self, domain: DomainInterface) -> np.ndarray:
    return self.root.evaluate(domain)

  def to_string(self) -> str:
    if self._string_cache is None:
      self._string_cache = self.root.to_string()
    return self._string_cache

  def copy(self) -> 'Expression':
    return Expression(self.root.copy())

  def size(self) -> int:
    """Node count"""
    return self.root.size()

  def is_splittable(self) -> bool:
    return self.root.is_splittable()

  def clear_cache(self):
    """Clear cached values"""
    self._string_cache = None

  def to_sympy(self) -> sp.Expr:
    return self.root.to_sympy()

  def __str__(self) -> str:
    return self.to_string()
