"""Domain providers: variable name -> sample values for vectorized evaluation."""

import numpy as np
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional, Sequence, Tuple

from .errors import DomainError


class DomainInterface(ABC):
  """Supplies, for a named variable, the ordered samples used for evaluation"""

  @abstractmethod
  def get_values(self, name: str) -> np.ndarray:
    pass

  @abstractmethod
  def has_variable(self, name: str) -> bool:
    pass

  @property
  @abstractmethod
  def sample_count(self) -> int:
    pass


class ArrayDomain(DomainInterface):
  """Dictionary backed domain; every binding shares one sample count"""

  def __init__(self, bindings: Mapping[str, Sequence[float]], sample_count: Optional[int] = None):
    self._values: Dict[str, np.ndarray] = {}
    for name, values in bindings.items():
      arr = np.array(values, dtype=np.float64)
      if arr.ndim != 1:
        raise DomainError(f"domain variable '{name}' must be one-dimensional, got shape {arr.shape}")
      self._values[name] = arr

    lengths = {arr.shape[0] for arr in self._values.values()}
    if sample_count is not None:
      lengths.add(int(sample_count))
    if len(lengths) > 1:
      raise DomainError(f"domain variables have different lengths: {sorted(lengths)}")
    self._sample_count = lengths.pop() if lengths else 0

  @classmethod
  def linspace(cls, name: str, start: float, stop: float, n_samples: int) -> 'ArrayDomain':
    return cls({name: np.linspace(start, stop, n_samples)})

  @classmethod
  def grid(cls, x_name: str, x_range: Tuple[float, float],
           y_name: str, y_range: Tuple[float, float],
           n_x: int, n_y: int) -> 'ArrayDomain':
    """Flattened ``n_x * n_y`` grid, x varying fastest"""
    xs = np.linspace(x_range[0], x_range[1], n_x)
    ys = np.linspace(y_range[0], y_range[1], n_y)
    xx, yy = np.meshgrid(xs, ys)
    return cls({x_name: xx.ravel(), y_name: yy.ravel()})

  def get_values(self, name: str) -> np.ndarray:
    """A fresh copy, so in-place node kernels never touch the bindings"""
    try:
      return self._values[name].copy()
    except KeyError:
      raise DomainError(f"'{name}' is not a domain variable") from None

  def has_variable(self, name: str) -> bool:
    return name in self._values

  @property
  def sample_count(self) -> int:
    return self._sample_count

  @property
  def variables(self):
    return sorted(self._values)
