import numpy as np
import numba
from enum import IntEnum

class NodeType(IntEnum):
  CONSTANT = 0
  VARIABLE = 1
  UNARY_OP = 2
  BINARY_OP = 3
  REDUCTION = 4

class OpType(IntEnum):
  # Binary ops
  ADD = 0
  SUB = 1
  MUL = 2
  DIV = 3
  POW = 4
  MOD = 5
  ATAN2 = 6
  # Unary ops
  SIN = 7
  COS = 8
  TAN = 9
  ASIN = 10
  ACOS = 11
  ATAN = 12
  SINH = 13
  COSH = 14
  TANH = 15
  EXP = 16
  LOG = 17
  LOG10 = 18
  SQRT = 19
  ABS = 20
  FLOOR = 21
  CEIL = 22
  ROUND = 23
  NEG = 24
  SIGN = 25
  # Reductions
  MIN = 26
  MAX = 27

# Mapping dictionaries
BINARY_OP_MAP = {
    '+': OpType.ADD, '-': OpType.SUB, '*': OpType.MUL, '/': OpType.DIV,
    '^': OpType.POW, '%': OpType.MOD, 'atan2': OpType.ATAN2
}
UNARY_OP_MAP = {
    'sin': OpType.SIN, 'cos': OpType.COS, 'tan': OpType.TAN,
    'asin': OpType.ASIN, 'acos': OpType.ACOS, 'atan': OpType.ATAN,
    'sinh': OpType.SINH, 'cosh': OpType.COSH, 'tanh': OpType.TANH,
    'exp': OpType.EXP, 'log': OpType.LOG, 'log10': OpType.LOG10,
    'sqrt': OpType.SQRT, 'abs': OpType.ABS, 'floor': OpType.FLOOR,
    'ceil': OpType.CEIL, 'round': OpType.ROUND, 'neg': OpType.NEG,
    'sign': OpType.SIGN
}
REDUCTION_OP_MAP = {'min': OpType.MIN, 'max': OpType.MAX}

# Minimum number of children each node type needs at evaluation time
NODE_ARITY = {
    NodeType.CONSTANT: 0,
    NodeType.VARIABLE: 0,
    NodeType.UNARY_OP: 1,
    NodeType.BINARY_OP: 2,
    NodeType.REDUCTION: 1,
}

def evaluate_variable(values):
  return np.ascontiguousarray(values, dtype=np.float64)

def evaluate_constant(n_samples, value):
  return np.full(n_samples, value, dtype=np.float64)

# The kernels below write their result into the first argument and return it.
# error_model='numpy' gives IEEE results (inf/nan) instead of ZeroDivisionError.

@numba.njit(cache=True, error_model='numpy')
def apply_unary_op_inplace(values, op_type):
  if op_type == OpType.SIN:
    values[:] = np.sin(values)
  elif op_type == OpType.COS:
    values[:] = np.cos(values)
  elif op_type == OpType.TAN:
    values[:] = np.tan(values)
  elif op_type == OpType.ASIN:
    values[:] = np.arcsin(values)
  elif op_type == OpType.ACOS:
    values[:] = np.arccos(values)
  elif op_type == OpType.ATAN:
    values[:] = np.arctan(values)
  elif op_type == OpType.SINH:
    values[:] = np.sinh(values)
  elif op_type == OpType.COSH:
    values[:] = np.cosh(values)
  elif op_type == OpType.TANH:
    values[:] = np.tanh(values)
  elif op_type == OpType.EXP:
    values[:] = np.exp(values)
  elif op_type == OpType.LOG:
    values[:] = np.log(values)
  elif op_type == OpType.LOG10:
    values[:] = np.log10(values)
  elif op_type == OpType.SQRT:
    values[:] = np.sqrt(values)
  elif op_type == OpType.ABS:
    values[:] = np.abs(values)
  elif op_type == OpType.FLOOR:
    values[:] = np.floor(values)
  elif op_type == OpType.CEIL:
    values[:] = np.ceil(values)
  elif op_type == OpType.ROUND:
    # halves round up: round(-2.5) == -2
    values[:] = np.floor(values + 0.5)
  elif op_type == OpType.NEG:
    values[:] = -values
  elif op_type == OpType.SIGN:
    values[:] = np.sign(values)
  else:
    raise ValueError("unknown unary operator")
  return values

@numba.njit(cache=True, error_model='numpy')
def apply_binary_op_inplace(left_val, right_val, op_type):
  if op_type == OpType.ADD:
    left_val[:] = left_val + right_val
  elif op_type == OpType.SUB:
    left_val[:] = left_val - right_val
  elif op_type == OpType.MUL:
    left_val[:] = left_val * right_val
  elif op_type == OpType.DIV:
    left_val[:] = left_val / right_val
  elif op_type == OpType.POW:
    left_val[:] = np.power(left_val, right_val)
  elif op_type == OpType.MOD:
    # sign follows the dividend, as in C fmod
    left_val[:] = np.fmod(left_val, right_val)
  elif op_type == OpType.ATAN2:
    left_val[:] = np.arctan2(left_val, right_val)
  else:
    raise ValueError("unknown binary operator")
  return left_val

def reduce_within_inplace(values, op_type):
  """Collapse one array to its own min/max and broadcast it over the buffer"""
  if values.shape[0] == 0:
    return values
  if op_type == OpType.MIN:
    values.fill(np.min(values))
  else:
    values.fill(np.max(values))
  return values

def reduce_across_inplace(arrays, op_type):
  """Index-by-index min/max across sibling arrays, written into arrays[0]"""
  if op_type == OpType.MIN:
    running = np.full(arrays[0].shape[0], np.inf, dtype=np.float64)
    for arr in arrays:
      np.minimum(running, arr, out=running)
  else:
    running = np.full(arrays[0].shape[0], -np.inf, dtype=np.float64)
    for arr in arrays:
      np.maximum(running, arr, out=running)
  arrays[0][:] = running
  return arrays[0]
