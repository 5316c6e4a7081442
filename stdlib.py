"""
Lispy Standard Library
List builtins (list, head, tail, join) and integer arithmetic
Every builtin consumes its argument container
"""

from typing import Callable, Dict
import operator

from values import (
  Container,
  ErrorKind,
  Number,
  QExpr,
  Value,
  make_error,
  make_number,
  make_qexpr,
  move_cells,
  pop,
  release,
  take,
)
from utilities import (
  arity_error,
  binary_arithmetic_op,
  non_number_error,
  truncating_div,
  validate_arg_types,
  validate_function_args,
  validate_non_empty,
)


# ============================================================================
# LIST FUNCTIONS
# ============================================================================

def lispy_list(args: Container) -> Value:
  """Turn the argument list itself into a Q-expression"""
  return move_cells(args, make_qexpr())


def _single_non_empty_qexpr(func_name: str, args: Container) -> Value:
  """Check the head/tail preconditions; return the list or an error"""
  error = validate_function_args(func_name, args, [QExpr], ["Q-Expression"])
  if error is None:
    error = validate_non_empty(func_name, args.cells[0])
  if error is not None:
    release(args)
    return error
  return take(args, 0)


def lispy_head(args: Container) -> Value:
  """Get first element of a list"""
  lst = _single_non_empty_qexpr("head", args)
  if not isinstance(lst, QExpr):
    return lst
  return take(lst, 0)


def lispy_tail(args: Container) -> Value:
  """Get tail (all but first element) of a list"""
  lst = _single_non_empty_qexpr("tail", args)
  if not isinstance(lst, QExpr):
    return lst
  release(pop(lst, 0))
  return lst


def lispy_join(args: Container) -> Value:
  """Concatenate Q-expressions in argument order"""
  error = validate_arg_types("join", args, QExpr, "Q-Expression")
  if error is not None:
    release(args)
    return error

  result = make_qexpr()
  while args.cells:
    move_cells(pop(args, 0), result)
  return result


LIST_FUNCTIONS: Dict[str, Callable[[Container], Value]] = {
    "list": lispy_list,
    "head": lispy_head,
    "tail": lispy_tail,
    "join": lispy_join,
}


# ============================================================================
# ARITHMETIC FUNCTIONS
# ============================================================================

lispy_add = binary_arithmetic_op(operator.add)
lispy_sub = binary_arithmetic_op(operator.sub)
lispy_mul = binary_arithmetic_op(operator.mul)
_lispy_div_impl = binary_arithmetic_op(truncating_div)


def lispy_div(x: Number, y: Number) -> Value:
  """Truncating division"""
  if y.num == 0:
    return make_error(ErrorKind.DIVISION_BY_ZERO)
  return _lispy_div_impl(x, y)


def lispy_negate(x: Number) -> Value:
  """Unary minus"""
  return make_number(-x.num)


ARITHMETIC_OPERATORS: Dict[str, Callable[[Number, Number], Value]] = {
    "+": lispy_add,
    "-": lispy_sub,
    "*": lispy_mul,
    "/": lispy_div,
}


def builtin_op(args: Container, op: str) -> Value:
  """Fold an arithmetic operator left to right over Number arguments"""
  for arg in args.cells:
    if not isinstance(arg, Number):
      release(args)
      return non_number_error()

  if not args.cells:
    return arity_error(op, 1, 0)

  x = pop(args, 0)

  if op == "-" and not args.cells:
    x = lispy_negate(x)

  combine = ARITHMETIC_OPERATORS[op]
  while args.cells and isinstance(x, Number):
    y = pop(args, 0)
    x = combine(x, y)

  # x is an error here if the fold stopped early; drop what is left
  release(args)
  return x
