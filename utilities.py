"""
Utilities module for the Lispy interpreter
Argument checks and error builders shared by the builtins
"""

from typing import Callable, List, Optional, Type

from values import (
  Container,
  Error,
  ErrorKind,
  Number,
  Value,
  make_error,
  make_number,
  type_name,
)


BUILTIN_NAMES = ["+", "-", "*", "/", "list", "head", "tail", "join", "eval"]


# ==================== ERROR MESSAGE BUILDERS ====================

def arity_error(func_name: str, expected: int, got: int) -> Error:
  """
  Generate arity mismatch error

  Args:
    func_name: Function name
    expected: Expected number of arguments
    got: Actual number of arguments

  Returns:
    WrongArgCount error value
  """
  plural = "argument" if expected == 1 else "arguments"
  return make_error(
    ErrorKind.WRONG_ARG_COUNT,
    f"Function '{func_name}' requires {expected} {plural}, got {got}!"
  )


def type_mismatch_error(
  func_name: str,
  param_name: str,
  expected: str,
  actual: Value
) -> Error:
  """
  Generate type mismatch error

  Args:
    func_name: Function name
    param_name: Parameter name
    expected: Expected variant name
    actual: Actual value

  Returns:
    WrongArgType error value
  """
  return make_error(
    ErrorKind.WRONG_ARG_TYPE,
    f"Function '{func_name}' requires {expected} for {param_name}, got {type_name(actual)}!"
  )


def empty_list_error(func_name: str) -> Error:
  return make_error(ErrorKind.EMPTY_LIST, f"Function '{func_name}' passed {{}}!")


def non_number_error() -> Error:
  return make_error(ErrorKind.WRONG_ARG_TYPE, "Cannot operate on a non-number!")


# ==================== VALIDATION UTILITIES ====================

def validate_arg_count(func_name: str, args: Container, expected: int) -> Optional[Error]:
  """Return an arity error unless args holds exactly `expected` values"""
  if len(args.cells) != expected:
    return arity_error(func_name, expected, len(args.cells))
  return None


def validate_arg_types(
  func_name: str,
  args: Container,
  expected_type: Type,
  expected_name: str
) -> Optional[Error]:
  """
  Validate that every argument is of the expected variant

  Args:
    func_name: Function name for error messages
    args: Argument container
    expected_type: Expected variant class
    expected_name: Variant name used in the message

  Returns:
    WrongArgType error for the first mismatching argument, or None
  """
  for i, arg in enumerate(args.cells):
    if not isinstance(arg, expected_type):
      return type_mismatch_error(func_name, f"argument {i+1}", expected_name, arg)
  return None


def validate_function_args(
  func_name: str,
  args: Container,
  expected_types: List[Type],
  expected_names: List[str]
) -> Optional[Error]:
  """
  Validate argument count and per-position types

  Args:
    func_name: Function name for error messages
    args: Argument container
    expected_types: Expected variant class per position
    expected_names: Variant names used in messages

  Returns:
    The first violated precondition as an error value, or None
  """
  error = validate_arg_count(func_name, args, len(expected_types))
  if error is not None:
    return error

  for i, (arg, expected, name) in enumerate(zip(args.cells, expected_types, expected_names)):
    if not isinstance(arg, expected):
      return type_mismatch_error(func_name, f"argument {i+1}", name, arg)
  return None


def validate_non_empty(func_name: str, lst: Container) -> Optional[Error]:
  """Precondition for head/tail: the list holds at least one element"""
  if not lst.cells:
    return empty_list_error(func_name)
  return None


# ==================== ARITHMETIC ====================

def truncating_div(x: int, y: int) -> int:
  """Integer division rounding toward zero"""
  q = abs(x) // abs(y)
  return -q if (x < 0) != (y < 0) else q


def binary_arithmetic_op(op: Callable[[int, int], int]) -> Callable[[Number, Number], Value]:
  """
  Factory for binary arithmetic operations on Numbers

  Args:
    op: Python operator function (e.g., operator.add)

  Returns:
    Function combining two Numbers into a Number, or an overflow error

  Examples:
    lispy_add = binary_arithmetic_op(operator.add)
    lispy_add(Number(1), Number(2)) -> Number(3)
  """
  def arithmetic(x: Number, y: Number) -> Value:
    return make_number(op(x.num, y.num))

  return arithmetic
