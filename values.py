"""
Lispy Value Model
Tagged-union values (Number, Error, Symbol, SExpr, QExpr) and their printer
Containers own their children outright; ownership moves with append/pop/take
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union
import sys


INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


# ============================================================================
# ERROR KINDS
# ============================================================================

class ErrorKind(Enum):
  """Category of a runtime error value"""
  INVALID_NUMBER = "InvalidNumber"
  NOT_A_SYMBOL_HEAD = "NotASymbolHead"
  UNKNOWN_FUNCTION = "UnknownFunction"
  WRONG_ARG_COUNT = "WrongArgCount"
  WRONG_ARG_TYPE = "WrongArgType"
  EMPTY_LIST = "EmptyList"
  DIVISION_BY_ZERO = "DivisionByZero"
  INTEGER_OVERFLOW = "IntegerOverflow"


# Fixed messages; the argument-checking kinds build theirs in utilities.py
ERROR_MESSAGES = {
    ErrorKind.INVALID_NUMBER: "invalid number",
    ErrorKind.NOT_A_SYMBOL_HEAD: "S-expression does not start with symbol!",
    ErrorKind.UNKNOWN_FUNCTION: "Unknown Function!",
    ErrorKind.DIVISION_BY_ZERO: "Division by zero!",
    ErrorKind.INTEGER_OVERFLOW: "Integer overflow!",
}


# ============================================================================
# VALUE VARIANTS
# ============================================================================

@dataclass
class Number:
  num: int


@dataclass
class Error:
  message: str
  kind: ErrorKind


@dataclass
class Symbol:
  name: str


@dataclass
class SExpr:
  cells: List['Value'] = field(default_factory=list)


@dataclass
class QExpr:
  cells: List['Value'] = field(default_factory=list)


Value = Union[Number, Error, Symbol, SExpr, QExpr]
Container = Union[SExpr, QExpr]


# ============================================================================
# CONSTRUCTORS
# ============================================================================

def in_int64_range(n: int) -> bool:
  return INT64_MIN <= n <= INT64_MAX


def make_number(n: int) -> Value:
  """Create a Number, or an overflow error when n does not fit in int64"""
  if not in_int64_range(n):
    return make_error(ErrorKind.INTEGER_OVERFLOW)
  return Number(n)


def make_error(kind: ErrorKind, message: Optional[str] = None) -> Error:
  """Create an Error; the message defaults to the fixed text for its kind"""
  if message is None:
    message = ERROR_MESSAGES[kind]
  return Error(message, kind)


def make_symbol(name: str) -> Symbol:
  return Symbol(name)


def make_sexpr() -> SExpr:
  return SExpr()


def make_qexpr() -> QExpr:
  return QExpr()


def is_container(value: Value) -> bool:
  return isinstance(value, (SExpr, QExpr))


def type_name(value: Value) -> str:
  """Human readable variant name for error messages"""
  if isinstance(value, Number):
    return "Number"
  elif isinstance(value, Error):
    return "Error"
  elif isinstance(value, Symbol):
    return "Symbol"
  elif isinstance(value, SExpr):
    return "S-Expression"
  elif isinstance(value, QExpr):
    return "Q-Expression"
  return "Unknown"


# ============================================================================
# OWNERSHIP TRANSFER
# ============================================================================

def append(container: Container, value: Value) -> Container:
  """Move value to the end of container and return the container"""
  container.cells.append(value)
  return container


def pop(container: Container, i: int) -> Value:
  """Remove child i from container and hand it to the caller"""
  return container.cells.pop(i)


def take(container: Container, i: int) -> Value:
  """Pop child i and release everything else in container"""
  x = pop(container, i)
  release(container)
  return x


def release(value: Value) -> None:
  """
  Recursively release a value's children, leaving containers empty

  Releasing an already released value is a no-op.
  """
  if is_container(value):
    for child in value.cells:
      release(child)
    value.cells.clear()


def move_cells(source: Container, target: Container) -> Container:
  """Move every child of source, in order, onto the end of target"""
  target.cells.extend(source.cells)
  source.cells.clear()
  return target


# ============================================================================
# PRINTING
# ============================================================================

def show_expr(value: Container, open_char: str, close_char: str) -> str:
  return open_char + " ".join(show(child) for child in value.cells) + close_char


def show(value: Value) -> str:
  """Render a value the way the REPL prints it"""
  if isinstance(value, Number):
    return str(value.num)
  elif isinstance(value, Error):
    return f"Error: {value.message}"
  elif isinstance(value, Symbol):
    return value.name
  elif isinstance(value, SExpr):
    return show_expr(value, "(", ")")
  elif isinstance(value, QExpr):
    return show_expr(value, "{", "}")
  raise TypeError(f"Cannot show {value!r}")


def print_value(value: Value, out=None) -> None:
  """Print a value without a trailing newline"""
  (out or sys.stdout).write(show(value))


def println_value(value: Value, out=None) -> None:
  """Print a value followed by a newline"""
  out = out or sys.stdout
  print_value(value, out)
  out.write("\n")
