"""
Lispy Reader
Structural transform from parse tree (CST) to runtime values
"""

from typing import Any

from values import (
  ErrorKind,
  Value,
  append,
  in_int64_range,
  make_error,
  make_number,
  make_qexpr,
  make_sexpr,
  make_symbol,
)


DELIMITERS = ("(", ")", "{", "}")


class LispyReadError(Exception):
  """Raised when a parse tree node has no value counterpart"""
  pass


def read_number(node: Any) -> Value:
  """Read a base-10 integer literal; out-of-range literals become errors"""
  try:
    n = int(node.value, 10)
  except ValueError:
    return make_error(ErrorKind.INVALID_NUMBER)
  if not in_int64_range(n):
    return make_error(ErrorKind.INVALID_NUMBER)
  return make_number(n)


def is_skipped(node: Any) -> bool:
  """Delimiter tokens and raw regex matches carry no value"""
  return node.value in DELIMITERS or node.type == "regex"


def read(node: Any) -> Value:
  """
  Convert a parse tree node into a value.

  Accepts any node exposing `type` (tag string), `value` (literal text)
  and `children`, so trees from other parsers work as long as they use the
  same tags.
  """
  if "number" in node.type:
    return read_number(node)

  if "symbol" in node.type:
    return make_symbol(node.value)

  if node.type == ">" or "sexpr" in node.type:
    x = make_sexpr()
  elif "qexpr" in node.type:
    x = make_qexpr()
  else:
    raise LispyReadError(f"Cannot read parse tree node tagged {node.type!r}")

  for child in node.children:
    if is_skipped(child):
      continue
    append(x, read(child))

  return x
