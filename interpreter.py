"""
Lispy Interpreter
Recursive evaluation of S-expressions with errors carried as values
Builtins that need the evaluator (eval) live here, the rest in stdlib
"""

from typing import Any

from reader import read
from stdlib import ARITHMETIC_OPERATORS, LIST_FUNCTIONS, builtin_op
from utilities import type_mismatch_error, validate_arg_count
from values import (
  Container,
  Error,
  ErrorKind,
  QExpr,
  SExpr,
  Symbol,
  Value,
  make_error,
  make_sexpr,
  move_cells,
  pop,
  release,
  show,
  take,
)


# ============================================================================
# EVALUATION FUNCTIONS
# ============================================================================

def evaluate(value: Value, debug: bool = False) -> Value:
  """
  Evaluate a value and hand the result back to the caller.
  Only S-expressions reduce; every other variant evaluates to itself.
  """
  if debug:
    print(f"Evaluating: {show(value)}")

  if isinstance(value, SExpr):
    return eval_sexpr(value, debug)
  return value


def eval_sexpr(v: SExpr, debug: bool = False) -> Value:
  """Evaluate the children, then apply the leading symbol to the rest"""
  for i, child in enumerate(v.cells):
    v.cells[i] = evaluate(child, debug)

  for i, child in enumerate(v.cells):
    if isinstance(child, Error):
      return take(v, i)

  if not v.cells:
    return v

  if len(v.cells) == 1:
    return take(v, 0)

  f = pop(v, 0)
  if not isinstance(f, Symbol):
    release(f)
    release(v)
    return make_error(ErrorKind.NOT_A_SYMBOL_HEAD)

  result = apply_builtin(f.name, v, debug)
  release(f)
  return result


# ============================================================================
# BUILTIN DISPATCH
# ============================================================================

def builtin_eval(args: Container, debug: bool = False) -> Value:
  """
  Evaluate a Q-expression as if it were an S-expression.
  An S-expression value (one taken out of a Q-expression by head) is
  still quoted data and is evaluated as is.
  """
  error = validate_arg_count("eval", args, 1)
  if error is None and not isinstance(args.cells[0], (QExpr, SExpr)):
    error = type_mismatch_error("eval", "argument 1", "Q-Expression", args.cells[0])
  if error is not None:
    release(args)
    return error

  x = take(args, 0)
  if isinstance(x, QExpr):
    x = move_cells(x, make_sexpr())
  return evaluate(x, debug)


def apply_builtin(func_name: str, args: Container, debug: bool = False) -> Value:
  """Dispatch on the leading symbol; args is consumed on every path"""
  if debug:
    print(f"Applying builtin: {func_name} {show(args)}")

  if func_name == "eval":
    return builtin_eval(args, debug)
  elif func_name in LIST_FUNCTIONS:
    return LIST_FUNCTIONS[func_name](args)
  elif func_name in ARITHMETIC_OPERATORS:
    return builtin_op(args, func_name)

  release(args)
  return make_error(ErrorKind.UNKNOWN_FUNCTION)


# ============================================================================
# INTERPRETER
# ============================================================================

class LispyInterpreter:
  """Read, evaluate and render parse trees"""

  def __init__(self, debug: bool = False):
    self.debug = debug

  def eval_tree(self, cst: Any) -> Value:
    """Read a parse tree into a value and evaluate it"""
    return evaluate(read(cst), self.debug)

  def interpret(self, cst: Any) -> str:
    """Evaluate a parse tree and return the printed result"""
    result = self.eval_tree(cst)
    output = show(result)
    release(result)
    return output


def create_interpreter(debug: bool = False) -> LispyInterpreter:
  """Factory function returning an interpreter"""
  return LispyInterpreter(debug=debug)


def create_debug_interpreter() -> LispyInterpreter:
  """Factory function returning a debug interpreter"""
  return create_interpreter(debug=True)
