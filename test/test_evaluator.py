"""
Evaluator tests for Lispy
Reduction of S-expressions, error short-circuit and dispatch
"""

import pytest
from interpreter import apply_builtin, create_debug_interpreter, evaluate
from values import (
  INT64_MAX,
  INT64_MIN,
  ErrorKind,
  Number,
  QExpr,
  SExpr,
  Symbol,
  make_error,
)


class TestSelfEvaluating:
  """Everything but S-expressions evaluates to itself"""

  @pytest.mark.parametrize("value", [
      Number(3),
      Symbol("+"),
      QExpr([Symbol("+"), Number(1)]),
      make_error(ErrorKind.UNKNOWN_FUNCTION),
  ])
  def test_returns_same_value(self, value):
    assert evaluate(value) is value


class TestSExpressions:
  """Test S-expression reduction"""

  def test_arithmetic(self, run):
    assert run("+ 1 2 3") == Number(6)
    assert run("* 2 (+ 1 2)") == Number(6)

  def test_unary_minus(self, run):
    assert run("- 5") == Number(-5)
    assert run("(- 5)") == Number(-5)

  def test_empty_sexpr(self, run, show_line):
    assert run("()") == SExpr()
    assert show_line("()") == "()"
    assert show_line("") == "()"

  def test_single_child_is_unwrapped(self, run):
    assert run("5") == Number(5)
    assert run("((((7))))") == Number(7)
    assert run("{1 2}") == QExpr([Number(1), Number(2)])

  def test_lone_symbol(self, show_line):
    assert show_line("+") == "+"
    assert show_line("(head)") == "head"

  def test_must_start_with_symbol(self, run):
    result = run("(1 2)")
    assert result.kind == ErrorKind.NOT_A_SYMBOL_HEAD
    assert result.message == "S-expression does not start with symbol!"

  def test_qexpr_head_is_not_a_symbol(self, run):
    assert run("{+} 1 2").kind == ErrorKind.NOT_A_SYMBOL_HEAD

  def test_unknown_function(self):
    v = SExpr([Symbol("foo"), Number(1), Number(2)])
    result = evaluate(v)
    assert result.kind == ErrorKind.UNKNOWN_FUNCTION
    assert result.message == "Unknown Function!"

  def test_nested_eval_of_head(self, run):
    assert run("eval (head {(+ 1 2) (+ 10 20)})") == Number(3)

  def test_input_is_consumed(self):
    v = SExpr([Symbol("+"), Number(1), SExpr([Symbol("*"), Number(2), Number(3)])])
    assert evaluate(v) == Number(7)
    assert v.cells == []


class TestErrorShortCircuit:
  """Errors dominate the expression that contains them"""

  def test_error_in_argument(self, run):
    assert run("+ 1 (/ 1 0)").kind == ErrorKind.DIVISION_BY_ZERO

  def test_first_error_wins(self, run):
    assert run("+ (/ 1 0) (+ 1 {})").kind == ErrorKind.DIVISION_BY_ZERO

  def test_error_in_deep_nesting(self, show_line):
    assert show_line("head (list (- (/ 4 0)))") == "Error: Division by zero!"

  def test_error_before_symbol_check(self):
    v = SExpr([Number(1), make_error(ErrorKind.INVALID_NUMBER)])
    assert evaluate(v).kind == ErrorKind.INVALID_NUMBER


class TestProperties:
  """Properties that hold for any input"""

  @pytest.mark.parametrize("n", [0, 1, -1, 42, -1000, INT64_MAX, INT64_MIN])
  def test_number_round_trip(self, run, n):
    assert run(str(n)) == Number(n)

  @pytest.mark.parametrize("code", ["+ 1 2", "* 2 (+ 1 2)", "head {4 5}", "- 9"])
  def test_eval_of_list_is_identity(self, run, code):
    assert run(f"eval (list {code})") == run(code)


class TestDispatch:
  """Direct calls into builtin dispatch"""

  def test_dispatch_consumes_args(self):
    args = SExpr([Number(1), Number(2)])
    assert apply_builtin("+", args) == Number(3)
    assert args.cells == []

  def test_unknown_function_releases_args(self):
    inner = QExpr([Number(1)])
    args = SExpr([inner])
    assert apply_builtin("foo", args).kind == ErrorKind.UNKNOWN_FUNCTION
    assert args.cells == []
    assert inner.cells == []


class TestDebugOutput:
  """Debug tracing"""

  def test_trace_lines(self, parser, capsys):
    interpreter = create_debug_interpreter()
    assert interpreter.interpret(parser.parse_string("+ 1 2")) == "3"
    out = capsys.readouterr().out
    assert "Evaluating: (+ 1 2)" in out
    assert "Applying builtin: + (1 2)" in out
