"""
Tests for parse error reporting
"""

import pytest
from pyparsing import ParseException
from error_handling import (
  LispyParseError,
  extract_got,
  generate_suggestions,
  get_context_lines,
)


class TestPureFunctions:
  """Test the error helpers in isolation"""

  def test_context_lines_marks_column(self):
    context = get_context_lines("(+ 1 2", 1, 3)
    lines = context.split("\n")
    assert lines[0] == "   1: (+ 1 2"
    assert lines[1] == "        ^ Error here"

  def test_extract_got(self):
    assert extract_got("+ 1 foo", 1, 5) == "'foo'"
    assert extract_got("(+ 1", 1, 5) == "end of line"
    assert extract_got("x", 3, 1) == "unknown"

  def test_suggestions(self):
    assert generate_suggestions("(+ 1", "end of line") == [
        "Parentheses are unbalanced - every '(' needs a matching ')'"
    ]
    assert "Use {} for Q-expressions instead of []" in generate_suggestions("head [1]", "'[1]'")
    assert generate_suggestions("+ 1 eval", "'eval'") == []


class TestLispyParseError:
  """Test building and rendering parse errors"""

  def test_from_parse_exception(self, parser):
    with pytest.raises(ParseException) as excinfo:
      parser.grammar.program.parse_string("+ 1 }", parse_all=True)

    error = LispyParseError.from_parse_exception(excinfo.value, "+ 1 }", "<stdin>")
    assert error.line == 1
    assert error.column == 5
    assert error.got == "'}'"
    assert error.expected
    assert error.context == "   1: + 1 }\n          ^ Error here"
    assert error.filename == "<stdin>"
    assert str(error).startswith("<stdin>: Parse error at line 1, column 5:")

  def test_format_from_attributes(self):
    error = LispyParseError("Expected end of text", line=1, column=1,
                            expected=["end of text"], got="'foo'",
                            suggestions=["Unknown symbol 'foo'"])
    lines = error.format().splitlines()
    assert lines == [
        "Parse error at line 1, column 1:",
        "  Expected end of text",
        "  Expected: end of text",
        "  Got: 'foo'",
        "  Suggestions:",
        "    - Unknown symbol 'foo'",
    ]
    assert str(error) == "<input>: " + error.format()

  def test_parser_raises_enhanced_error(self, parser):
    with pytest.raises(LispyParseError) as excinfo:
      parser.parse_string("(+ 1 2")
    assert excinfo.value.expected
    assert isinstance(excinfo.value.__cause__, ParseException)

  def test_plain_message_without_location(self):
    assert str(LispyParseError("File not found: x.lspy")) == "File not found: x.lspy"
