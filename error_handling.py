"""
Parse error reporting for Lispy
Turns a pyparsing failure on one line of input into a LispyParseError
that knows where it happened and how to describe itself
"""

from typing import List, Optional
from pyparsing import ParseException
import re

from utilities import BUILTIN_NAMES


# ============================================================================
# ERROR DETAILS
# ============================================================================

def get_context_lines(source_text: str, line: int, column: int) -> str:
    """The offending line, numbered, with a caret under the failing column"""
    lines = source_text.split('\n')
    text = lines[line - 1] if line <= len(lines) else ""
    return f"{line:4d}: {text}\n{' ' * (column + 5)}^ Error here"


def extract_expected(exc: ParseException) -> List[str]:
    """What the grammar wanted at the failure point"""
    match = re.search(r"Expected\s+(.+?)(?:,\s+found|\s+\(|$)", str(exc))
    return [match.group(1)] if match else ["valid syntax"]


def extract_got(source_text: str, line: int, column: int) -> str:
    """A short quote of the input starting at the failure point"""
    lines = source_text.split('\n')
    if line > len(lines):
        return "unknown"
    found = lines[line - 1][column - 1:column + 10].strip()
    return f"'{found}'" if found else "end of line"


def generate_suggestions(source_text: str, got: str) -> List[str]:
    """Hints for the mistakes a Lispy line usually contains"""
    suggestions = []

    if source_text.count("(") != source_text.count(")"):
        suggestions.append("Parentheses are unbalanced - every '(' needs a matching ')'")

    if source_text.count("{") != source_text.count("}"):
        suggestions.append("Braces are unbalanced - every '{' needs a matching '}'")

    word = re.match(r"'([A-Za-z_]\w*)", got)
    if word and word.group(1) not in BUILTIN_NAMES:
        suggestions.append(f"Unknown symbol '{word.group(1)}' - known symbols are: {' '.join(BUILTIN_NAMES)}")

    if "[" in got or "]" in got:
        suggestions.append("Use {} for Q-expressions instead of []")

    return suggestions


# ============================================================================
# EXCEPTION CLASSES
# ============================================================================

class LispyParseError(Exception):
    """
    Parse error carrying location, expectations and suggestions

    Errors raised before any text is parsed (missing or undecodable files)
    have no line and print as their bare message.
    """
    def __init__(self, message: str, line: int = 0, column: int = 0,
                 expected: Optional[List[str]] = None, got: Optional[str] = None,
                 context: Optional[str] = None, suggestions: Optional[List[str]] = None,
                 filename: str = "<input>"):
        self.message = message
        self.line = line
        self.column = column
        self.expected = expected or []
        self.got = got
        self.context = context
        self.suggestions = suggestions or []
        self.filename = filename
        super().__init__(message)

    @classmethod
    def from_parse_exception(cls, exc: ParseException, source_text: str,
                             filename: str = "<input>") -> 'LispyParseError':
        """Describe a pyparsing failure against the text that was parsed"""
        got = extract_got(source_text, exc.lineno, exc.column)
        return cls(
            str(exc),
            line=exc.lineno,
            column=exc.column,
            expected=extract_expected(exc),
            got=got,
            context=get_context_lines(source_text, exc.lineno, exc.column),
            suggestions=generate_suggestions(source_text, got),
            filename=filename,
        )

    def format(self) -> str:
        """Multi-line report without the filename prefix"""
        parts = [f"Parse error at line {self.line}, column {self.column}:",
                 f"  {self.message}"]
        if self.expected:
            parts.append(f"  Expected: {', '.join(self.expected)}")
        if self.got:
            parts.append(f"  Got: {self.got}")
        if self.context:
            parts.append(f"  Context:\n{self.context}")
        if self.suggestions:
            parts.append("  Suggestions:")
            parts.extend(f"    - {suggestion}" for suggestion in self.suggestions)
        return "\n".join(parts)

    def __str__(self) -> str:
        if not self.line:
            return self.message
        return f"{self.filename}: {self.format()}"
