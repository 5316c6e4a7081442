"""
Lispy Parser
Combinator grammar producing tagged parse trees (CST) with source spans
"""

from typing import Any, Dict, List, Optional
from dataclasses import asdict, dataclass, field

# Import pyparsing with error handling
try:
    from pyparsing import (
        Forward, Literal, ParseException, ParserElement, Regex, StringEnd,
        StringStart, ZeroOrMore, col, lineno, one_of
    )
    # Enable packrat parsing for performance
    ParserElement.enable_packrat()
except ImportError:
    raise ImportError("pyparsing library not found. Install with: pip install pyparsing")

from error_handling import LispyParseError
from utilities import BUILTIN_NAMES


# Node tags, laid out the way the reader expects them
ROOT_TAG = ">"
NUMBER_TAG = "expr|number|regex"
SYMBOL_TAG = "expr|symbol|string"
SEXPR_TAG = "expr|sexpr|>"
QEXPR_TAG = "expr|qexpr|>"
CHAR_TAG = "char"
REGEX_TAG = "regex"


@dataclass(frozen=True)
class SourceSpan:
    """Source location information for preserving CST"""
    filename: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int
    text: str = ""

    def __str__(self) -> str:
        if self.start_line == self.end_line:
            return f"{self.filename}:{self.start_line}:{self.start_col}-{self.end_col}"
        return f"{self.filename}:{self.start_line}:{self.start_col}-{self.end_line}:{self.end_col}"


@dataclass(frozen=True)
class CSTNode:
    """Concrete Syntax Tree node: tag, literal text and ordered children"""
    type: str
    value: str
    children: List['CSTNode'] = field(default_factory=list)
    span: Optional[SourceSpan] = None

    def __str__(self) -> str:
        if self.children:
            children_str = ", ".join(str(child) for child in self.children)
            return f"{self.type}({self.value!r}, [{children_str}])"
        return f"{self.type}({self.value!r})"


class LispyGrammar:
    """Lispy grammar using pyparsing"""

    def __init__(self, debug: bool = False):
        self.debug = debug
        self.filename = "<input>"
        self._setup_grammar()

    def _span(self, s: str, loc: int, text: str) -> SourceSpan:
        line_num = lineno(loc, s)
        col_num = col(loc, s)
        return SourceSpan(self.filename, line_num, col_num, line_num, col_num + len(text), text)

    def _leaf(self, node_type: str):
        """Parse action building a childless node from the matched text"""
        def make_leaf(s, loc, tokens):
            return CSTNode(node_type, tokens[0], [], self._span(s, loc, tokens[0]))
        return make_leaf

    def _group(self, node_type: str):
        """Parse action building a node around delimiter and expression children"""
        def make_group(s, loc, tokens):
            children = list(tokens)
            start = self._span(s, loc, "")
            end = children[-1].span
            span = SourceSpan(self.filename, start.start_line, start.start_col,
                              end.end_line, end.end_col, "")
            return CSTNode(node_type, "", children, span)
        return make_group

    def _make_root(self, s, loc, tokens):
        # The anchors /^/ and /$/ show up as empty regex matches around the program
        start = CSTNode(REGEX_TAG, "", [], self._span(s, 0, ""))
        end = CSTNode(REGEX_TAG, "", [], self._span(s, len(s), ""))
        return CSTNode(ROOT_TAG, "", [start] + list(tokens) + [end],
                       SourceSpan(self.filename, 1, 1, end.span.end_line, end.span.end_col, s))

    def _setup_grammar(self):
        """Setup the complete Lispy grammar"""
        expression = Forward()

        number = Regex(r"-?[0-9]+").set_parse_action(self._leaf(NUMBER_TAG))
        symbol = one_of(BUILTIN_NAMES).set_parse_action(self._leaf(SYMBOL_TAG))

        lparen = Literal("(").set_parse_action(self._leaf(CHAR_TAG))
        rparen = Literal(")").set_parse_action(self._leaf(CHAR_TAG))
        lbrace = Literal("{").set_parse_action(self._leaf(CHAR_TAG))
        rbrace = Literal("}").set_parse_action(self._leaf(CHAR_TAG))

        sexpr = (lparen + ZeroOrMore(expression) + rparen).set_parse_action(self._group(SEXPR_TAG))
        qexpr = (lbrace + ZeroOrMore(expression) + rbrace).set_parse_action(self._group(QEXPR_TAG))

        # Number before symbol so that "-5" is a literal and "- 5" a negation
        expression <<= number | symbol | sexpr | qexpr

        program = (StringStart() + ZeroOrMore(expression) + StringEnd()).set_parse_action(self._make_root)

        self.program = program
        self.expression = expression
        self.number = number
        self.symbol = symbol
        self.sexpr = sexpr
        self.qexpr = qexpr

    def parse_program(self, text: str, filename: str = "<input>") -> CSTNode:
        """Parse one line of Lispy into a root node"""
        self.filename = filename
        try:
            result = self.program.parse_string(text, parse_all=True)
            return result[0]
        except ParseException as e:
            raise LispyParseError.from_parse_exception(e, text, filename) from e


class LispyParser:
    """Main Lispy parser"""

    def __init__(self, debug: bool = False):
        self.debug = debug
        self.grammar = LispyGrammar(debug)

    def parse_file(self, filepath: str) -> List[CSTNode]:
        """Parse a Lispy source file, one program per non-blank line"""
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise LispyParseError(f"File not found: {filepath}")
        except UnicodeDecodeError as e:
            raise LispyParseError(f"Cannot decode file {filepath}: {e}")
        return [self.parse_string(line, filepath)
                for line in content.splitlines() if line.strip()]

    def parse_string(self, text: str, filename: str = "<input>") -> CSTNode:
        """Parse Lispy source code from string"""
        cst = self.grammar.parse_program(text, filename)
        if self.debug:
            print(f"Parsed: {cst}")
        return cst


# Factory functions for creating parsers
def create_parser(debug: bool = False) -> LispyParser:
    """Create a Lispy parser"""
    return LispyParser(debug=debug)


def create_debug_parser() -> LispyParser:
    """Create a Lispy parser with debug enabled"""
    return LispyParser(debug=True)


def pretty_print_cst(cst: CSTNode, indent: int = 0) -> str:
    """Pretty print a CST node for debugging"""
    result = "  " * indent + f"{cst.type}"
    if cst.value:
        result += f" {cst.value!r}"
    result += "\n"

    for child in cst.children:
        result += pretty_print_cst(child, indent + 1)

    return result


def find_nodes_by_type(cst: CSTNode, node_type: str) -> List[CSTNode]:
    """
    Collect nodes in document order whose tag is node_type or contains it
    as a `|`-separated part, so "number" finds "expr|number|regex"
    """
    result = []

    def search(node: CSTNode):
        if node.type == node_type or node_type in node.type.split("|"):
            result.append(node)
        for child in node.children:
            search(child)

    search(cst)
    return result


def cst_to_dict(cst: CSTNode) -> Dict[str, Any]:
    """Plain-data form of a parse tree, e.g. for JSON dumps"""
    return {
        "type": cst.type,
        "value": cst.value,
        "span": asdict(cst.span) if cst.span else None,
        "children": [cst_to_dict(child) for child in cst.children],
    }
