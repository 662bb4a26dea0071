"""Expression parser - recursive descent over a closed operator set.

Grammar, lowest precedence first:

    or             := and ( "||" and )*
    and            := equality ( "&&" equality )*
    equality       := relational ( ( "==" | "!=" ) relational )*
    relational     := additive ( ( "<" | "<=" | ">" | ">=" ) additive )*
    additive       := multiplicative ( ( "+" | "-" ) multiplicative )*
    multiplicative := unary ( ( "*" | "/" | "%" ) unary )*
    unary          := ( "-" | "!" ) unary | postfix
    postfix        := primary ( "." NAME | "(" args? ")" )*
    primary        := VAR | NAME | NUMBER | STRING | "(" or ")"
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import List, NoReturn, Optional

from vtlite.errors import EvaluationError
from vtlite.expr.node import (
    Binary,
    Call,
    Expr,
    Literal,
    Logical,
    Member,
    Name,
    Unary,
    Variable,
)

_TOKEN_RE = re.compile(
    r"""
      (?P<ws>\s+)
    | (?P<number>\d+(?:\.\d+)?)
    | (?P<string>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')
    | (?P<var>\$[A-Za-z_][A-Za-z0-9_]*)
    | (?P<name>[A-Za-z_][A-Za-z0-9_]*)
    | (?P<op>==|!=|<=|>=|&&|\|\||[-+*/%<>!(),.])
    """,
    re.VERBOSE | re.DOTALL,
)

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)

KEYWORDS = {"true": True, "false": False, "null": None}

EQUALITY_OPS = ("==", "!=")
RELATIONAL_OPS = ("<", "<=", ">", ">=")
ADDITIVE_OPS = ("+", "-")
MULTIPLICATIVE_OPS = ("*", "/", "%")


@dataclass(frozen=True)
class Lexeme:
    kind: str  # number, string, var, name, op, eof
    text: str
    pos: int


def _unescape(body: str) -> str:
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), body)


def lex(expression: str) -> List[Lexeme]:
    lexemes: List[Lexeme] = []
    pos = 0
    while pos < len(expression):
        match = _TOKEN_RE.match(expression, pos)
        if match is None:
            raise EvaluationError(
                f"Unexpected character {expression[pos]!r} at position {pos}",
                expression,
            )
        kind = match.lastgroup or ""
        if kind != "ws":
            lexemes.append(Lexeme(kind, match.group(), pos))
        pos = match.end()
    lexemes.append(Lexeme("eof", "", pos))
    return lexemes


class ExpressionParser:
    """Parses one expression string into an `Expr` tree."""

    def __init__(self, expression: str):
        self.expression = expression
        self.lexemes = lex(expression)
        self.index = 0

    def parse(self) -> Expr:
        if self._peek().kind == "eof":
            raise EvaluationError("Empty expression", self.expression)
        node = self._or()
        tail = self._peek()
        if tail.kind != "eof":
            self._fail(f"Unexpected {tail.text!r} at position {tail.pos}")
        return node

    # -- helpers ---------------------------------------------------------

    def _peek(self) -> Lexeme:
        return self.lexemes[self.index]

    def _advance(self) -> Lexeme:
        lexeme = self.lexemes[self.index]
        if lexeme.kind != "eof":
            self.index += 1
        return lexeme

    def _accept(self, *ops: str) -> Optional[str]:
        lexeme = self._peek()
        if lexeme.kind == "op" and lexeme.text in ops:
            self.index += 1
            return lexeme.text
        return None

    def _expect(self, op: str) -> None:
        if self._accept(op) is None:
            lexeme = self._peek()
            found = "end of expression" if lexeme.kind == "eof" else repr(lexeme.text)
            self._fail(f"Expected {op!r} but found {found} at position {lexeme.pos}")

    def _fail(self, message: str) -> NoReturn:
        raise EvaluationError(message, self.expression)

    # -- precedence levels ---------------------------------------------

    def _or(self) -> Expr:
        node = self._and()
        while self._accept("||"):
            node = Logical("||", node, self._and())
        return node

    def _and(self) -> Expr:
        node = self._equality()
        while self._accept("&&"):
            node = Logical("&&", node, self._equality())
        return node

    def _equality(self) -> Expr:
        return self._binary_level(EQUALITY_OPS, self._relational)

    def _relational(self) -> Expr:
        return self._binary_level(RELATIONAL_OPS, self._additive)

    def _additive(self) -> Expr:
        return self._binary_level(ADDITIVE_OPS, self._multiplicative)

    def _multiplicative(self) -> Expr:
        return self._binary_level(MULTIPLICATIVE_OPS, self._unary)

    def _binary_level(self, ops, operand) -> Expr:
        node = operand()
        op = self._accept(*ops)
        while op:
            node = Binary(op, node, operand())
            op = self._accept(*ops)
        return node

    def _unary(self) -> Expr:
        op = self._accept("-", "!")
        if op:
            return Unary(op, self._unary())
        return self._postfix()

    def _postfix(self) -> Expr:
        node = self._primary()
        while True:
            if self._accept("."):
                lexeme = self._advance()
                if lexeme.kind != "name":
                    self._fail(f"Expected a member name at position {lexeme.pos}")
                node = Member(node, lexeme.text)
            elif self._accept("("):
                args: List[Expr] = []
                if not self._accept(")"):
                    args.append(self._or())
                    while self._accept(","):
                        args.append(self._or())
                    self._expect(")")
                node = Call(node, tuple(args))
            else:
                return node

    def _primary(self) -> Expr:
        lexeme = self._advance()
        if lexeme.kind == "number":
            text = lexeme.text
            return Literal(float(text) if "." in text else int(text))
        if lexeme.kind == "string":
            return Literal(_unescape(lexeme.text[1:-1]))
        if lexeme.kind == "var":
            return Variable(lexeme.text[1:])
        if lexeme.kind == "name":
            if lexeme.text in KEYWORDS:
                return Literal(KEYWORDS[lexeme.text])
            return Name(lexeme.text)
        if lexeme.kind == "op" and lexeme.text == "(":
            node = self._or()
            self._expect(")")
            return node
        if lexeme.kind == "eof":
            self._fail("Unexpected end of expression")
        self._fail(f"Unexpected {lexeme.text!r} at position {lexeme.pos}")


@lru_cache(maxsize=512)
def parse_expression(expression: str) -> Expr:
    """Parse an expression string. Results are cached per string."""
    return ExpressionParser(expression).parse()
