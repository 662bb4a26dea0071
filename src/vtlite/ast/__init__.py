"""Template token stream: spec and tokenizer."""

from vtlite.ast.spec import Else, ElseIf, End, If, Set, Text, Token
from vtlite.ast.tokenizer import tokenize

__all__ = ["Text", "Set", "If", "ElseIf", "Else", "End", "Token", "tokenize"]
