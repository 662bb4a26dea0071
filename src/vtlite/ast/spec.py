"""Template token spec - the flat token stream produced by the tokenizer."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Text:
    """A literal span of template text, possibly containing $name references."""

    value: str
    offset: int = 0


@dataclass(frozen=True)
class Set:
    """`#set(...)` with the raw body between the outer parentheses."""

    content: str
    offset: int = 0


@dataclass(frozen=True)
class If:
    """`#if(...)` with the raw condition."""

    content: str
    offset: int = 0


@dataclass(frozen=True)
class ElseIf:
    """`#elseif(...)` with the raw condition."""

    content: str
    offset: int = 0


@dataclass(frozen=True)
class Else:
    offset: int = 0


@dataclass(frozen=True)
class End:
    offset: int = 0


Token = Union[Text, Set, If, ElseIf, Else, End]
