"""Tokenizer - scans template text into Text and directive tokens."""

import re
from typing import List, Tuple

from vtlite.ast.spec import Else, ElseIf, End, If, Set, Text, Token
from vtlite.errors import TokenizeError, describe_position

# Order matters: "elseif(" must win over the bare "else" keyword below.
PAREN_DIRECTIVE = re.compile(r"#(set|if|elseif)[ \t]*\(")
BARE_DIRECTIVES = (("#else", Else), ("#end", End))

_PAREN_TOKENS = {"set": Set, "if": If, "elseif": ElseIf}


def read_parenthesized(template: str, start: int) -> Tuple[str, int]:
    """Read a balanced (...) span starting at the `(` at index `start`.

    Returns:
        The content between the outer parentheses and the index just past
        the closing parenthesis.

    Raises:
        TokenizeError: If the closing parenthesis is never found.
    """
    depth = 0
    for i in range(start, len(template)):
        char = template[i]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return template[start + 1 : i], i + 1

    raise TokenizeError(
        f"Unterminated directive starting at index {start} "
        f"({describe_position(template, start)})",
        offset=start,
    )


def tokenize(template: str) -> List[Token]:
    """Split a template into an ordered list of tokens.

    Args:
        template: Raw template text.

    Returns:
        Tokens in source order. Empty text spans are omitted.
    """
    tokens: List[Token] = []
    cursor = 0
    length = len(template)

    def push_text(start: int, end: int) -> None:
        if end > start:
            tokens.append(Text(template[start:end], offset=start))

    while cursor < length:
        hash_index = template.find("#", cursor)
        if hash_index == -1:
            push_text(cursor, length)
            break

        push_text(cursor, hash_index)

        match = PAREN_DIRECTIVE.match(template, hash_index)
        if match:
            paren_index = match.end() - 1
            content, cursor = read_parenthesized(template, paren_index)
            token_cls = _PAREN_TOKENS[match.group(1)]
            tokens.append(token_cls(content, offset=hash_index))
            continue

        for keyword, token_cls in BARE_DIRECTIVES:
            if template.startswith(keyword, hash_index):
                tokens.append(token_cls(offset=hash_index))
                cursor = hash_index + len(keyword)
                break
        else:
            # A lone '#' is ordinary text
            tokens.append(Text("#", offset=hash_index))
            cursor = hash_index + 1

    return tokens
