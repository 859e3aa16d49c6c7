"""A minimal tokenizer for a tiny subset of ECMAScript."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

_INT64_MAX = 2**63 - 1


class JSTokenType(Enum):
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    NEWLINE = "\n"
    SPACE = " "
    INTEGER = "Integer"


_SINGLE_CHAR_TOKENS = {
    t.value: t for t in JSTokenType if t is not JSTokenType.INTEGER
}


@dataclass(frozen=True)
class JSToken:
    kind: JSTokenType
    value: int = 0


class JSTokenizeError(ValueError):
    """Raised when the input holds a character that starts no token."""

    def __init__(self, char: str) -> None:
        super().__init__(f"invalid JS token: {ord(char)}")
        self.char = char


def format_token(token: JSToken) -> str:
    if token.kind is JSTokenType.NEWLINE:
        return "(Newline)"
    if token.kind is JSTokenType.INTEGER:
        return f"(Integer: {token.value})"
    return f"({token.kind.value})"


def dump_tokens(tokens: list[JSToken], out: TextIO | None = None) -> None:
    out = out or sys.stdout
    out.write("Token dump:\n")
    out.write(", ".join(format_token(t) for t in tokens))
    out.write("\n")


def tokenise_js(content: str) -> list[JSToken]:
    """Split ``content`` into tokens; raises JSTokenizeError on a bad character."""
    tokens: list[JSToken] = []
    pos = 0
    while pos < len(content):
        char = content[pos]
        single = _SINGLE_CHAR_TOKENS.get(char)
        if single is not None:
            tokens.append(JSToken(single))
            pos += 1
        elif char.isascii() and char.isdigit():
            start = pos
            while pos < len(content) and content[pos].isascii() and content[pos].isdigit():
                pos += 1
            number = min(int(content[start:pos]), _INT64_MAX)
            tokens.append(JSToken(JSTokenType.INTEGER, number))
        else:
            raise JSTokenizeError(char)
    return tokens


def run_js(content: str, out: TextIO | None = None) -> list[JSToken]:
    """Tokenise ``content`` and dump the tokens to ``out``."""
    out = out or sys.stdout
    tokens = tokenise_js(content)
    out.write("Tokenising complete.\n")
    dump_tokens(tokens, out)
    return tokens