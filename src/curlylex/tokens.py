"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    # Structural
    LBRACE = auto()  # {
    RBRACE = auto()  # }

    # Leaf atoms
    IDENTIFIER = auto()  # maximal run of identifier characters
    STRING = auto()  # '...' or "...", value is the decoded contents

    # Emitted only when the newline terminates a leaf statement
    NEWLINE = auto()

    # /* ... */, value is the raw contents between the markers
    COMMENT = auto()

    EOF = auto()


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token with resolved value and original source text."""

    type: TokenType
    value: str
    raw: str
    span: Span
    quote: str = ""  # delimiter of a STRING token


WHITESPACE = frozenset(" \t\r\n")
QUOTES = frozenset("\"'")
BRACES = frozenset("{}")


def is_ident_char(ch: str) -> bool:
    """Return True if ch may appear in an identifier."""
    return not (ch in WHITESPACE or ch in BRACES or ch in QUOTES)
