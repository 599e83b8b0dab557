"""Lexer for brace-delimited network-device configuration files."""

from __future__ import annotations

from curlylex.errors import (
    ErrorKind,
    LexError,
    UnexpectedCharacterError,
    UnterminatedCommentError,
    UnterminatedStringError,
)
from curlylex.lexer import Lexer, ScanResult, scan, tokenize
from curlylex.tokens import Position, Span, Token, TokenType

__version__ = "0.1.0"

__all__ = [
    "ErrorKind",
    "LexError",
    "Lexer",
    "Position",
    "ScanResult",
    "Span",
    "Token",
    "TokenType",
    "UnexpectedCharacterError",
    "UnterminatedCommentError",
    "UnterminatedStringError",
    "scan",
    "tokenize",
]
