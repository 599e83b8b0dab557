"""Token dumps for the CLI: aligned text lines or JSON-ready dicts."""

from __future__ import annotations

import sys
from typing import Any, TextIO

from curlylex.strings import quote_value
from curlylex.tokens import Span, Token, TokenType


def dump_tokens(tokens: list[Token], *, file: TextIO = sys.stdout) -> None:
    """Print one human-readable line per token to *file*."""
    for tok in tokens:
        file.write(f"{_span_text(tok.span):<12} {tok.type.name:<10} {_display_value(tok)}".rstrip())
        file.write("\n")


def tokens_to_json(tokens: list[Token]) -> list[dict[str, Any]]:
    """Convert tokens to plain dicts suitable for json.dumps."""
    result: list[dict[str, Any]] = []
    for tok in tokens:
        item: dict[str, Any] = {
            "type": tok.type.name,
            "value": tok.value,
            "start": [tok.span.start.line, tok.span.start.column],
            "end": [tok.span.end.line, tok.span.end.column],
        }
        if tok.quote:
            item["quote"] = tok.quote
        result.append(item)
    return result


def _span_text(span: Span) -> str:
    return f"{span.start.line}:{span.start.column}-{span.end.line}:{span.end.column}"


def _display_value(tok: Token) -> str:
    if tok.type == TokenType.STRING:
        return quote_value(tok.value, tok.quote)
    if tok.type in (TokenType.IDENTIFIER, TokenType.COMMENT):
        return repr(tok.value)
    return ""
