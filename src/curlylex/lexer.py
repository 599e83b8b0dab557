"""Configuration lexer: converts source text into a flat token stream.

The language has no statement terminator: a newline ends a statement only
when it follows a token that can close a leaf statement (an identifier or a
quoted string). The lexer tracks this with a single "leaf context" flag:

    identifier, string opened      -> open
    '{', '}', block comment opened -> closed
    newline while open             -> closed, NEWLINE emitted
    newline while closed           -> dropped
    line comment, end of input     -> unchanged
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from curlylex.errors import (
    LexError,
    UnexpectedCharacterError,
    UnterminatedCommentError,
    UnterminatedStringError,
)
from curlylex.strings import decode_escape
from curlylex.tokens import QUOTES, Position, Span, Token, TokenType, is_ident_char


class Lexer:
    """Pull-based tokenizer: each next_token() call returns exactly one Token."""

    def __init__(
        self,
        source: str,
        filename: str = "input.conf",
        *,
        keep_comments: bool = True,
    ) -> None:
        self._source = source
        self._filename = filename
        self._keep_comments = keep_comments
        self._pos = 0
        self._line = 1
        self._col = 1
        self._leaf_context = False

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def leaf_context(self) -> bool:
        """True while the last token could end a leaf statement."""
        return self._leaf_context

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including EOF."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == TokenType.EOF:
                return

    def tokenize(self) -> list[Token]:
        """Tokenize the remaining source and return the token list, EOF included."""
        return list(self)

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _advance_to(self, end: int) -> str:
        """Consume source up to (not including) *end* and return the slice."""
        chunk = self._source[self._pos : end]
        newlines = chunk.count("\n")
        if newlines:
            self._line += newlines
            self._col = len(chunk) - chunk.rfind("\n")
        else:
            self._col += len(chunk)
        self._pos = end
        return chunk

    def _make(self, tt: TokenType, value: str, start: Position, quote: str = "") -> Token:
        end = self._current_pos()
        raw = self._source[start.offset : end.offset]
        return Token(tt, value, raw, Span(start, end), quote)

    # ------------------------------------------------------------------
    # Main dispatcher
    # ------------------------------------------------------------------

    def next_token(self) -> Token:
        """Return the next token, raising LexError on the first failure.

        Once EOF has been returned, every further call returns EOF again.
        """
        while True:
            if self._at_end():
                return self._make(TokenType.EOF, "", self._current_pos())

            ch = self._peek()

            if ch in " \t\r":
                self._advance()
                continue

            if ch == "\n":
                start = self._current_pos()
                self._advance()
                if self._leaf_context:
                    self._leaf_context = False
                    return self._make(TokenType.NEWLINE, "\n", start)
                continue

            if ch in QUOTES:
                # Set before scanning so a failed scan still counts as leaf context
                self._leaf_context = True
                return self._scan_string(ch)

            if ch == "/" and self._peek(1) == "*":
                self._leaf_context = False
                tok = self._scan_comment()
                if self._keep_comments:
                    return tok
                continue

            if ch == "{":
                start = self._current_pos()
                self._advance()
                self._leaf_context = False
                return self._make(TokenType.LBRACE, "{", start)

            if ch == "}":
                start = self._current_pos()
                self._advance()
                self._leaf_context = False
                return self._make(TokenType.RBRACE, "}", start)

            if ch == "/" and self._peek(1) == "/":
                # Leaf context is left alone: "key value // note\n" still ends the statement
                self._skip_line_comment()
                continue

            if is_ident_char(ch):
                self._leaf_context = True
                return self._scan_identifier()

            raise UnexpectedCharacterError(
                ch, self._current_pos(), self._source, filename=self._filename
            )

    def _scan_identifier(self) -> Token:
        start = self._current_pos()
        while not self._at_end() and is_ident_char(self._peek()):
            self._advance()
        text = self._source[start.offset : self._pos]
        return self._make(TokenType.IDENTIFIER, text, start)

    def _skip_line_comment(self) -> None:
        end = self._source.find("\n", self._pos)
        if end == -1:
            end = len(self._source)
        self._advance_to(end)

    # ------------------------------------------------------------------
    # Quoted strings
    # ------------------------------------------------------------------

    def _scan_string(self, quote: str) -> Token:
        """Scan a string opened by *quote* and return its decoded STRING token.

        Unterminated strings are reported at the end of input, where the
        failure is discovered, not at the opening quote.
        """
        start = self._current_pos()
        self._advance()  # opening quote
        parts: list[str] = []

        while True:
            if self._at_end():
                raise UnterminatedStringError(
                    quote, self._current_pos(), self._source, self._filename
                )

            ch = self._peek()

            if ch == quote:
                self._advance()
                return self._make(TokenType.STRING, "".join(parts), start, quote)

            if ch == "\\":
                esc_start = self._current_pos()
                self._advance()
                if self._at_end():
                    raise UnterminatedStringError(
                        quote, self._current_pos(), self._source, self._filename
                    )
                decoded = decode_escape(self._peek())
                if decoded is None:
                    raise UnexpectedCharacterError(
                        self._peek(),
                        esc_start,
                        self._source,
                        "in escape sequence",
                        self._filename,
                    )
                self._advance()
                parts.append(decoded)
                continue

            # Copy the run up to the next quote or backslash in one step
            parts.append(self._advance_to(self._find_string_stop(quote)))

    def _find_string_stop(self, quote: str) -> int:
        stops = [
            i
            for i in (self._source.find(quote, self._pos), self._source.find("\\", self._pos))
            if i != -1
        ]
        return min(stops) if stops else len(self._source)

    # ------------------------------------------------------------------
    # Block comments
    # ------------------------------------------------------------------

    def _scan_comment(self) -> Token:
        """Scan /* ... */ (no nesting) and return a COMMENT token with the raw body."""
        start = self._current_pos()
        self._advance()
        self._advance()

        end = self._source.find("*/", self._pos)
        if end == -1:
            self._advance_to(len(self._source))
            raise UnterminatedCommentError(self._current_pos(), self._source, self._filename)

        body = self._advance_to(end)
        self._advance()
        self._advance()
        return self._make(TokenType.COMMENT, body, start)


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Outcome of scan(): the tokens produced and the error that stopped it, if any."""

    tokens: list[Token] = field(default_factory=list)
    error: LexError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def tokenize(
    source: str, filename: str = "input.conf", *, keep_comments: bool = True
) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source, filename, keep_comments=keep_comments).tokenize()


def scan(
    source: str, filename: str = "input.conf", *, keep_comments: bool = True
) -> ScanResult:
    """Tokenize without raising; a failure is returned in ScanResult.error.

    Tokens produced before the failure are kept. Lexing stops at the first
    error.
    """
    tokens: list[Token] = []
    lexer = Lexer(source, filename, keep_comments=keep_comments)
    try:
        for tok in lexer:
            tokens.append(tok)
    except LexError as exc:
        return ScanResult(tokens, exc)
    return ScanResult(tokens)
