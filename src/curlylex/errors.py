"""Error types with formatted source context."""

from __future__ import annotations

from enum import Enum, auto

from curlylex.tokens import Position


class ErrorKind(Enum):
    UNEXPECTED_CHARACTER = auto()
    UNTERMINATED_STRING = auto()
    UNTERMINATED_COMMENT = auto()


class LexError(Exception):
    """Raised on the first lexing error, with position and source context."""

    kind: ErrorKind

    def __init__(
        self, message: str, position: Position, source: str, filename: str = "input.conf"
    ) -> None:
        self.message = message
        self.position = position
        self.source = source
        self.filename = filename
        super().__init__(self.format())

    def format(self, filename: str | None = None) -> str:
        if filename is None:
            filename = self.filename
        lines = self.source.splitlines(keepends=True)
        line_idx = self.position.line - 1
        col = self.position.column

        # Build the source line (strip trailing newline for display)
        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # At least one caret, even when pointing past the end of the line
        underline_len = max(1, min(2, len(source_line) - col + 1))

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class UnexpectedCharacterError(LexError):
    """A character that cannot start or continue any token."""

    kind = ErrorKind.UNEXPECTED_CHARACTER

    def __init__(
        self,
        char: str,
        position: Position,
        source: str,
        context: str = "",
        filename: str = "input.conf",
    ) -> None:
        self.char = char
        shown = char if char.isprintable() else repr(char)[1:-1]
        message = f"unexpected character '{shown}'"
        if context:
            message += f" {context}"
        super().__init__(message, position, source, filename)


class UnterminatedStringError(LexError):
    """End of input reached inside a quoted string."""

    kind = ErrorKind.UNTERMINATED_STRING

    def __init__(
        self, quote: str, position: Position, source: str, filename: str = "input.conf"
    ) -> None:
        self.quote = quote
        super().__init__(
            f"unterminated string (expected closing {quote!r})", position, source, filename
        )


class UnterminatedCommentError(LexError):
    """End of input reached inside a block comment."""

    kind = ErrorKind.UNTERMINATED_COMMENT

    def __init__(self, position: Position, source: str, filename: str = "input.conf") -> None:
        super().__init__("unterminated comment (expected '*/')", position, source, filename)
