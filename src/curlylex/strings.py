"""Escape sequences shared by both quoted-string forms."""

from __future__ import annotations

# Character following the backslash -> decoded character
ESCAPES: dict[str, str] = {
    "/": "/",
    "\\": "\\",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "'": "'",
    '"': '"',
}

# Characters that quote_value must escape; "/" and the other quote never need it
_REVERSE = {
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def decode_escape(ch: str) -> str | None:
    """Return the character an escape ``\\ch`` stands for, or None if undefined."""
    return ESCAPES.get(ch)


def quote_value(text: str, quote: str = '"') -> str:
    """Quote *text* so that lexing the result yields *text* back.

    Backslashes, the active quote, and control characters with a named
    escape are escaped; everything else (including the other quote kind)
    is copied as is.
    """
    if quote not in ("'", '"'):
        raise ValueError(f"invalid quote character {quote!r}")
    out = [quote]
    for ch in text:
        if ch == quote:
            out.append("\\" + ch)
        else:
            out.append(_REVERSE.get(ch, ch))
    out.append(quote)
    return "".join(out)
