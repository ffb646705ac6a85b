"""Small string helpers shared across the package."""

from __future__ import annotations

_ASCII_LOWER = "abcdefghijklmnopqrstuvwxyz"
_ASCII_UPPER = _ASCII_LOWER.upper()
_TO_UPPER = str.maketrans(_ASCII_LOWER, _ASCII_UPPER)
_TO_LOWER = str.maketrans(_ASCII_UPPER, _ASCII_LOWER)


def to_upper_copy(text: str) -> str:
    """Return a copy of ``text`` with ASCII letters turned to upper case."""
    return text.translate(_TO_UPPER)


def to_lower_copy(text: str) -> str:
    """Return a copy of ``text`` with ASCII letters turned to lower case."""
    return text.translate(_TO_LOWER)


def string_split(text: str, sep: str = " ", collapse: bool = True) -> list[str]:
    """Split ``text`` on the single character ``sep``.

    A trailing separator does not produce a final empty token, and an empty
    string yields no tokens.  With ``collapse`` set, empty tokens are dropped.
    """
    if len(sep) != 1:
        raise ValueError("separator must be a single character")
    tokens = text.split(sep)
    if tokens and tokens[-1] == "":
        tokens.pop()
    if collapse:
        return [token for token in tokens if token]
    return tokens