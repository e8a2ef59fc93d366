"""Literal decoding for directive operands.

    decode('"on"')      -> 'on'
    decode("3")         -> 3
    decode("2.5")       -> 2.5
    decode("true")      -> True
    decode("null")      -> None
    decode("undefined") -> UNDEFINED
    decode("user.age")  -> PathRef(user.age)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from sprig.util.paths import UNDEFINED, PropertyPath, parse_path

_QUOTED = re.compile(r"""(["'`])(.*)\1\Z""", re.DOTALL)
_INTEGER = re.compile(r"[+-]?\d+\Z")
_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\Z")

_KEYWORDS: dict[str, Any] = {
    "true": True,
    "false": False,
    "null": None,
    "undefined": UNDEFINED,
}


@dataclass(frozen=True)
class PathRef:
    """An operand that names a property path, resolved at render time."""

    path: PropertyPath

    def __repr__(self) -> str:
        return f"PathRef({self.path})"


def decode(token: str) -> Any:
    """Decode an operand token into a literal value or a PathRef.

    Raises:
        PathSyntaxError: If the token is neither a literal nor a valid path.
    """
    token = token.strip()
    if token in _KEYWORDS:
        return _KEYWORDS[token]

    match = _QUOTED.match(token)
    if match:
        return match.group(2)

    number = to_number(token)
    if number is not None:
        return number

    return PathRef(parse_path(token))


def to_number(text: str) -> int | float | None:
    """Convert numeric-looking text to int or float, else return None."""
    text = text.strip()
    if _INTEGER.match(text):
        return int(text)
    if _NUMBER.match(text):
        return float(text)
    return None
