"""Property paths - parse `a.b[0]` style paths and resolve them against data."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Union

# Bare segment: everything up to the next separator
_NAME = re.compile(r"[^.\[\]\s]+")
# Bracketed segment: [0], [-1], ["key"], ['key with \' quote']
_INDEX = re.compile(r"""\[\s*(?:(-?[0-9]+)|(["'])((?:(?!\2)[^\\]|\\.)*)\2)\s*\]""")
_UNESCAPE = re.compile(r"\\(.)")
# ASCII digits only; int() rejects digits like "²"
_DIGITS = re.compile(r"\d+\Z", re.ASCII)


class PathSyntaxError(ValueError):
    """Raised when a property path is malformed."""

    def __init__(self, text: str, reason: str):
        self.text = text
        super().__init__(f"Invalid property path '{text}': {reason}")


class _Undefined:
    """Marker for a path that did not resolve. Falsy, and distinct from None."""

    _instance: "_Undefined | None" = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _Undefined()

Key = Union[str, int]


@dataclass(frozen=True)
class PropertyPath:
    """A parsed property path.

    `parts` holds string keys and integer indexes in access order, so
    `a.b[0]["c d"]` becomes `("a", "b", 0, "c d")`.
    """

    text: str
    parts: tuple[Key, ...]

    def __str__(self) -> str:
        return self.text


@lru_cache(maxsize=1024)
def parse_path(text: str) -> PropertyPath:
    """Parse a dotted/bracketed property path.

    Raises:
        PathSyntaxError: If the text is empty or not a well-formed path.
    """
    source = text.strip()
    if not source:
        raise PathSyntaxError(text, "path is empty")

    parts: list[Key] = []
    pos = 0
    while pos < len(source):
        char = source[pos]
        if char == "[":
            match = _INDEX.match(source, pos)
            if match is None:
                raise PathSyntaxError(text, f"bad index at position {pos}")
            if match.group(1) is not None:
                parts.append(int(match.group(1)))
            else:
                parts.append(_UNESCAPE.sub(r"\1", match.group(3)))
            pos = match.end()
            continue

        if char == ".":
            if not parts:
                raise PathSyntaxError(text, "path starts with '.'")
            pos += 1
        elif parts:
            raise PathSyntaxError(text, f"unexpected '{char}' at position {pos}")

        match = _NAME.match(source, pos)
        if match is None:
            raise PathSyntaxError(text, f"missing name at position {pos}")
        parts.append(match.group(0))
        pos = match.end()

    return PropertyPath(text=source, parts=tuple(parts))


def resolve(scope: Any, path: PropertyPath | str) -> Any:
    """Resolve `path` against `scope`.

    Mappings are looked up by key, sequences by index and other objects by
    public attribute. Returns UNDEFINED as soon as a step does not resolve.
    """
    if isinstance(path, str):
        path = parse_path(path)

    value = scope
    for part in path.parts:
        value = _step(value, part)
        if value is UNDEFINED:
            break
    return value


def _step(value: Any, key: Key) -> Any:
    if value is None or value is UNDEFINED:
        return UNDEFINED

    if isinstance(value, Mapping):
        if key in value:
            return value[key]
        # `a.0` and `a[0]` should both reach a "0" or 0 key
        if isinstance(key, int) and str(key) in value:
            return value[str(key)]
        if isinstance(key, str) and _DIGITS.match(key) and int(key) in value:
            return value[int(key)]
        return UNDEFINED

    if isinstance(value, Sequence):
        index = _as_index(key)
        if index is not None and 0 <= index < len(value):
            return value[index]
        return UNDEFINED

    if isinstance(key, str) and not key.startswith("_"):
        return getattr(value, key, UNDEFINED)

    return UNDEFINED


def _as_index(key: Key) -> int | None:
    if isinstance(key, int):
        return key
    if _DIGITS.match(key):
        return int(key)
    return None
