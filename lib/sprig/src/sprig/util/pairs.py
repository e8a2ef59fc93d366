"""Collection pairing - turn a collection into ordered (key, value) pairs."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from sprig.util.paths import UNDEFINED


def pairs(value: Any) -> list[tuple[Any, Any]]:
    """Return the (key, value) pairs of a collection.

    Mappings yield their items in insertion order. Strings and other iterables
    are array-like and yield (index, element). Anything else, including None
    and UNDEFINED, has no pairs.

    Example:
        >>> pairs({"a": 1, "b": 2})
        [('a', 1), ('b', 2)]
        >>> pairs(["x", "y"])
        [(0, 'x'), (1, 'y')]
    """
    if value is None or value is UNDEFINED:
        return []
    if isinstance(value, Mapping):
        return list(value.items())
    if isinstance(value, Iterable):
        return list(enumerate(value))
    return []
