"""Data helpers consumed by the template engine."""

from sprig.util.literals import PathRef, decode, to_number
from sprig.util.pairs import pairs
from sprig.util.paths import (
    UNDEFINED,
    PathSyntaxError,
    PropertyPath,
    parse_path,
    resolve,
)

__all__ = [
    "UNDEFINED",
    "PathRef",
    "PathSyntaxError",
    "PropertyPath",
    "decode",
    "pairs",
    "parse_path",
    "resolve",
    "to_number",
]
