"""Directive grammar - decode `if` and `each` arguments once, at compile time.

    ${#if <!>?<path> [<op> <operand>]}
    ${#each <path> as [<key> to] <value>}
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from operator import ge, gt, le, lt
from typing import Any, Callable, Mapping

from sprig.exceptions import InvalidDirective
from sprig.util.literals import PathRef, decode, to_number
from sprig.util.paths import PathSyntaxError, PropertyPath, parse_path, resolve

log = logging.getLogger(__name__)

TRUTHY = "truthy"

# accepted spelling -> canonical operator
OPERATORS: dict[str, str] = {
    "<": "<",
    ">": ">",
    "<=": "<=",
    ">=": ">=",
    "===": "===",
    "!==": "!==",
    "==": "===",
    "!=": "!==",
}

# a path segment in brackets may hold spaces and operator characters: a["x y"]
PATH_CHARS = r"(?:\[[^\]]*\]|[^\s<>!=\[])+"

IF_ARGS = re.compile(
    r"""(?P<negate>!)?\s*(?P<path>""" + PATH_CHARS + r""")
        (?:\s*(?P<op>[<>!=]{1,3})\s*
           (?P<operand>"[^"]*"|'[^']*'|`[^`]*`|\S+))?\Z""",
    re.VERBOSE,
)

EACH_ARGS = re.compile(
    r"(?P<collection>(?:\[[^\]]*\]|[^\s\[])+)\s+as\s+(?:(?P<key>\w+)\s+to\s+)?(?P<value>\w+)\Z"
)


@dataclass(frozen=True)
class ConditionDescriptor:
    """A decoded `if` condition.

    `operand` is a decoded literal or a PathRef; it is ignored when the
    operator is `truthy`.
    """

    negate: bool
    path: PropertyPath
    operator: str = TRUTHY
    operand: Any = None

    def holds(self, scope: Mapping[str, Any]) -> bool:
        left = resolve(scope, self.path)
        if self.negate:
            left = not left

        if self.operator == TRUTHY:
            return bool(left)

        right = self.operand
        if isinstance(right, PathRef):
            right = resolve(scope, right.path)

        return compare(left, self.operator, right)


@dataclass(frozen=True)
class IterationPlan:
    """A decoded `each` header."""

    collection: PropertyPath
    value_name: str
    key_name: str | None = None


def decode_if(args: str, offset: int | None = None) -> ConditionDescriptor:
    """Decode the arguments of an `if` directive."""
    match = IF_ARGS.match(args.strip())
    if match is None:
        raise InvalidDirective("if", args, "expected '[!]<path> [<op> <operand>]'", offset)

    try:
        path = parse_path(match.group("path"))
    except PathSyntaxError as e:
        raise InvalidDirective("if", args, str(e), offset) from e

    op = match.group("op")
    if op is None:
        return ConditionDescriptor(negate=bool(match.group("negate")), path=path)

    if op not in OPERATORS:
        raise InvalidDirective("if", args, f"unknown operator '{op}'", offset)

    try:
        operand = decode(match.group("operand"))
    except PathSyntaxError as e:
        raise InvalidDirective("if", args, str(e), offset) from e

    return ConditionDescriptor(
        negate=bool(match.group("negate")),
        path=path,
        operator=OPERATORS[op],
        operand=operand,
    )


def decode_each(args: str, offset: int | None = None) -> IterationPlan:
    """Decode the arguments of an `each` directive."""
    match = EACH_ARGS.match(args.strip())
    if match is None:
        raise InvalidDirective(
            "each", args, "expected '<path> as [<key> to] <value>'", offset
        )

    try:
        collection = parse_path(match.group("collection"))
    except PathSyntaxError as e:
        raise InvalidDirective("each", args, str(e), offset) from e

    return IterationPlan(
        collection=collection,
        value_name=match.group("value"),
        key_name=match.group("key"),
    )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def strict_equal(left: Any, right: Any) -> bool:
    """Equality without coercion: `3 !== "3"` and `1 !== true`."""
    if left is right:
        return True
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if _is_number(left) and _is_number(right):
        return left == right
    if isinstance(left, str) != isinstance(right, str):
        return False
    if _is_number(left) != _is_number(right):
        return False
    return bool(left == right)


def _coerce_numeric(left: Any, right: Any) -> tuple[Any, Any]:
    if _is_number(left) and isinstance(right, str):
        number = to_number(right)
        if number is not None:
            right = number
    elif isinstance(left, str) and _is_number(right):
        number = to_number(left)
        if number is not None:
            left = number
    return left, right


_ORDERING: dict[str, Callable[[Any, Any], bool]] = {
    "<": lt,
    ">": gt,
    "<=": le,
    ">=": ge,
}


def compare(left: Any, op: str, right: Any) -> bool:
    """Apply a canonical comparison operator.

    Ordering operators turn numeric-looking text into a number when the other
    side is a number. Operands that cannot be ordered compare false.
    """
    if op == "===":
        return strict_equal(left, right)
    if op == "!==":
        return not strict_equal(left, right)

    left, right = _coerce_numeric(left, right)
    try:
        return bool(_ORDERING[op](left, right))
    except TypeError:
        log.debug("Cannot compare %r %s %r, treating as false", left, op, right)
        return False
