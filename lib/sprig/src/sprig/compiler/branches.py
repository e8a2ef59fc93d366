"""Branches - the immutable nodes of a compiled template.

Every branch renders with `render(scope, budget=None) -> str`. Children are
tuples and branches are frozen, so a compiled tree is safe to share between
concurrent renders.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Union

from sprig.ast.directives import ConditionDescriptor, IterationPlan
from sprig.exceptions import OutputLimitExceeded
from sprig.util.pairs import pairs
from sprig.util.paths import PathSyntaxError, PropertyPath, parse_path, resolve

log = logging.getLogger(__name__)

# ${path}, never ${#...}; a leading backslash escapes it
PLACEHOLDER = re.compile(r"(\\)?(\$\{(?!#)([^}]*)\})")


class OutputBudget:
    """Per-render character allowance. Never shared between render calls."""

    def __init__(self, limit: int):
        self.limit = limit
        self.used = 0

    def consume(self, text: str) -> str:
        self.used += len(text)
        if self.used > self.limit:
            raise OutputLimitExceeded(self.limit)
        return text


@dataclass(frozen=True)
class Placeholder:
    """An interpolation site inside a text branch."""

    path: PropertyPath
    raw: str


def format_scalar(value: Any) -> str | None:
    """Return the text form of a renderable scalar, or None."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


def scan_placeholders(text: str) -> tuple[str | Placeholder, ...]:
    """Split text into literal runs and placeholders.

    Escaped placeholders and placeholders whose path cannot be parsed are
    literal text.
    """
    segments: list[str | Placeholder] = []
    literal: list[str] = []
    pos = 0

    for match in PLACEHOLDER.finditer(text):
        literal.append(text[pos : match.start()])
        pos = match.end()
        escaped, whole, inner = match.groups()

        if escaped:
            literal.append(whole)
            continue
        try:
            path = parse_path(inner)
        except PathSyntaxError:
            literal.append(whole)
            continue

        if any(literal):
            segments.append("".join(literal))
        literal.clear()
        segments.append(Placeholder(path=path, raw=whole))

    literal.append(text[pos:])
    if any(literal):
        segments.append("".join(literal))

    return tuple(segments)


def _render_children(
    children: tuple["Branch", ...],
    scope: Mapping[str, Any],
    budget: OutputBudget | None,
) -> str:
    return "".join(child.render(scope, budget) for child in children)


@dataclass(frozen=True)
class TextBranch:
    type: ClassVar[str] = "text"

    segments: tuple[str | Placeholder, ...]

    @classmethod
    def from_text(cls, text: str) -> "TextBranch":
        return cls(segments=scan_placeholders(text))

    def render(self, scope: Mapping[str, Any], budget: OutputBudget | None = None) -> str:
        parts: list[str] = []
        for segment in self.segments:
            if isinstance(segment, str):
                parts.append(segment)
                continue

            text = format_scalar(resolve(scope, segment.path))
            if text is None:
                log.debug("Placeholder %s left unresolved", segment.raw)
                text = segment.raw
            parts.append(text)

        rendered = "".join(parts)
        if budget is not None:
            budget.consume(rendered)
        return rendered


@dataclass(frozen=True)
class IfBranch:
    type: ClassVar[str] = "if"

    condition: ConditionDescriptor
    children: tuple["Branch", ...] = ()

    def render(self, scope: Mapping[str, Any], budget: OutputBudget | None = None) -> str:
        if not self.condition.holds(scope):
            return ""
        return _render_children(self.children, scope, budget)


@dataclass(frozen=True)
class EachBranch:
    type: ClassVar[str] = "each"

    plan: IterationPlan
    children: tuple["Branch", ...] = ()

    def render(self, scope: Mapping[str, Any], budget: OutputBudget | None = None) -> str:
        plan = self.plan
        rendered: list[str] = []

        for key, value in pairs(resolve(scope, plan.collection)):
            local = dict(scope)
            local[plan.value_name] = value
            if plan.key_name is not None:
                local[plan.key_name] = key
            rendered.append(_render_children(self.children, local, budget))

        return "".join(rendered)


@dataclass(frozen=True)
class RootBranch:
    type: ClassVar[str] = "root"

    children: tuple["Branch", ...] = ()

    def render(self, scope: Mapping[str, Any], budget: OutputBudget | None = None) -> str:
        return _render_children(self.children, scope, budget)


Branch = Union[TextBranch, IfBranch, EachBranch, RootBranch]
