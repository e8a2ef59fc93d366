"""Tree builder - turns a token stream into an immutable branch tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

from sprig.ast.directives import decode_each, decode_if
from sprig.ast.tokens import Close, Open, Text, Token
from sprig.compiler.branches import (
    Branch,
    EachBranch,
    IfBranch,
    RootBranch,
    TextBranch,
)
from sprig.exceptions import InvalidDirective, MismatchedClose, NestingTooDeep, UnclosedBranch

log = logging.getLogger(__name__)


# directive name -> (argument decoder, branch factory)
DIRECTIVES: dict[str, tuple[Callable[..., Any], Callable[..., Branch]]] = {
    "if": (decode_if, IfBranch),
    "each": (decode_each, EachBranch),
}


@dataclass
class _Frame:
    """An open branch on the builder stack. Never part of the compiled tree."""

    type: str
    payload: Any = None
    offset: Optional[int] = None
    children: list[Branch] = field(default_factory=list)


class TreeBuilder:
    """Builds a RootBranch from tokens using a stack of open directives."""

    def __init__(self, max_depth: Optional[int] = None):
        """Initialize the builder.

        Args:
            max_depth: Maximum directive nesting depth, or None for no limit.
        """
        self.max_depth = max_depth

    def build(self, tokens: Iterable[Token]) -> RootBranch:
        """Build the branch tree for `tokens`.

        Raises:
            InvalidDirective: Unknown directive name or malformed arguments.
            MismatchedClose: An end marker does not match the open directive.
            UnclosedBranch: Input ended with directives still open.
            NestingTooDeep: Directives nested deeper than `max_depth`.
        """
        stack: list[_Frame] = [_Frame(type=RootBranch.type)]
        count = 0

        for token in tokens:
            count += 1
            if isinstance(token, Text):
                stack[-1].children.append(TextBranch.from_text(token.content))
            elif isinstance(token, Open):
                self._open(stack, token)
            elif isinstance(token, Close):
                self._close(stack, token)
            else:
                raise TypeError(f"Unexpected token: {token!r}")

        if len(stack) > 1:
            current = stack[-1]
            raise UnclosedBranch(current.type, current.offset)

        root = RootBranch(children=tuple(stack[0].children))
        log.debug("Built template tree from %d tokens", count)
        return root

    def _open(self, stack: list[_Frame], token: Open) -> None:
        if token.name not in DIRECTIVES:
            raise InvalidDirective(
                token.name, token.args, "unknown directive", token.offset
            )

        if self.max_depth is not None and len(stack) > self.max_depth:
            raise NestingTooDeep(self.max_depth, token.offset)

        decoder, _ = DIRECTIVES[token.name]
        payload = decoder(token.args, token.offset)
        stack.append(_Frame(type=token.name, payload=payload, offset=token.offset))

    def _close(self, stack: list[_Frame], token: Close) -> None:
        current = stack[-1]
        if current.type != token.name or len(stack) == 1:
            raise MismatchedClose(current.type, token.name, token.offset)

        stack.pop()
        _, factory = DIRECTIVES[current.type]
        branch = factory(current.payload, tuple(current.children))
        stack[-1].children.append(branch)


def build(tokens: Iterable[Token], max_depth: Optional[int] = None) -> RootBranch:
    """Build a branch tree from tokens."""
    return TreeBuilder(max_depth=max_depth).build(tokens)
