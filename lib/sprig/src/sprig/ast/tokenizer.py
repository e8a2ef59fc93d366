"""Tokenizer - splits template source into text and directive tokens."""

from __future__ import annotations

import re

from sprig.ast.tokens import Close, Open, Text, Token

# ${#name args}. An unterminated marker never matches.
MARKER = re.compile(r"\$\{#([^}]*)\}")

END = "end"
ESCAPE = "\\"


def tokenize(source: str) -> list[Token]:
    """Split `source` into Text, Open and Close tokens.

    A marker preceded by a backslash is kept as literal text and the
    backslash is dropped. Adjacent text is merged and empty text is omitted.

    Example:
        >>> tokenize("a${#if x}b${#end if}")
        [Text(offset=0, content='a'), Open(offset=1, name='if', args='x'),
         Text(offset=9, content='b'), Close(offset=10, name='if')]
    """
    tokens: list[Token] = []
    pending: list[str] = []
    pending_start = 0
    pos = 0

    def flush() -> None:
        content = "".join(pending)
        if content:
            tokens.append(Text(offset=pending_start, content=content))
        pending.clear()

    for match in MARKER.finditer(source):
        start = match.start()
        if start > 0 and source[start - 1] == ESCAPE:
            if not pending:
                pending_start = pos
            pending.append(source[pos : start - 1])
            pending.append(match.group(0))
            pos = match.end()
            continue

        if not pending:
            pending_start = pos
        pending.append(source[pos:start])
        flush()
        tokens.append(_marker_token(match.group(1), start))
        pos = match.end()

    if not pending:
        pending_start = pos
    pending.append(source[pos:])
    flush()

    return tokens


def _marker_token(body: str, offset: int) -> Token:
    words = body.split(None, 1)
    name = words[0] if words else ""
    args = words[1].strip() if len(words) > 1 else ""

    if name == END:
        return Close(offset=offset, name=args)
    return Open(offset=offset, name=name, args=args)
