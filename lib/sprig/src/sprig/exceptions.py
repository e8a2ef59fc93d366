"""Sprig Exceptions

Compile-time failures stop a template from ever existing. Render-time misses
(unresolved placeholders, empty collections, false conditions) are not errors
and never raise; only an explicitly configured output limit can fail a render.
"""

from __future__ import annotations

from pathlib import Path


class SprigError(Exception):
    """Base exception for all sprig errors."""

    pass


class CompileError(SprigError):
    """Raised when a template source cannot be compiled."""

    def __init__(self, message: str, offset: int | None = None):
        self.offset = offset
        if offset is not None:
            message = f"{message} (at offset {offset})"
        super().__init__(message)


class InvalidDirective(CompileError):
    """Raised for an unknown directive name or malformed directive arguments."""

    def __init__(self, name: str, args: str, reason: str, offset: int | None = None):
        self.name = name
        self.arguments = args
        self.reason = reason
        marker = f"{name} {args}".strip()
        super().__init__(f"Invalid directive '{marker}': {reason}", offset)


class MismatchedClose(CompileError):
    """Raised when an end marker names a different directive than the open one."""

    def __init__(self, expected: str, found: str, offset: int | None = None):
        self.expected = expected
        self.found = found
        super().__init__(f"Expecting end of {expected} but got end of {found}", offset)


class UnclosedBranch(CompileError):
    """Raised when the source ends while a directive is still open."""

    def __init__(self, type: str, offset: int | None = None):
        self.type = type
        super().__init__(f"Unclosed {type} branch", offset)


class NestingTooDeep(CompileError):
    """Raised when directives nest deeper than the configured maximum."""

    def __init__(self, max_depth: int, offset: int | None = None):
        self.max_depth = max_depth
        super().__init__(f"Directives nested deeper than {max_depth}", offset)


class RenderError(SprigError):
    """Base exception for render failures."""

    pass


class OutputLimitExceeded(RenderError):
    """Raised when a render produces more output than the configured maximum."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Rendered output exceeds {limit} characters")


class TemplateNotFoundError(SprigError):
    """Raised when a template file does not exist."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Template not found: {path}")


class ConfigError(SprigError):
    """Raised when a configuration file is unreadable or invalid."""

    pass
