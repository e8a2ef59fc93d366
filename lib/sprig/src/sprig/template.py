"""Compiled templates and the `compile` entry point."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from sprig.ast.tokenizer import tokenize
from sprig.compiler.branches import OutputBudget, RootBranch
from sprig.compiler.builder import TreeBuilder
from sprig.config import EngineConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Template:
    """A compiled template.

    Templates are immutable and can be rendered any number of times, from any
    number of threads, with different data.
    """

    root: RootBranch
    source: str = field(default="", repr=False)
    max_output: Optional[int] = None

    def render(self, data: Optional[Mapping[str, Any]] = None) -> str:
        """Render the template against `data`.

        Args:
            data: Mapping consulted for placeholders and directives.

        Returns:
            Rendered string.

        Raises:
            TypeError: If `data` is not a mapping.
            OutputLimitExceeded: If `max_output` is set and exceeded.
        """
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise TypeError(f"Template data must be a mapping, got {type(data).__name__}")

        budget = OutputBudget(self.max_output) if self.max_output is not None else None
        return self.root.render(data, budget)


def compile(source: str, config: Optional[EngineConfig] = None) -> Template:
    """Compile template source into a Template.

    Raises:
        CompileError: If the source is structurally invalid.
    """
    if not isinstance(source, str):
        raise TypeError("`source` must be a string containing a template")

    config = config or EngineConfig()
    tokens = tokenize(source)
    root = TreeBuilder(max_depth=config.max_depth).build(tokens)
    log.debug("Compiled template (%d chars, %d top-level branches)", len(source), len(root.children))

    return Template(root=root, source=source, max_output=config.max_output)
