"""Sprig compiler - builds immutable branch trees from template tokens."""

from sprig.compiler.branches import (
    Branch,
    EachBranch,
    IfBranch,
    OutputBudget,
    RootBranch,
    TextBranch,
)
from sprig.compiler.builder import TreeBuilder, build

__all__ = [
    "Branch",
    "EachBranch",
    "IfBranch",
    "OutputBudget",
    "RootBranch",
    "TextBranch",
    "TreeBuilder",
    "build",
]
