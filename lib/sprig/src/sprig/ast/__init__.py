"""Template source tokens and directive grammar."""

from sprig.ast.directives import ConditionDescriptor, IterationPlan, decode_each, decode_if
from sprig.ast.tokenizer import tokenize
from sprig.ast.tokens import Close, Open, Text, Token

__all__ = [
    "Close",
    "ConditionDescriptor",
    "IterationPlan",
    "Open",
    "Text",
    "Token",
    "decode_each",
    "decode_if",
    "tokenize",
]
