"""sprig - a small template directive engine.

    >>> import sprig
    >>> template = sprig.compile("${#each items as item}${item},${#end each}")
    >>> template.render({"items": [1, 2, 3]})
    '1,2,3,'
"""

from sprig.config import EngineConfig, config_from_env, load_config
from sprig.engine import Engine
from sprig.exceptions import (
    CompileError,
    ConfigError,
    InvalidDirective,
    MismatchedClose,
    NestingTooDeep,
    OutputLimitExceeded,
    RenderError,
    SprigError,
    TemplateNotFoundError,
    UnclosedBranch,
)
from sprig.logs import setup_logging
from sprig.template import Template, compile

__version__ = "0.1.0"

__all__ = [
    "CompileError",
    "ConfigError",
    "Engine",
    "EngineConfig",
    "InvalidDirective",
    "MismatchedClose",
    "NestingTooDeep",
    "OutputLimitExceeded",
    "RenderError",
    "SprigError",
    "Template",
    "TemplateNotFoundError",
    "UnclosedBranch",
    "compile",
    "config_from_env",
    "load_config",
    "setup_logging",
]
