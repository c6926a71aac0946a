"""Application-level plumbing for cfgdom: errors and configuration."""

from .config import AnalysisConfig
from .errors import (
    CfgDomError,
    UnknownBlock,
    SpecSyntaxError,
    ConfigError,
    InternalError,
)

__all__ = [
    "AnalysisConfig",
    "CfgDomError",
    "UnknownBlock",
    "SpecSyntaxError",
    "ConfigError",
    "InternalError",
]
