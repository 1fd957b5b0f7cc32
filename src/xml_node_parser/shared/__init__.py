"""Shared utilities for XML node parsing.

This module provides the error taxonomy, configuration objects, result types
and logging helpers used across all processing layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    GrammarConfig,
    ParserConfig,
    ReaderConfig,
    TreeConfig,
)
from .errors import (
    ErrorKind,
    InternalParserError,
    TagMismatchError,
    XmlIoError,
    XmlParseError,
    XMLSyntaxError,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .result import (
    ParseStatistics,
    SourcePosition,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "GlobalConfig",
    "GrammarConfig",
    "ParserConfig",
    "ReaderConfig",
    "TreeConfig",
    "ErrorKind",
    "InternalParserError",
    "TagMismatchError",
    "XmlIoError",
    "XmlParseError",
    "XMLSyntaxError",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "ParseStatistics",
    "SourcePosition",
]
