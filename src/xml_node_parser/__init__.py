"""XML Node Parser.

Parses XML-like documents into an immutable tree of nodes and answers
depth-first name lookups and indented rendering over that tree.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_string(), parse_file()
- Level 2: Configured parser - XmlNodeParser class with ParserConfig
"""

__version__ = "0.1.0"
__author__ = "XML Node Parser Team"

# Level 1: Simple functions
# Level 2: Configured parser
from .api import ParseResult, XmlNodeParser, parse, parse_file, parse_string

# Errors surfaced by every parse call
from .shared.errors import (
    ErrorKind,
    InternalParserError,
    TagMismatchError,
    XmlIoError,
    XmlParseError,
    XMLSyntaxError,
)

# Configuration classes for advanced usage
from .shared.config import ParserConfig

# Tree and queries
from .tree import NodeKind, XmlNode, find_all, find_content, find_first, render

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse",
    "parse_string",
    "parse_file",

    # Level 2: Configured parser
    "XmlNodeParser",
    "ParseResult",
    "ParserConfig",

    # Tree and queries
    "NodeKind",
    "XmlNode",
    "find_all",
    "find_content",
    "find_first",
    "render",

    # Errors
    "ErrorKind",
    "InternalParserError",
    "TagMismatchError",
    "XmlIoError",
    "XmlParseError",
    "XMLSyntaxError",
]
