"""Public parsing API for the XML node parser."""

from .parser import (
    InputType,
    ParseResult,
    XmlNodeParser,
    parse,
    parse_file,
    parse_string,
)

__all__ = [
    "InputType",
    "ParseResult",
    "XmlNodeParser",
    "parse",
    "parse_file",
    "parse_string",
]
