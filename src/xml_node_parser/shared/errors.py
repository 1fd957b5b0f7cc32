"""Error taxonomy for XML node parsing.

Every failure surfaced by the parser is one of four kinds. Each kind has its
own exception class deriving from :class:`XmlParseError`, so callers can catch
the whole family at once or a single kind precisely.
"""

from enum import Enum, auto
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from pathlib import Path

    from xml_node_parser.grammar.rules import Rule
    from xml_node_parser.shared.result import SourcePosition


class ErrorKind(Enum):
    """Kinds of parse failures."""

    TAG_MISMATCH = auto()   # Closing tag name differs from opening tag name
    SYNTAX = auto()         # Input does not conform to the grammar
    IO = auto()             # Source could not be read or decoded
    INTERNAL = auto()       # Grammar and builder disagree; a defect


class XmlParseError(Exception):
    """Base exception for every parser failure."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TagMismatchError(XmlParseError):
    """Raised when an element's closing tag does not match its opening tag."""

    kind = ErrorKind.TAG_MISMATCH

    def __init__(
        self,
        opening: str,
        ending: str,
        opening_position: Optional["SourcePosition"] = None,
        ending_position: Optional["SourcePosition"] = None,
    ) -> None:
        message = f"Tag mismatch: opening tag <{opening}>, ending tag </{ending}>"
        if opening_position is not None and ending_position is not None:
            message += f" (opened at {opening_position}, closed at {ending_position})"
        super().__init__(message)
        self.opening = opening
        self.ending = ending
        self.opening_position = opening_position
        self.ending_position = ending_position


class XMLSyntaxError(XmlParseError):
    """Raised when input does not conform to the accepted grammar."""

    kind = ErrorKind.SYNTAX

    def __init__(
        self,
        message: str,
        rule: Optional["Rule"] = None,
        position: Optional["SourcePosition"] = None,
    ) -> None:
        detail = message
        if rule is not None:
            detail += f" [rule: {rule.name.lower()}]"
        if position is not None:
            detail += f" at {position}"
        super().__init__(detail)
        self.reason = message
        self.rule = rule
        self.position = position


class XmlIoError(XmlParseError):
    """Raised when the document source cannot be read or decoded."""

    kind = ErrorKind.IO

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, "Path"]] = None,
    ) -> None:
        super().__init__(f"File I/O error: {message}")
        self.path = path


class InternalParserError(XmlParseError):
    """Raised when the builder meets a grammar production it cannot map.

    This signals a defect in the grammar/builder pairing, never bad input.
    """

    kind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        super().__init__(
            f"Unexpected internal error: {message}. "
            "This indicates a bug in the parser, not in the document."
        )
        self.detail = message
