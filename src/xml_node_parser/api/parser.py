"""Parser API for the XML node parser.

Module-level functions cover the common cases; :class:`XmlNodeParser` holds a
configuration for repeated use and can return a :class:`ParseResult` with
statistics alongside the tree. Every call either returns a complete tree or
raises exactly one :class:`XmlParseError` subclass.
"""

import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Optional, TextIO, Union

from xml_node_parser.character.reader import DocumentReader
from xml_node_parser.grammar import Rule, XMLGrammar
from xml_node_parser.shared.config import ParserConfig
from xml_node_parser.shared.errors import XmlParseError
from xml_node_parser.shared.logging import get_logger, preview
from xml_node_parser.shared.result import ParseStatistics
from xml_node_parser.tree.builder import XmlTreeBuilder
from xml_node_parser.tree.node import XmlNode

InputType = Union[str, bytes, Path, BinaryIO, TextIO]

MS_PER_SECOND = 1000


@dataclass
class ParseResult:
    """A parsed document with its metadata."""

    root: XmlNode
    declaration: Optional[str] = None
    statistics: ParseStatistics = field(default_factory=ParseStatistics)
    correlation_id: Optional[str] = None

    @property
    def element_count(self) -> int:
        return self.statistics.elements


class XmlNodeParser:
    """Configured parser that can be reused across documents.

    The parser keeps only configuration; each call builds its own trace and
    tree, so one instance may be used from several threads.

    Examples:
        >>> parser = XmlNodeParser()
        >>> root = parser.parse_string('<a><b>hi</b><b>bye</b></a>')
        >>> [node.content for node in root.find_all('b')]
        ['hi', 'bye']

        Strict configuration rejects single-quoted attributes:
        >>> parser = XmlNodeParser(ParserConfig.strict())
        >>> parser.parse_string("<a x='1'/>")
        Traceback (most recent call last):
        ...
        xml_node_parser.shared.errors.XMLSyntaxError: expected quoted attribute value [rule: attribute_value] at line 1, column 6
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ParserConfig()
        if correlation_id is None and self.config.global_.enable_correlation_tracking:
            correlation_id = uuid.uuid4().hex[:12]
        self.correlation_id = correlation_id

        self.logger = get_logger(__name__, self.correlation_id, "xml_node_parser")
        self._grammar = XMLGrammar(self.config.grammar, self.correlation_id)
        self._tree_builder = XmlTreeBuilder(self.correlation_id)
        self._reader = DocumentReader(self.config.reader, self.correlation_id)

    def parse_document(self, text: str) -> ParseResult:
        """Parse ``text`` and return the tree with its statistics.

        Raises:
            XMLSyntaxError: If the text does not conform to the grammar
            TagMismatchError: If a closing tag does not match its opening tag
            InternalParserError: If grammar and builder disagree
        """
        start_time = time.time()
        self.logger.info(
            "Starting parse operation",
            extra={"content_length": len(text), "preview": preview(text)}
        )

        try:
            trace = self._grammar.parse(text)
            root, statistics = self._tree_builder.build_with_statistics(trace)
        except XmlParseError as e:
            self.logger.info(
                "Parse operation failed",
                extra={
                    "error_kind": e.kind.name,
                    "reason": e.message,
                    "processing_time_ms": (time.time() - start_time) * MS_PER_SECOND,
                }
            )
            raise

        declaration = trace.first(Rule.DECLARATION)
        statistics.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND
        statistics.characters_processed = len(text)

        self.logger.info(
            "Parse operation completed",
            extra={
                "nodes_built": statistics.nodes_built,
                "max_depth": statistics.max_depth,
                "processing_time_ms": statistics.processing_time_ms,
            }
        )
        return ParseResult(
            root=root,
            declaration=declaration.text if declaration is not None else None,
            statistics=statistics,
            correlation_id=self.correlation_id,
        )

    def parse_string(self, xml_string: str) -> XmlNode:
        """Parse a complete document held in a string."""
        return self.parse_document(xml_string).root

    def parse_bytes(self, data: bytes) -> XmlNode:
        """Decode ``data`` (BOM, declared encoding, default) and parse it."""
        return self.parse_string(self._reader.decode(data))

    def parse_file(
        self,
        file_path: Union[str, Path],
        encoding: Optional[str] = None
    ) -> XmlNode:
        """Read the file at ``file_path`` and parse it.

        Raises:
            XmlIoError: If the file cannot be read or decoded
        """
        try:
            text = self._reader.read_path(file_path, encoding)
        except XmlParseError as e:
            self.logger.info(
                "Could not read document",
                extra={"error_kind": e.kind.name, "path": str(file_path)}
            )
            raise
        return self.parse_string(text)

    def parse(self, input_data: InputType) -> XmlNode:
        """Parse from a string, bytes, a Path or a file-like object."""
        if isinstance(input_data, str):
            return self.parse_string(input_data)
        if isinstance(input_data, bytes):
            return self.parse_bytes(input_data)
        if isinstance(input_data, Path):
            return self.parse_file(input_data)
        if hasattr(input_data, "read"):
            return self.parse_string(self._reader.read_stream(input_data))
        raise TypeError(f"Unsupported input type: {type(input_data).__name__}")


def parse(
    input_data: InputType,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> XmlNode:
    """Parse XML from a string, bytes, a Path or a file-like object.

    Args:
        input_data: Document source
        config: Optional parser configuration
        correlation_id: Optional correlation ID for request tracking

    Returns:
        Root node of the document

    Examples:
        >>> parse('<a attr="1"><!--note--></a>').children[0].content
        'note'
    """
    return XmlNodeParser(config, correlation_id).parse(input_data)


def parse_string(
    xml_string: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> XmlNode:
    """Parse a complete document held in a string.

    Args:
        xml_string: Document text
        config: Optional parser configuration
        correlation_id: Optional correlation ID for request tracking

    Returns:
        Root node of the document

    Raises:
        XMLSyntaxError: If the text does not conform to the grammar
        TagMismatchError: If a closing tag does not match its opening tag

    Examples:
        >>> root = parse_string('<a><b>hi</b><b>bye</b></a>')
        >>> root.find_first('b').content
        'hi'
    """
    return XmlNodeParser(config, correlation_id).parse_string(xml_string)


def parse_file(
    file_path: Union[str, Path],
    encoding: Optional[str] = None,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> XmlNode:
    """Read and parse the document at ``file_path``.

    Args:
        file_path: Path to the document
        encoding: Optional explicit encoding (detected when omitted)
        config: Optional parser configuration
        correlation_id: Optional correlation ID for request tracking

    Returns:
        Root node of the document

    Raises:
        XmlIoError: If the file cannot be read or decoded
        XMLSyntaxError: If the text does not conform to the grammar
        TagMismatchError: If a closing tag does not match its opening tag
    """
    return XmlNodeParser(config, correlation_id).parse_file(file_path, encoding)
