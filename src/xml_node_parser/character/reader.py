"""Document source reading.

Turns paths, byte strings and file-like objects into a complete text buffer
before parsing begins. Every failure is reported as :class:`XmlIoError`.
"""

from pathlib import Path
from typing import BinaryIO, Optional, TextIO, Union

from xml_node_parser.character.encoding import EncodingDetector
from xml_node_parser.shared.config import ReaderConfig
from xml_node_parser.shared.errors import XmlIoError
from xml_node_parser.shared.logging import get_logger

BOM_CHAR = "\ufeff"


def strip_bom(text: str) -> str:
    """Drop a byte order mark left at the start of already decoded text."""
    return text[1:] if text.startswith(BOM_CHAR) else text


class DocumentReader:
    """Reads whole documents into memory as text."""

    def __init__(
        self,
        config: Optional[ReaderConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ReaderConfig()
        self.detector = EncodingDetector(self.config)
        self.logger = get_logger(__name__, correlation_id, "document_reader")

    def decode(self, data: bytes, source: Optional[Union[str, Path]] = None) -> str:
        """Decode raw bytes with BOM/declaration/default detection."""
        detected = self.detector.detect(data)
        self.logger.debug(
            "Encoding detected",
            extra={"encoding": detected.encoding, "method": detected.method.value}
        )
        try:
            return self.detector.decode(data)
        except (UnicodeDecodeError, LookupError) as e:
            raise XmlIoError(
                f"cannot decode document as {detected.encoding}: {e}", path=source
            ) from e

    def read_path(
        self,
        file_path: Union[str, Path],
        encoding: Optional[str] = None
    ) -> str:
        """Read and decode the file at ``file_path``.

        Args:
            file_path: Path to the document
            encoding: Explicit encoding; disables detection when given

        Raises:
            XmlIoError: If the file cannot be opened, read or decoded
        """
        path = Path(file_path)
        try:
            data = path.read_bytes()
        except OSError as e:
            self.logger.debug(
                "Failed to read document",
                extra={"path": str(path), "error": e.strerror}
            )
            raise XmlIoError(f"{e.strerror or e} ({path})", path=path) from e

        self.logger.debug(
            "Document read", extra={"path": str(path), "byte_count": len(data)}
        )
        if encoding is None:
            return self.decode(data, source=path)
        try:
            return strip_bom(data.decode(encoding))
        except (UnicodeDecodeError, LookupError) as e:
            raise XmlIoError(
                f"cannot decode document as {encoding}: {e}", path=path
            ) from e

    def read_stream(self, stream: Union[BinaryIO, TextIO]) -> str:
        """Read a file-like object to its end.

        Raises:
            XmlIoError: If reading or decoding fails
        """
        source = getattr(stream, "name", None)
        try:
            data = stream.read()
        except UnicodeDecodeError as e:
            raise XmlIoError(f"cannot decode stream: {e}", path=source) from e
        except OSError as e:
            raise XmlIoError(str(e), path=source) from e

        if isinstance(data, bytes):
            return self.decode(data, source=source)
        return strip_bom(data)


def read_document(
    file_path: Union[str, Path],
    encoding: Optional[str] = None,
    config: Optional[ReaderConfig] = None
) -> str:
    """Read a document from disk as text.

    Args:
        file_path: Path to the document
        encoding: Optional explicit encoding
        config: Reader configuration for encoding detection

    Returns:
        The complete decoded text

    Raises:
        XmlIoError: If the file cannot be read or decoded
    """
    return DocumentReader(config).read_path(file_path, encoding)
