"""Encoding detection for raw XML documents.

Byte input is decoded using, in order: a byte order mark, the encoding named
in the XML declaration, and finally the configured default encoding.
"""

import codecs
import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, Optional

from xml_node_parser.shared.config import ReaderConfig

# The XML declaration must appear within the first bytes of a document
DECLARATION_SCAN_LENGTH = 1024


class DetectionMethod(Enum):
    """Enumeration of encoding detection methods."""
    BOM = "bom"
    XML_DECLARATION = "xml_declaration"
    DEFAULT = "default"


@dataclass(frozen=True)
class EncodingResult:
    """Result of encoding detection.

    Attributes:
        encoding: Detected encoding name (canonical form)
        method: Detection method used
        bom_length: Number of leading bytes that belong to the BOM
    """
    encoding: str
    method: DetectionMethod
    bom_length: int = 0


class BOMDetector:
    """Byte Order Mark (BOM) detection for all major encodings."""

    BOM_PATTERNS: ClassVar[Dict[bytes, str]] = {
        b"\xef\xbb\xbf": "utf-8",
        b"\xff\xfe": "utf-16-le",
        b"\xfe\xff": "utf-16-be",
        b"\xff\xfe\x00\x00": "utf-32-le",
        b"\x00\x00\xfe\xff": "utf-32-be",
    }

    def detect(self, data: bytes) -> Optional[EncodingResult]:
        """Detect encoding based on BOM.

        Args:
            data: Byte data to analyze

        Returns:
            EncodingResult if BOM detected, None otherwise
        """
        if not data:
            return None

        # UTF-32 LE shares its first two bytes with UTF-16 LE
        for bom_bytes, encoding in sorted(
            self.BOM_PATTERNS.items(), key=lambda x: len(x[0]), reverse=True
        ):
            if data.startswith(bom_bytes):
                return EncodingResult(
                    encoding=encoding,
                    method=DetectionMethod.BOM,
                    bom_length=len(bom_bytes),
                )

        return None


class XMLDeclarationParser:
    """Parser for XML encoding declarations."""

    XML_DECLARATION_PATTERN = re.compile(
        rb'<\?xml\s+.*?encoding\s*=\s*["\']([^"\']+)["\'].*?\?>',
        re.IGNORECASE | re.DOTALL
    )

    ALIASES: ClassVar[Dict[str, str]] = {
        "utf8": "utf-8",
        "utf16": "utf-16",
        "utf32": "utf-32",
        "iso-8859-1": "latin-1",
        "windows-1252": "cp1252",
    }

    def parse_declaration(self, data: bytes) -> Optional[EncodingResult]:
        """Parse encoding from XML declaration.

        Args:
            data: Byte data to analyze

        Returns:
            EncodingResult if a declaration names a known encoding, None otherwise
        """
        match = self.XML_DECLARATION_PATTERN.search(data[:DECLARATION_SCAN_LENGTH])
        if not match:
            return None

        declared = match.group(1).decode("ascii", errors="ignore").strip().lower()
        encoding = self.ALIASES.get(declared, declared)
        if encoding.startswith(("utf-16", "utf-32")):
            # A declaration readable as ASCII cannot be in a wide encoding
            return None
        try:
            codecs.lookup(encoding)
        except LookupError:
            return None

        return EncodingResult(encoding=encoding, method=DetectionMethod.XML_DECLARATION)


class EncodingDetector:
    """Cascading encoding detection: BOM, declaration, configured default."""

    def __init__(self, config: Optional[ReaderConfig] = None) -> None:
        self.config = config or ReaderConfig()
        self.bom_detector = BOMDetector()
        self.declaration_parser = XMLDeclarationParser()

    def detect(self, data: bytes) -> EncodingResult:
        """Detect the encoding of ``data``.

        Args:
            data: Byte data to analyze

        Returns:
            EncodingResult with detected encoding and method
        """
        if self.config.detect_bom:
            bom_result = self.bom_detector.detect(data)
            if bom_result is not None:
                return bom_result

        if self.config.honor_declared_encoding:
            declared = self.declaration_parser.parse_declaration(data)
            if declared is not None:
                return declared

        return EncodingResult(
            encoding=self.config.default_encoding,
            method=DetectionMethod.DEFAULT,
        )

    def decode(self, data: bytes) -> str:
        """Decode ``data`` into text using the detected encoding.

        Raises:
            UnicodeDecodeError: If the bytes are invalid for the encoding
            LookupError: If the configured default encoding is unknown
        """
        result = self.detect(data)
        return data[result.bom_length:].decode(result.encoding)
