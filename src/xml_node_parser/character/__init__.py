"""Character layer for the XML node parser.

This module reads document sources and decodes bytes to text, detecting the
encoding from a byte order mark or the XML declaration.
"""

from .encoding import (
    BOMDetector,
    DetectionMethod,
    EncodingDetector,
    EncodingResult,
    XMLDeclarationParser,
)
from .reader import DocumentReader, read_document

__all__ = [
    "BOMDetector",
    "DetectionMethod",
    "EncodingDetector",
    "EncodingResult",
    "XMLDeclarationParser",
    "DocumentReader",
    "read_document",
]
