"""Tests for byte order mark and declaration based encoding detection."""

import pytest

from xml_node_parser.character.encoding import (
    BOMDetector,
    DetectionMethod,
    EncodingDetector,
    XMLDeclarationParser,
)
from xml_node_parser.shared.config import ReaderConfig


class TestBOMDetector:
    """Test BOM detection."""

    @pytest.mark.parametrize(
        "data, encoding, length",
        [
            (b"\xef\xbb\xbf<a/>", "utf-8", 3),
            (b"\xff\xfe<\x00", "utf-16-le", 2),
            (b"\xfe\xff\x00<", "utf-16-be", 2),
            (b"\xff\xfe\x00\x00<\x00\x00\x00", "utf-32-le", 4),
            (b"\x00\x00\xfe\xff\x00\x00\x00<", "utf-32-be", 4),
        ],
    )
    def test_detects_bom(self, data, encoding, length):
        result = BOMDetector().detect(data)

        assert result is not None
        assert result.encoding == encoding
        assert result.method is DetectionMethod.BOM
        assert result.bom_length == length

    def test_no_bom(self):
        assert BOMDetector().detect(b"<a/>") is None

    def test_empty_data(self):
        assert BOMDetector().detect(b"") is None


class TestXMLDeclarationParser:
    """Test encoding extraction from the XML declaration."""

    def test_declared_encoding(self):
        result = XMLDeclarationParser().parse_declaration(
            b'<?xml version="1.0" encoding="ISO-8859-1"?><a/>'
        )

        assert result is not None
        assert result.encoding == "latin-1"
        assert result.method is DetectionMethod.XML_DECLARATION

    def test_single_quoted_encoding(self):
        result = XMLDeclarationParser().parse_declaration(
            b"<?xml version='1.0' encoding='windows-1252'?><a/>"
        )
        assert result is not None
        assert result.encoding == "cp1252"

    def test_declaration_without_encoding(self):
        assert XMLDeclarationParser().parse_declaration(b'<?xml version="1.0"?><a/>') is None

    def test_unknown_encoding(self):
        assert XMLDeclarationParser().parse_declaration(
            b'<?xml version="1.0" encoding="no-such-codec"?><a/>'
        ) is None

    def test_wide_encoding_without_bom_is_ignored(self):
        assert XMLDeclarationParser().parse_declaration(
            b'<?xml version="1.0" encoding="UTF-16"?><a/>'
        ) is None


class TestEncodingDetector:
    """Test the detection cascade and decoding."""

    def test_default_encoding(self):
        result = EncodingDetector().detect(b"<a/>")
        assert result.encoding == "utf-8"
        assert result.method is DetectionMethod.DEFAULT

    def test_bom_wins_over_declaration(self):
        data = b'\xef\xbb\xbf<?xml version="1.0" encoding="latin-1"?><a/>'
        assert EncodingDetector().detect(data).method is DetectionMethod.BOM

    def test_decode_strips_bom(self):
        assert EncodingDetector().decode(b"\xef\xbb\xbf<a>x</a>") == "<a>x</a>"

    def test_decode_utf16_with_bom(self):
        data = "\ufeff<a>é</a>".encode("utf-16-le")
        assert EncodingDetector().decode(data) == "<a>é</a>"

    def test_decode_declared_latin1(self):
        data = '<?xml version="1.0" encoding="iso-8859-1"?><a>café</a>'.encode("latin-1")
        assert EncodingDetector().decode(data).endswith("<a>café</a>")

    def test_declaration_ignored_when_disabled(self):
        config = ReaderConfig(honor_declared_encoding=False)
        data = b'<?xml version="1.0" encoding="latin-1"?><a/>'
        assert EncodingDetector(config).detect(data).method is DetectionMethod.DEFAULT

    def test_bom_ignored_when_disabled(self):
        config = ReaderConfig(detect_bom=False)
        assert EncodingDetector(config).detect(b"\xef\xbb\xbf<a/>").bom_length == 0

    def test_invalid_bytes_raise_unicode_error(self):
        with pytest.raises(UnicodeDecodeError):
            EncodingDetector().decode(b"<a>\xc3\x28</a>")
