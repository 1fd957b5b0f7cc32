"""Tests for the error taxonomy and source positions."""

import pytest

from xml_node_parser.grammar.rules import Rule
from xml_node_parser.shared.errors import (
    ErrorKind,
    InternalParserError,
    TagMismatchError,
    XmlIoError,
    XmlParseError,
    XMLSyntaxError,
)
from xml_node_parser.shared.result import ParseStatistics, SourcePosition


class TestErrorKinds:
    """Each error class reports its own kind and shares the base class."""

    @pytest.mark.parametrize(
        "error, kind",
        [
            (TagMismatchError("a", "b"), ErrorKind.TAG_MISMATCH),
            (XMLSyntaxError("bad"), ErrorKind.SYNTAX),
            (XmlIoError("missing"), ErrorKind.IO),
            (InternalParserError("oops"), ErrorKind.INTERNAL),
        ],
    )
    def test_kind_and_base_class(self, error, kind):
        assert isinstance(error, XmlParseError)
        assert error.kind is kind

    def test_internal_error_is_not_a_syntax_error(self):
        assert not issubclass(InternalParserError, XMLSyntaxError)
        assert not issubclass(XMLSyntaxError, InternalParserError)


class TestErrorMessages:
    """Test error message formatting and context attributes."""

    def test_tag_mismatch_message(self):
        error = TagMismatchError("a", "b")
        assert str(error) == "Tag mismatch: opening tag <a>, ending tag </b>"
        assert error.opening == "a"
        assert error.ending == "b"

    def test_tag_mismatch_with_positions(self):
        error = TagMismatchError(
            "a", "b", SourcePosition(1, 1, 0), SourcePosition(2, 5, 12)
        )
        assert "opened at line 1, column 1" in str(error)
        assert "closed at line 2, column 5" in str(error)

    def test_syntax_error_includes_rule_and_position(self):
        error = XMLSyntaxError(
            "unterminated comment", rule=Rule.COMMENT, position=SourcePosition(1, 4, 3)
        )
        assert str(error) == "unterminated comment [rule: comment] at line 1, column 4"
        assert error.reason == "unterminated comment"
        assert error.rule is Rule.COMMENT
        assert error.position.offset == 3

    def test_io_error_keeps_path(self):
        error = XmlIoError("No such file or directory", path="missing.xml")
        assert str(error).startswith("File I/O error: ")
        assert error.path == "missing.xml"

    def test_internal_error_message(self):
        error = InternalParserError("unexpected rule CONTENT")
        assert "unexpected rule CONTENT" in str(error)
        assert error.detail == "unexpected rule CONTENT"


class TestSourcePosition:
    """Test position computation and validation."""

    def test_from_offset_first_line(self):
        assert SourcePosition.from_offset("<a>", 0) == SourcePosition(1, 1, 0)

    def test_from_offset_later_line(self):
        text = "<a>\n  <b>\n</a>"
        position = SourcePosition.from_offset(text, text.index("<b>"))
        assert (position.line, position.column) == (2, 3)

    def test_from_offset_clamps_to_text(self):
        position = SourcePosition.from_offset("abc", 99)
        assert position.offset == 3
        assert position.column == 4

    def test_invalid_line_raises(self):
        with pytest.raises(ValueError, match="Line number must be >= 1"):
            SourcePosition(line=0, column=1, offset=0)

    def test_invalid_column_raises(self):
        with pytest.raises(ValueError, match="Column number must be >= 1"):
            SourcePosition(line=1, column=0, offset=0)


def test_statistics_throughput():
    statistics = ParseStatistics(processing_time_ms=10.0, characters_processed=500)
    assert statistics.characters_per_second == 50000.0
    assert ParseStatistics().characters_per_second == 0.0
