"""Tests for the public parsing API."""

import io
import logging
import threading

import pytest

from xml_node_parser import (
    InternalParserError,
    ParseResult,
    ParserConfig,
    TagMismatchError,
    XmlIoError,
    XmlNode,
    XmlNodeParser,
    XMLSyntaxError,
    find_all,
    find_first,
    parse,
    parse_file,
    parse_string,
)


class TestDocumentedBehaviour:
    """Behaviour for the reference documents."""

    def test_repeated_children(self):
        root = parse_string("<a><b>hi</b><b>bye</b></a>")

        assert root.name == "a"
        assert [child.name for child in root.children] == ["b", "b"]
        assert [node.content for node in find_all(root, "b")] == ["hi", "bye"]
        assert find_first(root, "b").content == "hi"

    def test_mismatched_closing_tag(self):
        with pytest.raises(TagMismatchError):
            parse_string("<a><b>x</c></a>")

    def test_attribute_and_comment(self):
        root = parse_string('<a attr="1"><!--note--></a>')

        assert root.attributes == (("attr", "1"),)
        assert len(root.children) == 1
        assert root.children[0].name == "#comment"
        assert root.children[0].content == "note"

    def test_empty_element(self):
        root = parse_string("<a/>")
        assert root == XmlNode.element("a")

    def test_unterminated_child_is_syntax_error(self):
        with pytest.raises(XMLSyntaxError) as exc_info:
            parse_string("<a><b></a>")
        assert not isinstance(exc_info.value, TagMismatchError)


class TestParsingProperties:
    """General properties of parse results."""

    @pytest.mark.parametrize(
        "text",
        [
            "<r/>",
            "<r><r><r/></r></r>",
            '<r k="v"><s><t a="1" b="2"/></s><r/></r>',
        ],
    )
    def test_root_is_first_match_of_its_own_name(self, text):
        root = parse_string(text)
        assert find_all(root, root.name)[0] is root

    @pytest.mark.parametrize(
        "text",
        ["<a><b></b></a>", "<a><b><c>x</c></b></a>", '<a k="1"><b/><c></c></a>'],
    )
    def test_altered_closing_tag_is_tag_mismatch(self, text):
        altered = text.replace("</a>", "</z>")
        with pytest.raises(TagMismatchError):
            parse_string(altered)

    def test_whitespace_between_siblings(self):
        root = parse_string("<a>\n\t<b>1</b>  \n  <c>2</c>\t\n</a>")

        assert root.content == ""
        assert [child.name for child in root.children] == ["b", "c"]
        assert [child.content for child in root.children] == ["1", "2"]

    def test_cdata_is_opaque(self):
        root = parse_string("<a><![CDATA[literal <forbidden> text]]></a>")
        cdata = root.find_first("#cdata")

        assert cdata.content == "literal <forbidden> text"
        assert root.find_first("forbidden") is None

    def test_each_parse_returns_independent_tree(self):
        text = "<a><b>x</b></a>"
        assert parse_string(text) == parse_string(text)
        assert parse_string(text) is not parse_string(text)

    def test_concurrent_queries_on_shared_tree(self):
        root = parse_string("<a>" + "<b>x</b>" * 50 + "</a>")
        counts = []

        def worker():
            counts.append(len(root.find_all("b")))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert counts == [50] * 8


class TestXmlNodeParser:
    """Test the configurable parser class."""

    def test_parse_document_result(self):
        result = XmlNodeParser().parse_document(
            '<?xml version="1.0"?><a><!--c--><b/></a>'
        )

        assert isinstance(result, ParseResult)
        assert result.root.name == "a"
        assert result.declaration == '<?xml version="1.0"?>'
        assert result.element_count == 2
        assert result.statistics.comments == 1
        assert result.statistics.characters_processed == 40
        assert result.statistics.processing_time_ms >= 0

    def test_no_declaration(self):
        assert XmlNodeParser().parse_document("<a/>").declaration is None

    def test_generated_correlation_id(self):
        parser = XmlNodeParser()
        assert parser.correlation_id is not None
        assert len(parser.correlation_id) == 12
        assert parser.parse_document("<a/>").correlation_id == parser.correlation_id

    def test_explicit_correlation_id(self):
        assert XmlNodeParser(correlation_id="req-1").correlation_id == "req-1"

    def test_correlation_tracking_disabled(self):
        config = ParserConfig().override(global__enable_correlation_tracking=False)
        assert XmlNodeParser(config).correlation_id is None

    def test_strict_config(self):
        parser = XmlNodeParser(ParserConfig.strict())
        with pytest.raises(XMLSyntaxError) as exc_info:
            parser.parse_string("<a x='1'/>")
        assert str(exc_info.value) == (
            "expected quoted attribute value [rule: attribute_value] at line 1, column 6"
        )
        assert parser.parse_string('<a x="1"/>').get_attribute("x") == "1"

    def test_parser_is_reusable(self):
        parser = XmlNodeParser()
        with pytest.raises(XMLSyntaxError):
            parser.parse_string("<a>")
        assert parser.parse_string("<a/>").name == "a"

    def test_errors_are_single_kind(self):
        for text in ("<a>", "<a></b>", ""):
            with pytest.raises((XMLSyntaxError, TagMismatchError)) as exc_info:
                parse_string(text)
            assert not isinstance(exc_info.value, InternalParserError)


class TestInputTypes:
    """Test parse() dispatch over input types."""

    def test_string(self):
        assert parse("<a/>").name == "a"

    def test_bytes_with_bom(self):
        assert parse(b"\xef\xbb\xbf<a>x</a>").content == "x"

    def test_bytes_with_declared_encoding(self):
        data = '<?xml version="1.0" encoding="iso-8859-1"?><a>café</a>'.encode("latin-1")
        assert parse(data).content == "café"

    def test_text_stream(self):
        assert parse(io.StringIO("<a><b/></a>")).children[0].name == "b"

    def test_binary_stream(self):
        assert parse(io.BytesIO(b"<a>y</a>")).content == "y"

    def test_path(self, tmp_path):
        path = tmp_path / "doc.xml"
        path.write_text("<a>z</a>", encoding="utf-8")
        assert parse(path).content == "z"

    def test_parse_file(self, tmp_path):
        path = tmp_path / "doc.xml"
        path.write_bytes("<a>ü</a>".encode("latin-1"))
        assert parse_file(str(path), encoding="latin-1").content == "ü"

    def test_missing_file(self, tmp_path):
        with pytest.raises(XmlIoError):
            parse_file(tmp_path / "missing.xml")

    def test_parse_file_with_bom_and_explicit_encoding(self, tmp_path):
        path = tmp_path / "bom.xml"
        path.write_bytes(b"\xef\xbb\xbf<a>x</a>")

        assert parse_file(path).content == "x"
        assert parse_file(path, encoding="utf-8").content == "x"

    def test_undecodable_text_stream(self, tmp_path):
        path = tmp_path / "bad.xml"
        path.write_bytes(b"<a>\xff</a>")

        with open(path, encoding="utf-8") as stream:
            with pytest.raises(XmlIoError, match="cannot decode stream"):
                parse(stream)

    def test_unsupported_type(self):
        with pytest.raises(TypeError, match="Unsupported input type: int"):
            parse(42)  # type: ignore[arg-type]


class TestLogging:
    """Test structured log records."""

    def test_success_records(self, caplog):
        caplog.set_level(logging.INFO, logger="xml_node_parser")
        XmlNodeParser(correlation_id="abc").parse_string("<a/>")

        messages = [record.getMessage() for record in caplog.records]
        assert "Starting parse operation" in messages
        assert "Parse operation completed" in messages
        assert all(record.correlation_id == "abc" for record in caplog.records)

    def test_failure_record(self, caplog):
        caplog.set_level(logging.INFO, logger="xml_node_parser")
        with pytest.raises(TagMismatchError):
            XmlNodeParser().parse_string("<a></b>")

        failures = [r for r in caplog.records if r.getMessage() == "Parse operation failed"]
        assert len(failures) == 1
        assert failures[0].levelno == logging.INFO
        assert failures[0].error_kind == "TAG_MISMATCH"

    def test_rejected_document_logs_nothing_at_warning(self, caplog):
        caplog.set_level(logging.DEBUG, logger="xml_node_parser")
        with pytest.raises(XMLSyntaxError):
            parse_string("<a>")
        with pytest.raises(XmlIoError):
            parse_file("no-such-dir/missing.xml")

        assert [r for r in caplog.records if r.levelno >= logging.WARNING] == []
