"""Tests that parse the sample documents shipped with the test suite."""

from pathlib import Path

import pytest

from xml_node_parser import XMLSyntaxError, parse_file

SAMPLES = Path(__file__).parents[2] / "samples"


class TestSampleDocuments:
    """Parse each sample file end to end."""

    def test_simple(self):
        root = parse_file(SAMPLES / "simple.txt")

        assert root.name == "root"
        assert root.find_content("item") == "Hello there"

    def test_invalid(self):
        with pytest.raises(XMLSyntaxError, match="unterminated element <item>"):
            parse_file(SAMPLES / "invalid.txt")

    def test_two_names(self):
        root = parse_file(SAMPLES / "2names.xml")

        assert root.name == "library"
        assert [node.content for node in root.find_all("name")] == ["bio", ""]
        assert root.find_first("#comment") is root.children[0]
        assert root.find_first("shelf").get_attribute("id") == "1"

    def test_five_names(self):
        root = parse_file(SAMPLES / "5names.xml")

        names = [node.content for node in root.find_all("name")]
        assert names == ["rubber", "metal", "plastic", "timestamp", "timestamp"]
        grades = [node.get_attribute("grade") for node in root.find_all("material")]
        assert grades == ["A", "B", "C"]
        assert root.find_content("#cdata") == "Keep <away> from heat & light"
        assert root.find_first("notes").content == ""
