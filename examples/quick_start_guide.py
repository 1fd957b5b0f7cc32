#!/usr/bin/env python3
"""
Quick Start Guide for the XML Node Parser.

This example parses a small document, queries it by name, renders it and
shows how each kind of failure is reported.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from xml_node_parser import (
    ParserConfig,
    XmlNodeParser,
    XmlParseError,
    parse_string,
)

DOCUMENT = """<?xml version="1.0"?>
<book id="123" genre="fiction">
    <!-- catalogue entry -->
    <title>My Book</title>
    <author>John Doe</author>
    <price currency="USD">19.99</price>
    <blurb><![CDATA[A <bold> story & more]]></blurb>
</book>
"""


def quick_start_example():
    """Parse, query and render a document."""

    print("QUICK START - XML Node Parser")
    print("=" * 30)

    print("\nStep 1: Parsing")
    print("-" * 30)
    result = XmlNodeParser().parse_document(DOCUMENT)
    root = result.root
    print(f"Root <{root.name}> with {len(root.children)} children")
    print(f"Declaration: {result.declaration}")
    print(f"Elements: {result.element_count}, depth: {result.statistics.max_depth}")

    print("\nStep 2: Queries")
    print("-" * 30)
    print(f"Title: {root.find_first('title').content}")
    print(f"Price currency: {root.find_first('price').get_attribute('currency')}")
    print(f"Comment: {root.find_content('#comment')!r}")
    print(f"Blurb: {root.find_content('#cdata')}")

    print("\nStep 3: Rendering")
    print("-" * 30)
    print(root.render())


def error_handling_example():
    """Show the error reported for malformed documents."""

    print("\nError Handling")
    print("-" * 30)
    samples = ["<a><b>x</c></a>", "<a><b></a>", "<a x='1'/>"]
    strict = ParserConfig.strict()
    for text in samples:
        try:
            parse_string(text, config=strict)
            print(f"  {text}: parsed")
        except XmlParseError as e:
            print(f"  {text}: {e.kind.name}: {e}")


def main():
    """Main function."""
    try:
        quick_start_example()
        error_handling_example()

        print("\nAll examples completed successfully!")
        return 0

    except XmlParseError as e:
        print(f"\nExample failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
