"""Tree building from grammar parse traces.

This module walks the :class:`Match` trace produced by the grammar and turns
every element production into an :class:`XmlNode`, checking that each
element's closing tag repeats its opening tag name.
"""

import time
from typing import List, Optional, Tuple

from xml_node_parser.grammar.rules import Match, Rule
from xml_node_parser.shared.errors import InternalParserError, TagMismatchError
from xml_node_parser.shared.logging import get_logger
from xml_node_parser.shared.result import ParseStatistics
from xml_node_parser.tree.node import Attribute, XmlNode


class XmlTreeBuilder:
    """Builds an immutable node tree from a grammar trace.

    The builder trusts the grammar for syntax. Tag-name agreement is the one
    structural rule it enforces itself; any production it does not expect is
    reported as :class:`InternalParserError`.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "tree_builder")

    def build(self, trace: Match) -> XmlNode:
        """Build the tree for a document or element match.

        Args:
            trace: Match for :attr:`Rule.XML` or :attr:`Rule.ELEMENT`

        Returns:
            Root node of the document

        Raises:
            TagMismatchError: If a closing tag name differs from its opening tag
            InternalParserError: If the trace contains an unexpected production
        """
        root, _ = self.build_with_statistics(trace)
        return root

    def build_with_statistics(self, trace: Match) -> Tuple[XmlNode, ParseStatistics]:
        """Build the tree and report node counts and depth."""
        start_time = time.time()
        statistics = ParseStatistics(characters_processed=len(trace.span))

        root = self._build_element(self._root_element(trace), 1, statistics)

        statistics.processing_time_ms = (time.time() - start_time) * 1000
        self.logger.debug(
            "Tree built",
            extra={
                "nodes_built": statistics.nodes_built,
                "max_depth": statistics.max_depth,
            }
        )
        return root, statistics

    def _root_element(self, trace: Match) -> Match:
        if trace.rule is Rule.ELEMENT:
            return trace
        if trace.rule is not Rule.XML:
            raise InternalParserError(f"cannot build a tree from rule {trace.rule.name}")

        root: Optional[Match] = None
        for child in trace.children:
            if child.rule is Rule.DECLARATION and root is None:
                continue
            if child.rule is Rule.ELEMENT and root is None:
                root = child
                continue
            raise InternalParserError(
                f"unexpected rule {child.rule.name} at document level"
            )
        if root is None:
            raise InternalParserError("document match has no root element")
        return root

    def _build_element(
        self, match: Match, depth: int, statistics: ParseStatistics
    ) -> XmlNode:
        statistics.elements += 1
        statistics.nodes_built += 1
        statistics.max_depth = max(statistics.max_depth, depth)

        if not match.children:
            raise InternalParserError("element match has no tag")
        tag = match.children[0]

        if tag.rule is Rule.EMPTY_ELEMENT_TAG:
            name, attributes = self._read_tag(tag)
            return XmlNode.element(name, attributes=attributes)
        if tag.rule is not Rule.OPENING_TAG:
            raise InternalParserError(f"unexpected rule {tag.rule.name} opening an element")

        name, attributes = self._read_tag(tag)
        children: List[XmlNode] = []
        content_parts: List[str] = []
        closing: Optional[Match] = None

        for item in match.children[1:]:
            if closing is not None:
                raise InternalParserError(
                    f"unexpected rule {item.rule.name} after closing tag of <{name}>"
                )
            if item.rule is Rule.CONTENT:
                text = item.text.strip()
                if text:
                    content_parts.append(text)
            elif item.rule is Rule.ELEMENT:
                children.append(self._build_element(item, depth + 1, statistics))
            elif item.rule is Rule.COMMENT:
                children.append(XmlNode.comment(self._body(item, Rule.COMMENT_TEXT)))
                statistics.comments += 1
                statistics.nodes_built += 1
            elif item.rule is Rule.CDATA:
                children.append(XmlNode.cdata(self._body(item, Rule.CDATA_TEXT)))
                statistics.cdata_sections += 1
                statistics.nodes_built += 1
            elif item.rule is Rule.CLOSING_TAG:
                closing = item
            else:
                raise InternalParserError(
                    f"unexpected rule {item.rule.name} inside element <{name}>"
                )

        if closing is None:
            raise InternalParserError(f"element <{name}> has no closing tag")

        ending = self._tag_name(closing)
        if ending != name:
            self.logger.debug(
                "Closing tag does not match opening tag",
                extra={"opening": name, "ending": ending}
            )
            raise TagMismatchError(name, ending, tag.position, closing.position)

        return XmlNode.element(name, "".join(content_parts), attributes, children)

    def _read_tag(self, tag: Match) -> Tuple[str, List[Attribute]]:
        name = self._tag_name(tag)
        attributes: List[Attribute] = []
        for attribute in tag.children[1:]:
            if attribute.rule is not Rule.ATTRIBUTE:
                raise InternalParserError(
                    f"unexpected rule {attribute.rule.name} in tag <{name}>"
                )
            key = attribute.first(Rule.ATTRIBUTE_NAME)
            value = attribute.first(Rule.ATTRIBUTE_VALUE)
            if key is None or value is None:
                raise InternalParserError(f"incomplete attribute in tag <{name}>")
            attributes.append((key.text, value.text))
        return name, attributes

    def _tag_name(self, tag: Match) -> str:
        if not tag.children or tag.children[0].rule is not Rule.TAG_NAME:
            raise InternalParserError(f"{tag.rule.name} match has no tag name")
        return tag.children[0].text

    def _body(self, match: Match, rule: Rule) -> str:
        body = match.first(rule)
        if body is None:
            raise InternalParserError(f"{match.rule.name} match has no body")
        return body.text
