"""Recursive-descent grammar for the accepted XML dialect.

Each grammar rule is implemented by one parsing method. A method receives the
offset where its rule should begin and either returns the :class:`Match` it
produced together with the offset just past it, or raises
:class:`XMLSyntaxError` naming the rule and the position where the input
stopped conforming. There is no recovery: the first failure ends the run.
"""

import re
from typing import List, Optional, Tuple

from xml_node_parser.grammar.rules import Match, Rule, Span
from xml_node_parser.shared.config import GrammarConfig
from xml_node_parser.shared.errors import XMLSyntaxError
from xml_node_parser.shared.logging import get_logger
from xml_node_parser.shared.result import SourcePosition

NAME_PATTERN = re.compile(r"[A-Za-z_:][A-Za-z0-9_:.\-]*")
WHITESPACE = " \t\r\n"

DECLARATION_OPEN = "<?xml"
DECLARATION_CLOSE = "?>"
COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"
CDATA_OPEN = "<![CDATA["
CDATA_CLOSE = "]]>"

MatchResult = Tuple[Match, int]


class _RuleParser:
    """Single run of the grammar over one text buffer."""

    def __init__(self, text: str, config: GrammarConfig) -> None:
        self.text = text
        self.length = len(text)
        self.config = config
        self.quotes = "\"'" if config.allow_single_quotes else "\""

    def error(self, message: str, rule: Rule, offset: int) -> XMLSyntaxError:
        return XMLSyntaxError(
            message, rule=rule, position=SourcePosition.from_offset(self.text, offset)
        )

    def skip_whitespace(self, pos: int) -> int:
        while pos < self.length and self.text[pos] in WHITESPACE:
            pos += 1
        return pos

    def match(self, rule: Rule, start: int, end: int,
              children: Optional[List[Match]] = None) -> Match:
        return Match(rule, Span(start, end), self.text, children or [])

    def parse_xml(self) -> Match:
        children: List[Match] = []
        pos = self.skip_whitespace(0)

        if self.text.startswith("<?", pos):
            declaration, pos = self.parse_declaration(pos)
            children.append(declaration)
            pos = self.skip_whitespace(pos)

        if pos >= self.length:
            raise self.error("document has no root element", Rule.ELEMENT, pos)

        element, pos = self.parse_element(pos, depth=1)
        children.append(element)

        pos = self.skip_whitespace(pos)
        if pos < self.length:
            raise self.error("unexpected content after root element", Rule.XML, pos)

        return self.match(Rule.XML, 0, self.length, children)

    def parse_declaration(self, pos: int) -> MatchResult:
        start = pos
        if not self.config.allow_declaration:
            raise self.error("XML declaration is not allowed", Rule.DECLARATION, pos)

        after_open = pos + len(DECLARATION_OPEN)
        if not (
            self.text.startswith(DECLARATION_OPEN, pos)
            and (
                self.text.startswith(DECLARATION_CLOSE, after_open)
                or (after_open < self.length and self.text[after_open] in WHITESPACE)
            )
        ):
            raise self.error("expected '<?xml' declaration", Rule.DECLARATION, pos)

        end = self.text.find(DECLARATION_CLOSE, after_open)
        if end == -1:
            raise self.error("unterminated XML declaration", Rule.DECLARATION, start)
        return self.match(Rule.DECLARATION, start, end + 2), end + 2

    def parse_element(self, pos: int, depth: int) -> MatchResult:
        start = pos
        if depth > self.config.max_depth:
            raise self.error(
                f"element nesting exceeds maximum depth of {self.config.max_depth}",
                Rule.ELEMENT,
                pos,
            )
        if not self.text.startswith("<", pos) or self.text.startswith("</", pos):
            raise self.error("expected element", Rule.ELEMENT, pos)

        tag, pos = self.parse_start_tag(pos)
        if tag.rule is Rule.EMPTY_ELEMENT_TAG:
            return self.match(Rule.ELEMENT, start, pos, [tag]), pos

        children = [tag]
        while True:
            if pos >= self.length:
                tag_name = tag.children[0].text
                raise self.error(
                    f"unterminated element <{tag_name}>: expected closing tag",
                    Rule.CLOSING_TAG,
                    pos,
                )
            if self.text.startswith("</", pos):
                closing, pos = self.parse_closing_tag(pos)
                children.append(closing)
                break
            if self.text.startswith(COMMENT_OPEN, pos):
                item, pos = self.parse_comment(pos)
            elif self.text.startswith(CDATA_OPEN, pos):
                item, pos = self.parse_cdata(pos)
            elif self.text.startswith("<", pos):
                item, pos = self.parse_element(pos, depth + 1)
            else:
                item, pos = self.parse_content(pos)
            children.append(item)

        return self.match(Rule.ELEMENT, start, pos, children), pos

    def parse_start_tag(self, pos: int) -> MatchResult:
        """Parse an opening tag or an empty element tag."""
        start = pos
        name, pos = self.parse_name(pos + 1, Rule.TAG_NAME)
        children = [name]

        while True:
            after_space = self.skip_whitespace(pos)
            if self.text.startswith("/>", after_space):
                end = after_space + 2
                return self.match(Rule.EMPTY_ELEMENT_TAG, start, end, children), end
            if self.text.startswith(">", after_space):
                end = after_space + 1
                return self.match(Rule.OPENING_TAG, start, end, children), end
            if after_space >= self.length:
                raise self.error(
                    f"unterminated tag <{name.text}>", Rule.OPENING_TAG, after_space
                )
            if after_space == pos:
                raise self.error(
                    "expected whitespace, '>' or '/>'", Rule.OPENING_TAG, pos
                )
            attribute, pos = self.parse_attribute(after_space)
            children.append(attribute)

    def parse_closing_tag(self, pos: int) -> MatchResult:
        start = pos
        name, pos = self.parse_name(pos + 2, Rule.TAG_NAME)
        pos = self.skip_whitespace(pos)
        if not self.text.startswith(">", pos):
            raise self.error(
                f"expected '>' to end closing tag </{name.text}>", Rule.CLOSING_TAG, pos
            )
        return self.match(Rule.CLOSING_TAG, start, pos + 1, [name]), pos + 1

    def parse_attribute(self, pos: int) -> MatchResult:
        start = pos
        name, pos = self.parse_name(pos, Rule.ATTRIBUTE_NAME)

        pos = self.skip_whitespace(pos)
        if not self.text.startswith("=", pos):
            raise self.error(
                f"expected '=' after attribute name '{name.text}'", Rule.ATTRIBUTE, pos
            )
        pos = self.skip_whitespace(pos + 1)

        if pos >= self.length or self.text[pos] not in self.quotes:
            raise self.error("expected quoted attribute value", Rule.ATTRIBUTE_VALUE, pos)
        quote = self.text[pos]
        end = self.text.find(quote, pos + 1)
        if end == -1:
            raise self.error("unterminated attribute value", Rule.ATTRIBUTE_VALUE, pos)
        lt = self.text.find("<", pos + 1, end)
        if lt != -1:
            raise self.error(
                "'<' is not allowed in attribute value", Rule.ATTRIBUTE_VALUE, lt
            )

        value = self.match(Rule.ATTRIBUTE_VALUE, pos + 1, end)
        return self.match(Rule.ATTRIBUTE, start, end + 1, [name, value]), end + 1

    def parse_name(self, pos: int, rule: Rule) -> MatchResult:
        found = NAME_PATTERN.match(self.text, pos)
        if found is None:
            label = rule.name.lower().replace("_", " ")
            raise self.error(f"expected {label}", rule, pos)
        return self.match(rule, pos, found.end()), found.end()

    def parse_comment(self, pos: int) -> MatchResult:
        body_start = pos + len(COMMENT_OPEN)
        end = self.text.find(COMMENT_CLOSE, body_start)
        if end == -1:
            raise self.error("unterminated comment", Rule.COMMENT, pos)
        body = self.match(Rule.COMMENT_TEXT, body_start, end)
        stop = end + len(COMMENT_CLOSE)
        return self.match(Rule.COMMENT, pos, stop, [body]), stop

    def parse_cdata(self, pos: int) -> MatchResult:
        body_start = pos + len(CDATA_OPEN)
        end = self.text.find(CDATA_CLOSE, body_start)
        if end == -1:
            raise self.error("unterminated CDATA section", Rule.CDATA, pos)
        body = self.match(Rule.CDATA_TEXT, body_start, end)
        stop = end + len(CDATA_CLOSE)
        return self.match(Rule.CDATA, pos, stop, [body]), stop

    def parse_content(self, pos: int) -> MatchResult:
        end = self.text.find("<", pos)
        if end == -1:
            end = self.length
        return self.match(Rule.CONTENT, pos, end), end


class XMLGrammar:
    """Grammar entry point producing a parse trace for a whole document.

    Instances hold only configuration, so one grammar may serve any number
    of parse calls, including concurrent ones.
    """

    def __init__(
        self,
        config: Optional[GrammarConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or GrammarConfig()
        self.logger = get_logger(__name__, correlation_id, "xml_grammar")

    def parse(self, text: str) -> Match:
        """Match ``text`` against the ``xml`` rule.

        Args:
            text: Complete document text

        Returns:
            Match for :attr:`Rule.XML` whose children are an optional
            declaration followed by the root element

        Raises:
            XMLSyntaxError: If the text does not conform to the grammar
        """
        try:
            trace = _RuleParser(text, self.config).parse_xml()
        except XMLSyntaxError as e:
            self.logger.debug(
                "Grammar rejected document",
                extra={
                    "rule": e.rule.name if e.rule else None,
                    "offset": e.position.offset if e.position else None,
                }
            )
            raise

        self.logger.debug("Grammar matched document", extra={"length": len(text)})
        return trace


def parse_trace(text: str, config: Optional[GrammarConfig] = None) -> Match:
    """Convenience wrapper returning the parse trace for ``text``."""
    return XMLGrammar(config).parse(text)
