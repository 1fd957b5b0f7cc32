"""Grammar rules and the parse trace they produce.

A successful grammar run yields a tree of :class:`Match` objects, one per
matched rule, each recording the span of source text it consumed. The tree
builder walks this trace; nothing in it is interpreted yet.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, List, Optional

from xml_node_parser.shared.result import SourcePosition


class Rule(Enum):
    """Grammar rules of the accepted XML dialect."""

    XML = auto()                # Whole document: declaration? element
    DECLARATION = auto()        # <?xml ... ?>
    ELEMENT = auto()            # Full element or empty element tag
    OPENING_TAG = auto()        # <name attr="v">
    EMPTY_ELEMENT_TAG = auto()  # <name attr="v"/>
    CLOSING_TAG = auto()        # </name>
    TAG_NAME = auto()           # Element name inside a tag
    ATTRIBUTE = auto()          # name="value"
    ATTRIBUTE_NAME = auto()
    ATTRIBUTE_VALUE = auto()    # Value without its quotes
    COMMENT = auto()            # <!-- ... -->
    COMMENT_TEXT = auto()       # Comment body
    CDATA = auto()              # <![CDATA[ ... ]]>
    CDATA_TEXT = auto()         # CDATA body
    CONTENT = auto()            # Raw text between markup


@dataclass(frozen=True)
class Span:
    """Half-open range ``[start, end)`` of source offsets."""

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span bounds."""
        if self.start < 0:
            raise ValueError("Span start must be >= 0")
        if self.end < self.start:
            raise ValueError("Span end must be >= start")

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(eq=False)
class Match:
    """A matched grammar rule with its span and nested matches."""

    rule: Rule
    span: Span
    source: str = field(repr=False)
    children: List["Match"] = field(default_factory=list)

    @property
    def text(self) -> str:
        """Source text consumed by this match."""
        return self.source[self.span.start:self.span.end]

    @property
    def position(self) -> SourcePosition:
        """Line/column position where this match starts."""
        return SourcePosition.from_offset(self.source, self.span.start)

    def inner(self, rule: Optional[Rule] = None) -> Iterator["Match"]:
        """Iterate over direct children, optionally only those of ``rule``."""
        for child in self.children:
            if rule is None or child.rule is rule:
                yield child

    def first(self, rule: Rule) -> Optional["Match"]:
        """Return the first direct child matching ``rule``."""
        return next(self.inner(rule), None)

    def dump(self, depth: int = 0) -> str:
        """Format the trace for debugging, one rule per line."""
        lines = [f"{'  ' * depth}{self.rule.name.lower()} {self.span.start}..{self.span.end}"]
        lines.extend(child.dump(depth + 1) for child in self.children)
        return "\n".join(lines)
