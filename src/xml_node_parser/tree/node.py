"""Immutable document tree for the XML node parser.

An :class:`XmlNode` owns its children exclusively and carries no parent
reference; the tree is built bottom-up once and never modified afterwards,
so it can be shared freely between readers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from xml_node_parser.tree import query
from xml_node_parser.tree.render import DEFAULT_INDENT, TreeRenderer

COMMENT_NAME = "#comment"
CDATA_NAME = "#cdata"

Attribute = Tuple[str, str]


class NodeKind(Enum):
    """Kinds of nodes in the document tree."""

    ELEMENT = "element"
    COMMENT = COMMENT_NAME
    CDATA = CDATA_NAME


@dataclass(frozen=True)
class XmlNode:
    """A single node of the parsed document.

    Elements carry a tag name, ordered attributes, their own trimmed text and
    ordered children. Comment and CDATA nodes are leaves named ``#comment``
    and ``#cdata`` whose verbatim body lives in ``content``.
    """

    name: str
    content: str = ""
    attributes: Tuple[Attribute, ...] = ()
    children: Tuple["XmlNode", ...] = ()
    kind: NodeKind = field(default=NodeKind.ELEMENT, compare=False)

    def __post_init__(self) -> None:
        """Freeze sequences and validate kind-specific invariants."""
        object.__setattr__(
            self, "attributes", tuple((str(k), str(v)) for k, v in self.attributes)
        )
        object.__setattr__(self, "children", tuple(self.children))

        if not self.name:
            raise ValueError("Node name cannot be empty")
        if self.kind is NodeKind.ELEMENT:
            if self.name.startswith("#"):
                raise ValueError(f"Element name cannot start with '#': {self.name}")
        else:
            if self.name != self.kind.value:
                raise ValueError(
                    f"{self.kind.name.title()} node must be named {self.kind.value}"
                )
            if self.attributes or self.children:
                raise ValueError(
                    f"{self.kind.value} nodes cannot have attributes or children"
                )
        for child in self.children:
            if not isinstance(child, XmlNode):
                raise TypeError("Child must be an XmlNode instance")

    @classmethod
    def element(
        cls,
        name: str,
        content: str = "",
        attributes: Iterable[Attribute] = (),
        children: Iterable["XmlNode"] = (),
    ) -> "XmlNode":
        """Create an element node."""
        return cls(name, content, tuple(attributes), tuple(children), NodeKind.ELEMENT)

    @classmethod
    def comment(cls, text: str) -> "XmlNode":
        """Create a comment node holding ``text`` verbatim."""
        return cls(COMMENT_NAME, text, kind=NodeKind.COMMENT)

    @classmethod
    def cdata(cls, text: str) -> "XmlNode":
        """Create a CDATA node holding ``text`` verbatim."""
        return cls(CDATA_NAME, text, kind=NodeKind.CDATA)

    @property
    def is_element(self) -> bool:
        return self.kind is NodeKind.ELEMENT

    @property
    def is_comment(self) -> bool:
        return self.kind is NodeKind.COMMENT

    @property
    def is_cdata(self) -> bool:
        return self.kind is NodeKind.CDATA

    @property
    def attribute_map(self) -> Dict[str, str]:
        """Attributes as a dictionary; the first occurrence of a name wins."""
        result: Dict[str, str] = {}
        for key, value in self.attributes:
            result.setdefault(key, value)
        return result

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get attribute value with optional default."""
        for key, value in self.attributes:
            if key == name:
                return value
        return default

    def has_attribute(self, name: str) -> bool:
        """Check if node has specific attribute."""
        return any(key == name for key, _ in self.attributes)

    def iter_preorder(self) -> Iterator["XmlNode"]:
        """Iterate over this node and its descendants in document order."""
        return query.iter_preorder(self)

    def find_first(self, name: str) -> Optional["XmlNode"]:
        """Find the first node named ``name``, this node included."""
        return query.find_first(self, name)

    def find_all(self, name: str) -> List["XmlNode"]:
        """Find all nodes named ``name`` in document order."""
        return query.find_all(self, name)

    def find_content(self, name: str) -> Optional[str]:
        """Content of the first node named ``name`` that has any content."""
        return query.find_content(self, name)

    def render(self, indent: int = DEFAULT_INDENT) -> str:
        """Render this subtree as indented text."""
        return TreeRenderer(indent).render(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary representation."""
        result: Dict[str, Any] = {"name": self.name, "kind": self.kind.name.lower()}
        if self.content:
            result["content"] = self.content
        if self.attributes:
            result["attributes"] = [list(pair) for pair in self.attributes]
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result

    def __str__(self) -> str:
        return self.render()
