"""Indented text rendering of document trees."""

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from xml_node_parser.tree.node import XmlNode

DEFAULT_INDENT = 2


class TreeRenderer:
    """Render a tree one line per tag, indenting each level by ``indent`` spaces.

    A node renders as its opening line with attributes, its own content one
    level deeper, its children one level deeper, and a closing line.
    """

    def __init__(self, indent: int = DEFAULT_INDENT) -> None:
        if indent < 1:
            raise ValueError("indent must be >= 1")
        self.indent = indent

    def render(self, node: "XmlNode") -> str:
        lines: List[str] = []
        self._render_node(node, 0, lines)
        return "\n".join(lines)

    def _render_node(self, node: "XmlNode", depth: int, lines: List[str]) -> None:
        pad = " " * (self.indent * depth)
        attributes = "".join(f' {key}="{value}"' for key, value in node.attributes)
        lines.append(f"{pad}<{node.name}{attributes}>")

        if node.content:
            inner_pad = " " * (self.indent * (depth + 1))
            for line in node.content.splitlines() or [node.content]:
                lines.append(f"{inner_pad}{line}")

        for child in node.children:
            self._render_node(child, depth + 1, lines)

        lines.append(f"{pad}</{node.name}>")


def render(node: "XmlNode", indent: int = DEFAULT_INDENT) -> str:
    """Render ``node`` and its subtree as indented text."""
    return TreeRenderer(indent).render(node)
