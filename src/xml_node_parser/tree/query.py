"""Depth-first queries over a document tree.

All traversals are pre-order: a node is visited before its children, and
children are visited left to right, which is document order. Queries only
read the tree.
"""

from typing import TYPE_CHECKING, Iterator, List, Optional

if TYPE_CHECKING:
    from xml_node_parser.tree.node import XmlNode


def iter_preorder(root: "XmlNode") -> Iterator["XmlNode"]:
    """Yield ``root`` and then every descendant in document order."""
    yield root
    for child in root.children:
        yield from iter_preorder(child)


def find_first(root: "XmlNode", name: str) -> Optional["XmlNode"]:
    """Find the first node named ``name``, ``root`` included.

    Args:
        root: Node to start the search from
        name: Node name to look for, e.g. ``"item"`` or ``"#comment"``

    Returns:
        The first matching node in document order, or None
    """
    return next((node for node in iter_preorder(root) if node.name == name), None)


def find_all(root: "XmlNode", name: str) -> List["XmlNode"]:
    """Find every node named ``name`` in document order.

    Args:
        root: Node to start the search from
        name: Node name to look for

    Returns:
        Matching nodes, ``root`` first if it matches; empty if none do
    """
    return [node for node in iter_preorder(root) if node.name == name]


def find_content(root: "XmlNode", name: str) -> Optional[str]:
    """Return the content of the first node named ``name`` with non-empty content.

    Nodes with the right name but no text of their own are skipped, so
    ``<a><b/><b>x</b></a>`` yields ``"x"`` for ``"b"``.
    """
    for node in iter_preorder(root):
        if node.name == name and node.content:
            return node.content
    return None
