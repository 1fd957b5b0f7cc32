"""Tree layer for the XML node parser.

This module provides the immutable document tree, the builder that creates it
from a grammar trace, and the read-only queries and rendering over it.

Key Components:
    XmlTreeBuilder: Converts parse traces into node trees
    XmlNode: Element, comment or CDATA node with owned children
    NodeKind: Enumeration of node kinds
    find_first / find_all / find_content: Pre-order name lookups
    TreeRenderer / render: Indented text rendering
"""

from .node import CDATA_NAME, COMMENT_NAME, NodeKind, XmlNode
from .builder import XmlTreeBuilder
from .query import find_all, find_content, find_first, iter_preorder
from .render import TreeRenderer, render

__all__ = [
    "CDATA_NAME",
    "COMMENT_NAME",
    "NodeKind",
    "XmlNode",
    "XmlTreeBuilder",
    "find_all",
    "find_content",
    "find_first",
    "iter_preorder",
    "TreeRenderer",
    "render",
]
