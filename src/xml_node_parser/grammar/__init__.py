"""Grammar layer for the XML node parser.

This module turns raw document text into a parse trace: a tree of rule
matches with source spans, or a positioned syntax error.

Key Components:
    XMLGrammar: Recursive-descent grammar, one method per rule
    Match: A matched rule with its span and nested matches
    Rule: Enumeration of grammar rules
    Span: Half-open source offset range
"""

from .parser import XMLGrammar, parse_trace
from .rules import Match, Rule, Span

__all__ = [
    "Match",
    "Rule",
    "Span",
    "XMLGrammar",
    "parse_trace",
]
