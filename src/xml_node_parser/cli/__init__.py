"""Command-line interface module for the XML node parser.

This module provides the ``xml-node-parser`` tool for printing parsed trees
and looking up node contents by name.
"""

from .main import main

__all__ = ["main"]
