"""Main CLI entry point for the xml-node-parser command-line tool.

Reads one document from disk, then prints its rendered tree or the content of
the nodes with a given name.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from xml_node_parser import __version__
from xml_node_parser.api.parser import XmlNodeParser
from xml_node_parser.shared.config import ConfigError, ParserConfig
from xml_node_parser.shared.errors import XmlParseError
from xml_node_parser.shared.logging import configure_logging, get_logger
from xml_node_parser.tree.node import XmlNode
from xml_node_parser.tree.render import render

CREDITS = """\
xml-node-parser
Developed as a simple educational XML parser.
Grammar-driven parsing into an immutable node tree.
"""


class CLIError(Exception):
    """Raised when a command-line input such as a config file is unusable."""


def load_config(config_path: Optional[Path]) -> ParserConfig:
    """Load a parser configuration from a JSON file, or the defaults."""
    if config_path is None:
        return ParserConfig()
    try:
        return ParserConfig.from_json(config_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise CLIError(f"cannot read config file {config_path}: {e.strerror or e}") from e
    except ConfigError as e:
        raise CLIError(f"invalid config file {config_path}: {e}") from e


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="xml-node-parser",
        description="Parse XML documents into a node tree and query it by name"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser(
        "parse", help="Parse an XML file and print its tree"
    )
    parse_parser.add_argument("path", type=Path, help="Path to the XML file")
    query_group = parse_parser.add_mutually_exclusive_group()
    query_group.add_argument(
        "--get", "-get",
        metavar="TAG",
        help="Print the contents of the first node with the given tag"
    )
    query_group.add_argument(
        "--get-all", "-get_all",
        dest="get_all",
        metavar="TAG",
        help="List the contents of all nodes with the given tag"
    )
    parse_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Parser configuration file (JSON)"
    )
    parse_parser.add_argument(
        "--encoding",
        help="Source encoding (detected when omitted)"
    )

    subparsers.add_parser("credits", help="Show authorship information")

    return parser


def format_first(tree: XmlNode, tag: str) -> str:
    """Format the result of a single-node lookup."""
    content = tree.find_content(tag)
    if content is None:
        return f"No <{tag}> node found."
    return f"Found <{tag}> is : {content}"


def format_all(tree: XmlNode, tag: str) -> str:
    """Format the contents of every node named ``tag``, numbered from 1."""
    nodes = tree.find_all(tag)
    lines = [f"Found {len(nodes)} <{tag}> tag(s):"]
    for index, node in enumerate(nodes, start=1):
        lines.append(f"{index}. {node.content or 'None'}")
    return "\n".join(lines)


def cmd_parse(args: argparse.Namespace) -> int:
    """Handle parse command."""
    config = load_config(args.config)
    if not (args.verbose or args.quiet):
        configure_logging(config.global_.logging_level)
    parser = XmlNodeParser(config)
    tree = parser.parse_file(args.path, encoding=args.encoding)

    if args.get is not None:
        print(format_first(tree, args.get))
    elif args.get_all is not None:
        print(format_all(tree, args.get_all))
    else:
        print(render(tree, config.tree.render_indent))
    return 0


def cmd_credits(args: argparse.Namespace) -> int:
    """Handle credits command."""
    print(CREDITS)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")

    logger = get_logger(__name__, None, "cli")
    try:
        if args.command == "parse":
            return cmd_parse(args)
        if args.command == "credits":
            return cmd_credits(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    except (XmlParseError, CLIError) as e:
        logger.debug("Command failed", extra={"command": args.command})
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
