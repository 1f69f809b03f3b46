"""
Semantic Log Forensic CLI
=========================

Inspect session documents saved on disk.

COMMANDS:
- tree:  Render a document as a semantic tree (text or html)
- list:  List document files in a log directory, newest first
- show:  Pretty-print the N-th newest document
- demo:  Run the bundled e-commerce scenario and print its document

USAGE:
    python -m semlog.forensic [COMMAND] [ARGS]
    semlog tree --depth=5 --threshold=10ms trace.json
"""
from __future__ import annotations
from typing import List, Optional
import argparse
import json
import logging
import sys

from .config import DEFAULT_MAX_LINES, DEFAULT_TREE_DEPTH, LoggerConfig
from .contracts.errors import SemanticLogError
from .demo import run_ecommerce_scenario
from .logfiles import list_log_files, load_document
from .observability import setup_logger
from .session import SemanticLogger
from .stree import HtmlRenderer, LogDataParser, RenderConfig, TreeRenderer, parse_threshold

logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"must be a number, got: {value}") from None
    if number < 0:
        raise argparse.ArgumentTypeError("must be 0 or greater")
    return number


def _threshold(value: str) -> float:
    try:
        return parse_threshold(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def cmd_tree(args) -> int:
    """Render a document file as a tree."""
    document = load_document(args.file)
    parser = LogDataParser(LoggerConfig.from_env().time_fields)
    config = RenderConfig(
        max_depth=args.depth,
        expand_kinds=tuple(args.expand or ()),
        time_threshold=args.threshold,
        show_full_tree=args.full,
        max_lines=args.lines,
    )

    if args.format == "html":
        tree = parser.parse(document)
        sys.stdout.write(HtmlRenderer().render(tree, config))
        return 0

    print(TreeRenderer(parser).render(document, config))
    return 0


def cmd_list(args) -> int:
    """List available document files."""
    files = list_log_files(args.log_dir, args.pattern)
    if not files:
        print(f"No semantic log files found in directory: {args.log_dir}")
        return 0

    print("Available semantic log files:\n")
    for info in files:
        print(f"  * {info.name} ({info.size:,} bytes, {info.modified_at:%Y-%m-%d %H:%M:%S})")
    return 0


def cmd_show(args) -> int:
    """Pretty-print the N-th newest document (1 = newest)."""
    files = list_log_files(args.log_dir, args.pattern)
    if args.index < 1 or args.index > len(files):
        print(f"Error: index {args.index} out of range (found {len(files)} files)", file=sys.stderr)
        return 1

    info = files[args.index - 1]
    document = load_document(info.path)
    print(f"# {info.name}")
    print(json.dumps(document, indent=2, ensure_ascii=False))
    return 0


def cmd_demo(args) -> int:
    """Run the e-commerce scenario."""
    document = run_ecommerce_scenario(SemanticLogger(LoggerConfig.from_env().schema_ref))
    output = document.to_json()

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output + "\n")
        print(f"[*] Wrote {args.output}")
        return 0

    print(output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    config = LoggerConfig.from_env()

    parser = argparse.ArgumentParser(prog="semlog", description="Semantic Log Forensic CLI")
    subparsers = parser.add_subparsers(dest="command")

    tree_parser = subparsers.add_parser("tree", help="Render a document as a tree")
    tree_parser.add_argument("file", help="Path to a session document (JSON)")
    tree_parser.add_argument("-d", "--depth", type=_non_negative_int, default=DEFAULT_TREE_DEPTH,
                             help="Maximum tree depth to display (default: 2)")
    tree_parser.add_argument("-e", "--expand", action="append", metavar="KIND",
                             help="Expand this kind beyond the depth limit (repeatable)")
    tree_parser.add_argument("-t", "--threshold", type=_threshold, default=0.0,
                             help="Hide nodes faster than this (e.g. 10ms, 0.5s)")
    tree_parser.add_argument("-l", "--lines", type=_non_negative_int, default=DEFAULT_MAX_LINES,
                             help="Items shown for headers/params (default: 5, 0 = no limit)")
    tree_parser.add_argument("--format", choices=("text", "html"), default="text")
    tree_parser.add_argument("-f", "--full", action="store_true", help="Ignore depth limits")

    for name, help_text in (("list", "List document files"), ("show", "Print a document file")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--log-dir", default=config.log_dir, help="Directory holding documents")
        sub.add_argument("--pattern", default=config.log_pattern, help="File glob pattern")
        if name == "show":
            sub.add_argument("--index", type=int, default=1, help="1 = newest")

    demo_parser = subparsers.add_parser("demo", help="Run the e-commerce demo")
    demo_parser.add_argument("-o", "--output", help="Write the document to this file")

    return parser


COMMANDS = {
    "tree": cmd_tree,
    "list": cmd_list,
    "show": cmd_show,
    "demo": cmd_demo,
}


def main(argv: Optional[List[str]] = None) -> int:
    setup_logger()
    parser = build_parser()
    args = parser.parse_args(argv)

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return 0

    try:
        return command(args)
    except SemanticLogError as e:
        logger.debug("command %s failed: %s", args.command, e.code.name)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
