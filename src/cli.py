"""Command-line interface for script-assist."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import orjson

from bound.serde import read_bound_tree
from completion.provider import CompletionProvider
from completion.resolver import find_node
from errors import ScriptAssistError, TreeFormatError
from hover.provider import HoverProvider
from settings.config import ConfigError, configure_logging, load_config

logger = logging.getLogger(__name__)


def _add_query_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("tree", help="Bound-tree JSON dump produced by the binder")
    parser.add_argument("line", type=int, help="Cursor line")
    parser.add_argument("column", type=int, help="Cursor column")
    parser.add_argument(
        "--config-root",
        default=".",
        help="Directory containing script-assist.toml (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="script-assist")
    subparsers = parser.add_subparsers(dest="command", required=True)

    complete_parser = subparsers.add_parser(
        "complete", help="List completion suggestions at a cursor"
    )
    _add_query_args(complete_parser)

    hover_parser = subparsers.add_parser("hover", help="Show hover text at a cursor")
    _add_query_args(hover_parser)

    return parser


def _write_json(payload: object) -> None:
    sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8"))
    sys.stdout.write("\n")


def _handle_complete(
    tree_path: Path, line: int, column: int, provider: CompletionProvider
) -> int:
    tree = read_bound_tree(tree_path)
    try:
        suggestions = provider.get(tree, line, column)
    except ScriptAssistError:
        logger.exception("Completion failed at (%d, %d) in %s", line, column, tree_path)
        _write_json([])
        return 1
    _write_json([s.model_dump(mode="json") for s in suggestions])
    return 0


def _handle_hover(
    tree_path: Path, line: int, column: int, provider: HoverProvider
) -> int:
    tree = read_bound_tree(tree_path)
    response = provider.get(find_node(tree.unit, line, column))
    _write_json(response.to_dict() if response is not None else None)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(Path(args.config_root).expanduser().resolve())
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    configure_logging(config)

    tree_path = Path(args.tree).expanduser().resolve()
    try:
        if args.command == "complete":
            provider = CompletionProvider(position_base=config.position_base)
            return _handle_complete(tree_path, args.line, args.column, provider)

        if args.command == "hover":
            return _handle_hover(
                tree_path, args.line, args.column, HoverProvider(config.theme)
            )
    except (OSError, TreeFormatError) as exc:
        sys.stderr.write(f"tree: {tree_path}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
