"""
dashboard/main.py -- Command-line entry point for inspecting and editing
a saved dashboard layout without the UI.

Usage::

    dashboard-layout show
    dashboard-layout apply '{"type": "resize_panel", "panel_id": "activity-panel", "size": 40}'
    dashboard-layout validate --file ./layout.json
    dashboard-layout reset
    dashboard-layout kinds

Exit codes: 0 success, 1 invalid layout or unknown panel kind,
2 malformed action.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from pydantic import ValidationError

from dashboard.paths import get_layout_path, get_registry_path
from layout_engine.actions import AddPanelAction, parse_action, reduce
from layout_engine.binding import format_tree
from layout_engine.defaults import default_layout
from layout_engine.errors import InvalidLayoutError, LayoutLoadError
from layout_engine.models.validators import validate_layout
from layout_engine.persistence import JsonFileGateway
from layout_engine.registry import PanelRegistry, default_registry

logger = logging.getLogger("dashboard")


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging for the command-line tool."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dashboard-layout",
        description="Inspect and edit a saved dashboard layout.",
    )
    parser.add_argument("--file", help="Layout file (default: user data directory)")
    parser.add_argument("--registry", help="JSON file with panel definitions (default: built-in kinds)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("show", help="Print the layout outline")
    apply_p = sub.add_parser("apply", help="Apply one JSON action and save")
    apply_p.add_argument("action", help="Action as a JSON object")
    sub.add_parser("validate", help="Report invariant violations")
    sub.add_parser("reset", help="Overwrite with the default layout")
    sub.add_parser("kinds", help="List registered panel kinds")
    return parser


def _load_registry(path: str | None) -> PanelRegistry:
    path = path or get_registry_path()
    if os.path.exists(path):
        return PanelRegistry.from_json_file(path)
    return default_registry()


def main(argv: list[str] | None = None) -> int:
    """Run the layout tool.  Returns the process exit code."""
    args = _build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    registry = _load_registry(args.registry)
    gateway = JsonFileGateway(args.file or get_layout_path())

    if args.command == "kinds":
        for definition in registry:
            print(f"{definition.kind:<20} {definition.category:<10} {definition.display_name}")
        return 0

    if args.command == "reset":
        gateway.save(default_layout())
        print(f"Default layout written to {gateway.path}")
        return 0

    try:
        root = gateway.load() or default_layout()
    except LayoutLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.command == "show":
        print(format_tree(root))
        return 0

    if args.command == "validate":
        issues = validate_layout(root)
        for issue in issues:
            print(f"  - {issue}")
        if issues:
            print(f"{len(issues)} issue(s) found.")
            return 1
        print("Layout is valid.")
        return 0

    # apply
    try:
        action = parse_action(json.loads(args.action))
    except (json.JSONDecodeError, ValidationError) as exc:
        print(f"Error: malformed action: {exc}", file=sys.stderr)
        return 2

    if isinstance(action, AddPanelAction) and action.kind not in registry:
        print(f"Error: unknown panel kind '{action.kind}'", file=sys.stderr)
        return 1

    try:
        new_root = reduce(root, action, registry)
    except InvalidLayoutError as exc:
        print(f"Error: invalid layout: {exc}", file=sys.stderr)
        return 1
    if new_root is root:
        print("No change.")
        return 0
    gateway.save(new_root)
    print(format_tree(new_root))
    return 0


if __name__ == "__main__":
    sys.exit(main())
