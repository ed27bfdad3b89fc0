"""CLI entrypoint for batch diagram rendering."""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from .config.settings import Settings
from .core.exceptions import PMFException
from .diagram.assembler import assemble
from .storage.catalog import InMemoryWorkflowCatalog, JsonWorkflowCatalog
from .utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def build_catalog(settings: Settings) -> InMemoryWorkflowCatalog:
    if settings.catalog_path is not None:
        return JsonWorkflowCatalog.from_path(settings.catalog_path)
    return InMemoryWorkflowCatalog.with_samples()


def cmd_list(catalog: InMemoryWorkflowCatalog, args: argparse.Namespace) -> int:
    for option in catalog.list_options():
        print(f"{option.id}\t{option.title}\t{option.description}")
    return 0


def cmd_render(catalog: InMemoryWorkflowCatalog, args: argparse.Namespace, settings: Settings) -> int:
    data = catalog.require(args.workflow_id)
    overrides = {}
    if args.width is not None:
        overrides["container_width"] = args.width
    if args.height is not None:
        overrides["container_height"] = args.height
    config = settings.layout_config(**overrides)

    expanded = settings.expand_entities and not args.collapsed
    graph = assemble(data, config, expanded)
    print(json.dumps(graph.model_dump(mode="json", by_alias=True), indent=args.indent))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pmf-diagram", description="Workflow diagram renderer")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List workflows in the catalog")

    render = sub.add_parser("render", help="Print the assembled diagram of a workflow as JSON")
    render.add_argument("workflow_id")
    render.add_argument("--collapsed", action="store_true", help="Hide entity chips")
    render.add_argument("--width", type=float, help="Container width")
    render.add_argument("--height", type=float, help="Container height")
    render.add_argument("--indent", type=int, default=2)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = Settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)

    try:
        catalog = build_catalog(settings)
        if args.command == "list":
            return cmd_list(catalog, args)
        return cmd_render(catalog, args, settings)
    except PMFException as exc:
        logger.error("Command failed", extra={"command": args.command, "error": str(exc)})
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
