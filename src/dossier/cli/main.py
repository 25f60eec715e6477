from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console

from dossier.cli.commands import (
    attach_cmd,
    download_cmd,
    init_cmd,
    items_cmd,
    link_cmd,
    options_cmd,
    web_cmd,
)
from dossier.cli.context import CLIContext
from dossier.core.config import load_paths, load_settings
from dossier.core.errors import DossierError
from dossier.core.logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dossier",
        description="Download selected documents as a file or zip archive",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        default=Path.cwd(),
        help="Project root to use for .dossier data (default: current working directory)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)

    subparsers = parser.add_subparsers(dest="command", required=True)
    init_cmd.register(subparsers)
    attach_cmd.register(subparsers)
    link_cmd.register(subparsers)
    items_cmd.register(subparsers)
    options_cmd.register(subparsers)
    download_cmd.register(subparsers)
    web_cmd.register(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    paths = load_paths(args.project_root)
    ctx = CLIContext(paths=paths, settings=load_settings(), console=console)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 2

    try:
        return handler(args, ctx)
    except DossierError as exc:
        logger.error(str(exc))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
