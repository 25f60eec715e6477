from __future__ import annotations

import argparse

from dossier.cli.context import CLIContext
from dossier.domain.models.download import RESULT_KIND_ARCHIVE, SelectionRequest


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("download", help="Resolve selected documents to a file link or zip archive")
    parser.add_argument("item_ids", nargs="+")
    parser.add_argument("--field", required=True)
    parser.add_argument("--format", dest="formats", action="append", default=[])
    parser.add_argument("--lang", dest="languages", action="append", default=[])
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    services = ctx.require_services()
    result = services.download.download(
        SelectionRequest(
            item_ids=args.item_ids,
            field_name=args.field,
            formats=args.formats,
            languages=args.languages,
        )
    )
    if result.kind == RESULT_KIND_ARCHIVE:
        ctx.console.print(f"[green]Archive ready[/green] ({result.entry_count} files) {result.url}")
    else:
        ctx.console.print(f"[green]File ready[/green] {result.url}")
    return 0
