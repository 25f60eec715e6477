from __future__ import annotations

import argparse
from pathlib import Path

from dossier.cli.context import CLIContext


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("attach", help="Attach a local file to an item translation")
    parser.add_argument("item_id")
    parser.add_argument("file", type=Path)
    parser.add_argument("--field", required=True, help="Field machine name, e.g. field_documents")
    parser.add_argument("--lang", required=True, help="Language code of the translation")
    parser.add_argument("--title", default=None, help="Item title when the item is created")
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    services = ctx.require_services()
    result = services.attachments.attach_file(
        args.item_id,
        args.field,
        args.lang,
        args.file,
        title=args.title,
    )
    ctx.console.print(
        f"[green]Attached[/green] {result.stored_file.uri} "
        f"to {result.item_id} [{result.langcode}] {result.field_name}#{result.delta}"
    )
    return 0
