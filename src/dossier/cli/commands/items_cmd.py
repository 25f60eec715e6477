from __future__ import annotations

import argparse

from rich.table import Table

from dossier.cli.context import CLIContext


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("items", help="List items and their attached files")
    parser.add_argument("--limit", type=int, default=50)
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    services = ctx.require_services()
    items = services.catalog.list_items(limit=args.limit)

    table = Table(title=f"Items ({len(items)})")
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Languages")
    table.add_column("Files", overflow="fold")

    for item in items:
        files = [
            f"{langcode}:{field_name}:{uri}"
            for langcode, translation in item.translations_by_langcode.items()
            for field_name, uris in translation.files.items()
            for uri in uris
        ]
        table.add_row(item.id, item.title, ", ".join(item.translations()), "\n".join(files))

    ctx.console.print(table)
    return 0
