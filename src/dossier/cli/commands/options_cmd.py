from __future__ import annotations

import argparse

from rich.table import Table

from dossier.cli.context import CLIContext


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("options", help="Show formats and languages available for download")
    parser.add_argument("item_ids", nargs="+")
    parser.add_argument("--field", required=True)
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    services = ctx.require_services()
    options = services.download.options(args.item_ids, args.field)

    if options.is_empty:
        ctx.console.print("[red]Couldn't find any file to download![/red]")
        return 0

    table = Table(title="Download options")
    table.add_column("Formats")
    table.add_column("Languages")
    table.add_column("External links", overflow="fold")
    table.add_row(
        "\n".join(f"{fmt} ({options.format_labels.get(fmt) or '-'})" for fmt in options.formats),
        "\n".join(options.languages),
        "\n".join(f"{link.title}: {link.uri}" for link in options.external_links),
    )
    ctx.console.print(table)
    return 0
