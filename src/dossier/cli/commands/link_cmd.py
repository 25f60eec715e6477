from __future__ import annotations

import argparse

from dossier.cli.context import CLIContext


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("link", help="Add an external link to an item translation")
    parser.add_argument("item_id")
    parser.add_argument("uri")
    parser.add_argument("--title", default=None)
    parser.add_argument("--lang", required=True)
    parser.add_argument("--field", default=None, help="Links field (default: configured links field)")
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    services = ctx.require_services()
    field_name = services.catalog.links_field_name(args.field)
    delta = services.attachments.add_link(args.item_id, field_name, args.lang, args.uri, title=args.title)
    ctx.console.print(f"[green]Linked[/green] {args.uri} to {args.item_id} [{args.lang}] {field_name}#{delta}")
    return 0
