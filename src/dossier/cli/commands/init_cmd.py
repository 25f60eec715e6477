from __future__ import annotations

import argparse

from rich.table import Table

from dossier.application.services.project_service import ProjectService
from dossier.cli.context import CLIContext


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("init", help="Create the Dossier database and file storage directories")
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    result = ProjectService(ctx.paths).init_project()

    for path in result.paths_created:
        ctx.console.print(f"[green]Created[/green] {path}")
    state = "created" if result.schema_created else "up to date"
    ctx.console.print(f"[green]Database {state}[/green] {result.db_path}")

    table = Table(title="Storage")
    table.add_column("Scheme")
    table.add_column("Directory", overflow="fold")
    table.add_row("public://", str(ctx.paths.public_dir))
    table.add_row("private://", str(ctx.paths.private_dir))
    ctx.console.print(table)
    ctx.console.print(f"Archives are written below {ctx.settings.download_dir} and linked from {ctx.settings.base_url}")
    return 0
