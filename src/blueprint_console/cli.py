# src/blueprint_console/cli.py
"""
Blueprint console Command Line Interface (CLI).

This module implements the terminal interface using `typer` and `rich`.

Commands
--------
- **serve**: run the web console (FastAPI + Uvicorn), optionally with demo modules.
- **show**: build the demo state in-process and print the containers as a table,
  optionally writing the rendered HTML page to a file.

Usage
-----
    $ bpconsole serve --demo --port 8080
    $ bpconsole show --html blueprint.html
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Annotated

import typer
import uvicorn
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from blueprint_console.api.app import create_app
from blueprint_console.core.settings import load_settings
from blueprint_console.core.snapshots import ContainerSnapshot
from blueprint_console.demo import seed_platform
from blueprint_console.hosting import LocalPlatform
from blueprint_console.plugin import BlueprintConsolePlugin

load_dotenv()

app = typer.Typer(
    help="Blueprint console: inspect dependency-injection containers and their recipes.",
    rich_markup_mode="markdown",
    no_args_is_help=True,
)
console = Console()


# --------------------------------------------------------------------------- #
# Helpers: Rendering
# --------------------------------------------------------------------------- #


def _satisfied_cell(satisfied: bool | None) -> str:
    if satisfied is None:
        return ""
    return "[green]yes[/green]" if satisfied else "[bold red]no[/bold red]"


def _render_containers(snapshots: Sequence[ContainerSnapshot]) -> None:
    """Print one summary table plus one recipe table per container."""
    summary = Table(title="Blueprint containers", show_lines=False)
    summary.add_column("Id", justify="right")
    summary.add_column("Module")
    summary.add_column("Version")
    summary.add_column("State")
    summary.add_column("Last event")
    summary.add_column("Unsatisfied", justify="right")
    summary.add_column("Missing dependencies")

    for snap in snapshots:
        unsatisfied = str(snap.unsatisfied_count)
        if snap.unsatisfied_count:
            unsatisfied = f"[bold red]{unsatisfied}[/bold red]"
        summary.add_row(
            str(snap.module_id),
            snap.module.symbolic_name,
            snap.module.version,
            snap.event_type_name,
            snap.timestamp_date.isoformat(timespec="milliseconds"),
            unsatisfied,
            snap.missing_dependencies_string,
        )
    console.print(summary)

    for snap in snapshots:
        if not snap.recipes:
            continue
        recipes = Table(title=f"{snap.module.symbolic_name} recipes")
        recipes.add_column("Recipe")
        recipes.add_column("Satisfied")
        recipes.add_column("Filter")
        for recipe in snap.recipes:
            recipes.add_row(recipe.name, _satisfied_cell(recipe.satisfied), recipe.selector or "")
        console.print(recipes)
        if snap.cause_stack_trace:
            console.print(Panel(snap.cause_stack_trace.rstrip(), title="Cause", border_style="red"))


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()
def serve(
    host: Annotated[str | None, typer.Option(help="Bind address.")] = None,
    port: Annotated[int | None, typer.Option(help="Bind port.")] = None,
    demo: Annotated[bool, typer.Option("--demo/--no-demo", help="Seed sample modules.")] = False,
) -> None:
    """Run the web console."""
    cfg = load_settings()
    if demo:
        cfg = cfg.model_copy(update={"demo": True})

    bind_host = host or cfg.host
    bind_port = port or cfg.port
    console.print(
        f"[bold]Blueprint console[/bold] on http://{bind_host}:{bind_port}/{cfg.plugin_label}"
    )
    uvicorn.run(
        create_app(settings=cfg),
        host=bind_host,
        port=bind_port,
        log_level=cfg.log_level.lower(),
    )


@app.command()
def show(
    html: Annotated[
        Path | None,
        typer.Option("--html", help="Also write the rendered HTML page to this path."),
    ] = None,
) -> None:
    """Print the demo containers (sample modules in various lifecycle states)."""
    platform = LocalPlatform()
    plugin = BlueprintConsolePlugin(platform)
    plugin.activate()
    try:
        seed_platform(platform)
        snapshots = plugin.snapshot_all()
        _render_containers(snapshots)

        if html is not None:
            try:
                html.write_text(plugin.render(), encoding="utf-8")
            except OSError as e:
                console.print(f"[bold red]Failed to write {html}: {e}[/bold red]")
                raise typer.Exit(code=1) from e
            console.print(Panel(f"Saved to: {html}", title="Page", border_style="green"))
    finally:
        plugin.deactivate()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
