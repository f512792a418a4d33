"""Typer CLI application for podscaffold."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Annotated

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from typer import Argument, Exit, Typer

import podscaffold
from podscaffold.cli._prompts import Prompter
from podscaffold.core.actions import ExternalActions
from podscaffold.core.errors import PromptAborted
from podscaffold.core.materializer import TemplateMaterializer
from podscaffold.core.session import ConfigurationSession
from podscaffold.core.values import SystemAmbientSource, ValueProvider

LOG_LEVEL_ENV = "PODSCAFFOLD_LOG_LEVEL"

app = Typer(add_completion=False, context_settings={"help_option_names": ["-h", "--help"]})
_console = Console()


@app.callback()
def main() -> None:
    """podscaffold — configure a pod library template into a new project."""


def _setup_logging() -> None:
    level = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(
        level=level if level in logging.getLevelNamesMapping() else "WARNING",
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def configure(
    project_name: Annotated[
        str | None,
        Argument(help="Name of the library. Asked interactively when omitted.", show_default=False),
    ] = None,
) -> None:
    """Configure the template in the current directory into a new library."""
    _setup_logging()
    root = Path.cwd()

    # Header
    _console.print()
    _console.print(f"[bold cyan]●[/]  podscaffold v{podscaffold.__version__}")
    _console.print("[dim]│[/]")

    prompter = Prompter(_console)
    provider = ValueProvider(SystemAmbientSource(), os.environ)

    try:
        if project_name is None or not project_name.strip():
            project_name = prompter.ask_free_text("What is your library name")
        session = ConfigurationSession(project_name, provider, prompter)
        session.confirm_all()
        variant = session.choose_variant()
    except PromptAborted:
        _console.print("[bold red]Aborted.[/]")
        raise Exit(code=1) from None

    assert session.declarations is not None
    values = session.values()

    _console.print(f"[bold green]◇[/]  Configuring {values.project_name} ({variant.label})...")
    try:
        TemplateMaterializer(root).materialize(values, session.declarations, session.side_effects)
    except FileNotFoundError as exc:
        _console.print(f"[bold red]Error:[/] {escape(str(exc))}")
        raise Exit(code=1) from None

    _console.print(f"[dim]│[/]  {values.project_name}.podspec")
    _console.print(f"[dim]│[/]  {values.project_name}/")
    _console.print("[dim]│[/]")

    ExternalActions(root).run_all(values.project_name)

    _console.print(f"[bold cyan]●[/]  Done! {values.project_name} is ready.")
    _console.print()
