"""animal-votes CLI (Typer).

Each one-shot command opens its own session: fetch the list, act, render,
exit. Votes live in memory only, so `browse` is the way to keep them for
more than one gesture.
"""

from __future__ import annotations

import asyncio
import shlex
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.collection_client import HttpCollectionClient
from adapters.json_exporter import export_entities_json
from cli.doctor import app as doctor_app
from cli.ui_components import (
    EventRenderer,
    build_entities_table,
    print_banner,
)
from core.config import AppSettings
from core.domain.models import Entity
from core.log import setup_logging
from core.services.controller import VoteController

app = typer.Typer(
    no_args_is_help=True,
    help="Browse, vote for and add animals on a JSON collection server.",
)
app.add_typer(doctor_app, name="doctor")

_console = Console()


def _settings(ctx: typer.Context) -> AppSettings:
    return ctx.obj if isinstance(ctx.obj, AppSettings) else AppSettings()


def _reset_prompt(entity: Entity) -> str:
    return f"Are you sure you want to reset {entity.name}'s votes to 0?"


@asynccontextmanager
async def open_session(
    settings: AppSettings,
    *,
    render_list: bool = True,
) -> AsyncIterator[tuple[VoteController, EventRenderer]]:
    """Wire client, controller and renderer for one session."""

    async with HttpCollectionClient(settings) as client:
        controller = VoteController.from_settings(client, settings)
        renderer = EventRenderer(
            _console,
            server_url=settings.collection_url,
            render_list=render_list,
        )
        controller.add_listener(renderer)
        yield controller, renderer


@app.callback()
def main(
    ctx: typer.Context,
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        help="Collection server base URL (overrides ANIMAL_VOTES_BASE_URL).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    overrides: dict[str, str] = {}
    if base_url:
        overrides["base_url"] = base_url
    try:
        settings = AppSettings(**overrides)
    except ValidationError as exc:
        fields = {str(err["loc"][0]) for err in exc.errors() if err.get("loc")}
        message = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        hint = "'--base-url'" if base_url and "base_url" in fields else "ANIMAL_VOTES_* settings"
        raise typer.BadParameter(message, param_hint=hint) from exc
    setup_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


@app.command("list")
def list_animals(
    ctx: typer.Context,
    json_path: Path | None = typer.Option(
        None,
        "--json",
        help="Also write the fetched list to this JSON file.",
    ),
) -> None:
    """Show every animal."""

    settings = _settings(ctx)

    async def _run() -> bool:
        async with open_session(settings) as (controller, _renderer):
            if not await controller.load_all():
                return False
            if json_path is not None:
                out = export_entities_json(
                    entities=controller.store.entities,
                    output_path=json_path,
                    resource=settings.resource,
                )
                _console.print(f"[green]Saved JSON:[/green] {out}")
            return True

    if not asyncio.run(_run()):
        raise typer.Exit(code=1)


@app.command()
def show(ctx: typer.Context, animal_id: str = typer.Argument(..., help="Animal id.")) -> None:
    """Show the list and the details of one animal."""

    settings = _settings(ctx)

    async def _run() -> bool:
        async with open_session(settings) as (controller, renderer):
            await controller.load_all()
            await controller.select(animal_id)
            return not renderer.failed

    if not asyncio.run(_run()):
        raise typer.Exit(code=1)


@app.command()
def vote(
    ctx: typer.Context,
    animal_id: str = typer.Argument(..., help="Animal id."),
    times: int = typer.Option(1, "--times", "-n", min=1, help="How many votes to add."),
) -> None:
    """Add votes to an animal (in memory only, never saved to the server)."""

    settings = _settings(ctx)

    async def _run() -> bool:
        async with open_session(settings, render_list=False) as (controller, renderer):
            await controller.load_all()
            if await controller.select(animal_id) is None:
                return False
            for _ in range(times):
                controller.add_vote()
            _console.print(build_entities_table(controller.store.entities, current_id=animal_id))
            return not renderer.failed

    if not asyncio.run(_run()):
        raise typer.Exit(code=1)


@app.command()
def reset(
    ctx: typer.Context,
    animal_id: str = typer.Argument(..., help="Animal id."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """Reset an animal's votes to 0 (in memory only)."""

    settings = _settings(ctx)

    def confirm(entity: Entity) -> bool:
        return yes or typer.confirm(_reset_prompt(entity), default=False)

    async def _run() -> bool:
        async with open_session(settings, render_list=False) as (controller, renderer):
            await controller.load_all()
            if await controller.select(animal_id) is None:
                return False
            if not controller.reset_votes(confirm):
                _console.print("[yellow]Reset cancelled.[/yellow]")
            return not renderer.failed

    if not asyncio.run(_run()):
        raise typer.Exit(code=1)


@app.command()
def add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Animal name."),
    image: str = typer.Argument(..., help="Image URL."),
) -> None:
    """Add a new animal to the collection."""

    settings = _settings(ctx)

    async def _run() -> bool:
        async with open_session(settings, render_list=False) as (controller, _renderer):
            created = await controller.create_entity(name, image)
            return created is not None

    if not asyncio.run(_run()):
        raise typer.Exit(code=1)


_BROWSE_HELP = """\
Commands:
  list | ls            show the cached list
  refresh              re-fetch the list from the server
  show ID              select an animal and show its details
  vote [N]             add N votes (default 1) to the selected animal
  reset                reset the selected animal's votes (asks first)
  add [NAME IMAGE]     add an animal (prompts for missing fields)
  export PATH          write the cached list to a JSON file
  help                 this text
  quit | exit          leave (votes are not saved)
"""


async def _browse_command(
    controller: VoteController,
    settings: AppSettings,
    command: str,
    args: list[str],
) -> bool:
    """Run one browse command; False means leave the session."""

    current_id = controller.current.id if controller.current else None

    if command in ("quit", "exit", "q"):
        return False
    if command == "help":
        _console.print(_BROWSE_HELP)
    elif command in ("list", "ls"):
        _console.print(build_entities_table(controller.store.entities, current_id=current_id))
    elif command == "refresh":
        await controller.load_all()
    elif command in ("show", "select"):
        if not args:
            _console.print("[yellow]Usage: show ID[/yellow]")
        else:
            await controller.select(args[0])
    elif command == "vote":
        if controller.current is None:
            _console.print("[yellow]Select an animal first (show ID).[/yellow]")
            return True
        try:
            times = int(args[0]) if args else 1
        except ValueError:
            _console.print("[yellow]Usage: vote [N][/yellow]")
            return True
        for _ in range(max(times, 0)):
            controller.add_vote()
    elif command == "reset":
        if controller.current is None:
            _console.print("[yellow]Select an animal first (show ID).[/yellow]")
            return True
        confirmed = controller.reset_votes(
            lambda entity: typer.confirm(_reset_prompt(entity), default=False)
        )
        if not confirmed:
            _console.print("[yellow]Reset cancelled.[/yellow]")
    elif command == "add":
        name = args[0] if len(args) > 0 else typer.prompt("Animal name", default="", show_default=False)
        image = args[1] if len(args) > 1 else typer.prompt("Image URL", default="", show_default=False)
        await controller.create_entity(name, image)
    elif command == "export":
        if not args:
            _console.print("[yellow]Usage: export PATH[/yellow]")
        else:
            out = export_entities_json(
                entities=controller.store.entities,
                output_path=Path(args[0]),
                resource=settings.resource,
            )
            _console.print(f"[green]Saved JSON:[/green] {out}")
    else:
        _console.print(f"[yellow]Unknown command: {command}. Type 'help'.[/yellow]")
    return True


@app.command()
def browse(ctx: typer.Context) -> None:
    """Interactive session: the list, selection and votes persist until you quit."""

    settings = _settings(ctx)

    async def _run() -> None:
        async with open_session(settings) as (controller, _renderer):
            print_banner(_console)
            await controller.load_all()
            _console.print("[dim]Type 'help' for commands.[/dim]")
            while True:
                try:
                    line = typer.prompt(">", default="", show_default=False, prompt_suffix=" ")
                except typer.Abort:
                    break
                try:
                    parts = shlex.split(line)
                except ValueError as exc:
                    _console.print(f"[yellow]{exc}[/yellow]")
                    continue
                if not parts:
                    continue
                if not await _browse_command(controller, settings, parts[0].lower(), parts[1:]):
                    break

    asyncio.run(_run())


def run() -> None:
    app()
