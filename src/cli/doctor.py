"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.collection_client import HttpCollectionClient
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.errors import FetchFailed

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_collection(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with HttpCollectionClient(settings) as client:
            entities = await client.list_all()
    except FetchFailed as exc:
        return False, str(exc)
    return True, f"{len(entities)} animals"


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = ctx.obj if isinstance(ctx.obj, AppSettings) else AppSettings()

    table = Table(title="animal-votes Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Resource", "OK", settings.resource)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row(
        "Selection policy",
        "OK",
        "last request wins" if settings.discard_stale_selections else "last response wins",
    )
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    ok_http, detail_http = asyncio.run(_check_collection(settings))
    table.add_row("Collection", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        _console.print(
            f"\n[yellow]Note:[/yellow] start a JSON server exposing /{settings.resource} "
            f"at {settings.base_url}, or run `animal-votes doctor setup`."
        )
        raise typer.Exit(code=1)


@app.command()
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    defaults = AppSettings()
    base_url = typer.prompt("Server base URL", default=defaults.base_url, show_default=True).strip()
    resource = typer.prompt("Collection name", default=defaults.resource, show_default=True).strip()

    if not base_url or not resource:
        raise typer.BadParameter("base URL and collection name are required")

    env_path = write_user_env_vars(
        {
            "ANIMAL_VOTES_BASE_URL": base_url,
            "ANIMAL_VOTES_RESOURCE": resource,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
