"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Lets the one-shot commands and the `browse` session share tables/panels.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.events import ControllerEvent, EventKind
from core.domain.models import Entity, EntityId, same_id

IMAGE_PLACEHOLDER = "Image not available"


def print_banner(console: Console) -> None:
    """Print the welcome banner (interactive mode only)."""

    title = Text("animal-votes", style="bold cyan")
    subtitle = Text("Browse • Vote • Add animals", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_entities_table(entities: Iterable[Entity], *, current_id: EntityId | None = None) -> Table:
    """Animal list; the current selection is marked and highlighted."""

    table = Table(title="Animals")
    table.add_column("", no_wrap=True, width=1)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Votes", style="green", justify="right")
    for entity in entities:
        active = current_id is not None and same_id(entity.id, current_id)
        table.add_row(
            "›" if active else "",
            str(entity.id),
            entity.name,
            str(entity.votes),
            style="bold reverse" if active else None,
        )
    return table


def build_entity_panel(entity: Entity) -> Panel:
    """Detail card: name, image reference and vote count."""

    body = Text()
    image = entity.image.strip()
    if image:
        body.append("Image: ", style="bold")
        body.append(image + "\n", style="magenta")
    else:
        body.append(IMAGE_PLACEHOLDER + "\n", style="dim italic")
    body.append(f"\n🗳️  {entity.votes} votes", style="bold green")
    return Panel(body, title=Text(entity.name, style="bold yellow"), border_style="yellow")


def build_error_notice(message: str) -> Panel:
    return Panel(Text(message, style="bold red"), border_style="red")


class EventRenderer:
    """Controller listener that renders each outcome on a Rich console.

    `failed` flips to True on any failure event so one-shot commands can turn
    it into a non-zero exit code.
    """

    def __init__(self, console: Console, *, server_url: str, render_list: bool = True) -> None:
        self.console = console
        self.server_url = server_url
        self.render_list = render_list
        self.failed = False

    def __call__(self, event: ControllerEvent) -> None:
        if event.kind.is_failure:
            self.failed = True

        current_id = event.current.id if event.current else None

        if event.kind is EventKind.LIST_LOADED:
            if self.render_list:
                self.console.print(build_entities_table(event.entities, current_id=current_id))
        elif event.kind is EventKind.LIST_LOAD_FAILED:
            self.console.print(
                build_error_notice(
                    f"❌ Error: Make sure the collection server is running at {self.server_url}"
                )
            )
        elif event.kind is EventKind.DETAIL_LOADED and event.entity is not None:
            self.console.print(build_entity_panel(event.entity))
        elif event.kind is EventKind.DETAIL_LOAD_FAILED:
            self.console.print(build_error_notice("Failed to load animal details"))
        elif event.kind is EventKind.VOTE_ADDED and event.entity is not None:
            self.console.print(f"🗳️  {event.entity.name}: {event.entity.votes} votes")
        elif event.kind is EventKind.VOTES_RESET and event.entity is not None:
            self.console.print(f"🔄 {event.entity.name}'s votes were reset to 0")
        elif event.kind is EventKind.ENTITY_CREATED and event.entity is not None:
            self.console.print(f"[green]{event.entity.name} has been added successfully! 🎉[/green]")
        elif event.kind is EventKind.CREATE_FAILED:
            self.console.print(
                build_error_notice("Failed to add animal. Make sure the collection server is running.")
            )
        elif event.kind is EventKind.VALIDATION_FAILED:
            self.console.print(build_error_notice(event.error or "Invalid input"))
