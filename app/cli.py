from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from adapters.filesystem.event_repository import FileSystemEventRepository
from adapters.slots.linear import LinearSlotMetrics
from app.config import LayoutSettings, load_settings
from app.layout_wiring import build_accessors, build_layout_service
from domain.models import EventRecord, LayoutAlgorithm, LayoutValidationError, StyledEvent

app = typer.Typer(no_args_is_help=True)
console = Console()


def _layout_day(
    events: list[EventRecord], settings: LayoutSettings, day: date | None
) -> list[StyledEvent]:
    if not events:
        return []
    first_start = min(event.start for event in events)
    slot_metrics = LinearSlotMetrics.for_day(
        day or first_start.date(),
        settings.day_start,
        settings.day_end,
        tz=first_start.tzinfo,
    )
    service = build_layout_service(settings)
    return service.get_styled_events(
        events, accessors=build_accessors(settings), slot_metrics=slot_metrics
    )


def _render_table(title: str, styled: list[StyledEvent]) -> Table:
    table = Table(title=title)
    for column in ("event", "start", "end", "top", "height", "width", "xOffset", "zIndex"):
        table.add_column(column, justify="left" if column == "event" else "right")
    for item in styled:
        event = item.event
        style = item.style
        table.add_row(
            event.title or event.id or "-",
            event.start.strftime("%H:%M"),
            event.end.strftime("%H:%M"),
            f"{style.top:.2f}",
            f"{style.height:.2f}",
            f"{style.width:.2f}",
            f"{style.x_offset:.2f}",
            str(style.z_index),
        )
    return table


@app.command("layout")
def layout(
    input_path: Path = typer.Argument(..., help="Events JSON file or directory of files."),
    output_dir: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Directory to write styled event JSON files."
    ),
    algorithm: Optional[LayoutAlgorithm] = typer.Option(
        None, help="Layout algorithm; defaults to the configured one."
    ),
    day: Optional[str] = typer.Option(
        None, help="Day to lay out (YYYY-MM-DD); defaults to the day of the earliest event."
    ),
    config: Optional[Path] = typer.Option(None, help="YAML config file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log layout decisions."),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        settings = load_settings(config).layout
        if algorithm is not None:
            settings = settings.model_copy(update={"algorithm": algorithm})
        target_day = date.fromisoformat(day) if day else None
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]Invalid configuration:[/] {exc}")
        raise typer.Exit(code=1) from exc

    repository = FileSystemEventRepository()
    if not input_path.exists():
        console.print(f"[red]File not found:[/] {input_path}")
        raise typer.Exit(code=1)

    try:
        if input_path.is_dir():
            pairs = repository.load_all_with_paths(input_path)
        else:
            pairs = [(input_path, repository.load(input_path))]
    except ValueError as exc:
        console.print(f"[red]Invalid events file:[/] {exc}")
        raise typer.Exit(code=1) from exc

    if not pairs:
        console.print(f"[yellow]No event files found in {input_path}[/]")
        raise typer.Exit(code=0)

    for path, events in pairs:
        try:
            styled = _layout_day(events, settings, target_day)
        except LayoutValidationError as exc:
            console.print(f"[red]Layout failed for {path}:[/] {exc}")
            raise typer.Exit(code=1) from exc

        if output_dir is None:
            console.print(_render_table(f"{path.name} ({settings.algorithm.value})", styled))
            continue
        target_path = output_dir / f"{path.stem}.layout.json"
        repository.save_styled(styled, target_path)
        console.print(f"[green]Wrote[/] {target_path}")


@app.command("validate")
def validate(input_path: Path = typer.Argument(..., help="Events file to validate.")) -> None:
    if not input_path.exists():
        console.print(f"[red]File not found:[/] {input_path}")
        raise typer.Exit(code=1)

    try:
        events = FileSystemEventRepository().load(input_path)
    except Exception as exc:  # noqa: BLE001
        console.print(f"[red]Validation failed:[/] {exc}")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Valid events file ({len(events)} events):[/] {input_path}")


if __name__ == "__main__":
    app()
