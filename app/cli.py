from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import orjson
import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from adapters.filesystem.roster_repository import FileSystemRosterRepository
from adapters.layout.age_gap import AgeGapLayoutEngine
from adapters.layout.density import DensityWaveLayoutEngine
from adapters.layout.radial import ContemporariesLayoutEngine
from adapters.layout.timeline import TimelineLayoutEngine
from adapters.layout.year_grid import YearGridLayoutEngine
from app.config import AppSettings, load_settings
from domain.config import ChartConfig
from domain.models import PersonRecord, Size
from domain.services.overlap_arcs import age_gap_caption, outcome_caption
from domain.services.roster_payload import parse_people_payload
from domain.services.ticks import format_year_label

app = typer.Typer(no_args_is_help=True)
console = Console()


def _chart_config(ctx: typer.Context) -> ChartConfig:
    settings: AppSettings = ctx.obj
    return settings.layout.to_chart_config()


def _load_people(path: Path) -> list[PersonRecord]:
    if not path.exists():
        console.print(f"[red]File not found:[/] {path}")
        raise typer.Exit(code=1)
    try:
        people = FileSystemRosterRepository().load(path)
    except ValueError as exc:
        console.print(f"[red]Invalid roster:[/] {exc}")
        raise typer.Exit(code=1) from exc
    if not people:
        console.print(f"[yellow]No people found in {path}[/]")
        raise typer.Exit(code=1)
    return people


def _find(people: list[PersonRecord], name: str) -> PersonRecord:
    for person in people:
        if person.name == name:
            return person
    console.print(f"[red]Person not found:[/] {name}")
    raise typer.Exit(code=1)


def _print_json(payload: dict[str, Any]) -> None:
    console.print_json(orjson.dumps(payload).decode("utf-8"))


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
) -> None:
    ctx.obj = load_settings(config)


@app.command("chart")
def chart(
    ctx: typer.Context,
    roster: Path = typer.Argument(..., help="Roster JSON file."),
    width: float = typer.Option(1280.0, help="Canvas width in pixels."),
    height: float = typer.Option(800.0, help="Canvas height in pixels."),
    as_json: bool = typer.Option(False, "--json", help="Print the full plan as JSON."),
) -> None:
    people = _load_people(roster)
    config = _chart_config(ctx)
    plan = TimelineLayoutEngine(config).build_plan(people, Size(width, height))
    if as_json:
        _print_json(plan.to_dict())
        return

    suffix = config.axis.bce_suffix
    table = Table(
        title=(
            f"{format_year_label(plan.year_range.min_year, suffix)} – "
            f"{format_year_label(plan.year_range.max_year, suffix)}"
            f" (ticks every {plan.tick_interval})"
        )
    )
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Lifespan")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("width", justify="right")
    for bar in plan.bars:
        person = bar.person
        end = (
            "present"
            if person.is_alive
            else format_year_label(person.effective_end(config.current_year), suffix)
        )
        table.add_row(
            f"[{bar.color}]{person.name}[/]",
            person.category,
            f"{format_year_label(person.birth_year, suffix)} – {end}",
            f"{bar.position.x:.1f}",
            f"{bar.position.y:.1f}",
            f"{bar.width:.1f}",
        )
    console.print(table)


@app.command("age-gap")
def age_gap(
    ctx: typer.Context,
    roster: Path = typer.Argument(..., help="Roster JSON file."),
    focal: str = typer.Option(..., help="Name of the selected person."),
) -> None:
    people = _load_people(roster)
    plan = AgeGapLayoutEngine(_chart_config(ctx)).build_plan(people, _find(people, focal))
    _print_json(plan.to_dict())


@app.command("contemporaries")
def contemporaries(
    ctx: typer.Context,
    roster: Path = typer.Argument(..., help="Roster JSON file."),
    focal: str = typer.Option(..., help="Name of the selected person."),
    as_json: bool = typer.Option(False, "--json", help="Print the full plan as JSON."),
) -> None:
    people = _load_people(roster)
    person = _find(people, focal)
    plan = ContemporariesLayoutEngine(_chart_config(ctx)).build_plan(person, people)
    if as_json:
        _print_json(plan.to_dict())
        return
    if plan.is_empty:
        console.print(f"[yellow]No contemporaries for {person.name}[/]")
        return

    table = Table(title=f"Contemporaries of {person.name}")
    table.add_column("Name")
    table.add_column("Radius", justify="right")
    table.add_column("Arc", justify="right")
    table.add_column("Shared years", justify="right")
    table.add_column("Notes")
    for placement in plan.arcs:
        arc = placement.arc
        table.add_row(
            f"[{arc.color}]{arc.person.name}[/]",
            f"{arc.radius:.1f}",
            f"{arc.start_angle:.1f}° – {arc.end_angle:.1f}°",
            str(arc.overlap_years),
            f"{age_gap_caption(arc, person)}; {outcome_caption(arc, person)}",
        )
    console.print(table)


@app.command("density")
def density(
    ctx: typer.Context,
    roster: Path = typer.Argument(..., help="Roster JSON file."),
    focal: Optional[str] = typer.Option(None, help="Highlight this person's lifespan."),
) -> None:
    people = _load_people(roster)
    person = _find(people, focal) if focal else None
    config = _chart_config(ctx)
    plan = DensityWaveLayoutEngine(config).build_plan(people, person)
    peak_label = format_year_label(plan.peak.year, config.axis.bce_suffix)
    console.print(
        f"Peak: [green]{plan.peak.count}[/] alive around {peak_label} "
        f"({len(plan.samples)} samples)"
    )


@app.command("year-grid")
def year_grid(
    ctx: typer.Context,
    roster: Path = typer.Argument(..., help="Roster JSON file with optional events."),
    person_name: str = typer.Option(..., "--person", help="Name of the person."),
    width: float = typer.Option(480.0, help="Available width in pixels."),
    height: float = typer.Option(420.0, help="Available height in pixels."),
) -> None:
    people = _load_people(roster)
    person = _find(people, person_name)
    try:
        events = FileSystemRosterRepository().load_events(roster).get(person.name, [])
    except ValueError as exc:
        console.print(f"[red]Invalid events:[/] {exc}")
        raise typer.Exit(code=1) from exc
    plan = YearGridLayoutEngine(_chart_config(ctx)).build_plan(
        person, events, Size(width, height)
    )
    sizing = plan.sizing
    console.print(
        f"{len(plan.cells)} cells (step {plan.step}) in {sizing.columns}x{sizing.rows}, "
        f"square size [green]{sizing.size}px[/]"
    )


@app.command("validate")
def validate(
    input_path: Path = typer.Argument(
        ..., help="Raw resolver response: a JSON array, optionally fenced."
    ),
) -> None:
    if not input_path.exists():
        console.print(f"[red]File not found:[/] {input_path}")
        raise typer.Exit(code=1)
    try:
        people = parse_people_payload(input_path.read_text(encoding="utf-8"))
    except ValueError as exc:
        console.print(f"[red]Validation failed:[/] {exc}")
        raise typer.Exit(code=1) from exc
    if not people:
        console.print(f"[red]Validation failed:[/] no usable people in {input_path}")
        raise typer.Exit(code=1)
    console.print(f"[green]Valid roster with {len(people)} people:[/] {input_path}")


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address."),
    port: int = typer.Option(8000, help="Bind port."),
) -> None:
    uvicorn.run("app.web_main:app", host=host, port=port)


if __name__ == "__main__":
    app()
