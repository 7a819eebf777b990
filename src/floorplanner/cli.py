"""Command Line Interface for Floor Planner.

This module provides a small CLI for inspecting plan documents, applying
batches of editing operations to them and upgrading legacy documents.
"""

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .engine.api import apply_operations
from .engine.store import FloorPlanStore
from .engine.validators import find_degenerate_rooms
from .geom.polygon import calculate_room_area
from .io.parser import is_legacy_document, load_plan_file, save_plan_file

app = typer.Typer(
    name="floorplanner",
    help="A CLI tool for multi-floor plan documents",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _load_store(path: Path) -> FloorPlanStore:
    """Load a plan file into a fresh store (legacy documents are upgraded)."""
    store = FloorPlanStore()
    store.load_plan(load_plan_file(path))
    return store


@app.command()
def info(
    plan: Path = typer.Option(..., "--plan", "-p", help="Path to plan JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Show the floors and rooms of a plan."""
    _setup_logging(verbose)
    try:
        store = _load_store(plan)

        console.print(f"[bold]Plan: {store.plan_name}[/bold]")
        console.print(f"Default ceiling height: {store.default_ceiling_height} ft")
        console.print()

        floor_table = Table(title="Floors")
        floor_table.add_column("Floor ID", style="cyan")
        floor_table.add_column("Name", style="green")
        floor_table.add_column("Level", justify="center")
        floor_table.add_column("Rooms", justify="center")
        floor_table.add_column("Area (sq ft)", justify="right")

        for floor in store.floors:
            area = sum(calculate_room_area(room) for room in floor.rooms)
            marker = " *" if floor.id == store.current_floor_id else ""
            floor_table.add_row(
                floor.id, floor.name + marker, str(floor.level), str(len(floor.rooms)), f"{area:.1f}"
            )

        console.print(floor_table)

        for floor in store.floors:
            if not floor.rooms:
                continue
            room_table = Table(title=f"Rooms on {floor.name}")
            room_table.add_column("Label", style="green")
            room_table.add_column("Type", style="cyan")
            room_table.add_column("Shape")
            room_table.add_column("Size", justify="center")
            room_table.add_column("Area", justify="right")

            for room in floor.rooms:
                room_table.add_row(
                    room.label,
                    room.type.value,
                    room.shape.value,
                    f"{room.size.width:g} x {room.size.height:g}",
                    f"{calculate_room_area(room):.1f}",
                )
            console.print(room_table)

        degenerate = find_degenerate_rooms(store.plan)
        if degenerate:
            console.print(f"\n[yellow]Degenerate polygon rooms: {len(degenerate)}[/yellow]")
            for room in degenerate:
                console.print(f"  {room.label} ({room.id})")

    except FileNotFoundError as e:
        console.print(f"[red]Error: File not found - {e}[/red]")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: Invalid JSON - {e}[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def apply(
    plan: Path = typer.Option(..., "--plan", "-p", help="Path to plan JSON file"),
    operations: Path = typer.Option(..., "--ops", help="Path to operations JSON file"),
    output: Path = typer.Option(..., "--out", help="Path to output plan JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Apply a list of operations to a plan and save the result."""
    _setup_logging(verbose)
    try:
        store = _load_store(plan)
        console.print(f"[green]✓[/green] Loaded plan from {plan}")

        with open(operations, encoding="utf-8") as f:
            operations_data = json.load(f)
        if isinstance(operations_data, dict):
            operations_data = [operations_data]

        results = apply_operations(store, operations_data)

        table = Table()
        table.add_column("#", justify="right")
        table.add_column("Operation", style="cyan")
        table.add_column("Status", justify="center")
        table.add_column("Detail")

        for result in results:
            operation = result["operation"]
            name = operation.get("op") or operation.get("type") if isinstance(operation, dict) else "?"
            if result["success"]:
                detail = "" if result["result"] is None else str(result["result"])
                table.add_row(str(result["operation_index"] + 1), str(name), "[green]ok[/green]", detail)
            else:
                table.add_row(
                    str(result["operation_index"] + 1), str(name), "[red]failed[/red]", result["error"]
                )
        console.print(table)

        successful = sum(1 for r in results if r["success"])
        console.print(f"Applied {successful}/{len(results)} operations successfully")

        save_plan_file(store.export_plan(), output)
        console.print(f"[green]✓[/green] Plan saved to {output}")

        if successful < len(results):
            raise typer.Exit(1)

    except FileNotFoundError as e:
        console.print(f"[red]Error: File not found - {e}[/red]")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: Invalid JSON - {e}[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def migrate(
    plan: Path = typer.Option(..., "--plan", "-p", help="Path to plan JSON file"),
    output: Path = typer.Option(..., "--out", help="Path to output plan JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Rewrite a plan document in the multi-floor format."""
    _setup_logging(verbose)
    try:
        data = load_plan_file(plan)
        legacy = is_legacy_document(data)

        store = FloorPlanStore()
        store.load_plan(data)
        save_plan_file(store.export_plan(), output)

        if legacy:
            console.print(f"[green]✓[/green] Upgraded legacy plan to {len(store.floors)} floor")
        else:
            console.print("[blue]ℹ[/blue] Plan already uses the multi-floor format")
        console.print(f"[green]✓[/green] Plan saved to {output}")

    except FileNotFoundError as e:
        console.print(f"[red]Error: File not found - {e}[/red]")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: Invalid JSON - {e}[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
