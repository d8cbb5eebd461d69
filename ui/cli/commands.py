"""Typer command handlers."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from core.event_bus import BUDGET_SET, CITY_ADDED, CITY_RENAMED, COMMAND_REJECTED, ROAD_ADDED
from core.orchestrator import Orchestrator, RuntimeBundle
from network.errors import GraphError
from storage.flat_file_store import LoadReport
from ui import render


def _runtime(root: Path | None = None) -> RuntimeBundle:
    bundle = Orchestrator(root=root).build()
    _report_load(bundle.load_report)
    return bundle


def _report_load(report: LoadReport) -> None:
    for error in report.errors:
        typer.echo(
            f"Error parsing {error.file_name} line {error.line_number}: {error.line} ({error.reason})",
            err=True,
        )


def _fail(bundle: RuntimeBundle, command: str, exc: GraphError) -> None:
    bundle.event_bus.emit(
        COMMAND_REJECTED,
        {"command": command, "error": type(exc).__name__, "reason": str(exc)},
    )
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=1)


def run(root: Path | None = None) -> None:
    """Run the interactive menu until the user exits."""
    bundle = _runtime(root)
    bundle.control_loop().run()
    typer.echo("Data saved. Goodbye!")


def show(root: Path | None = None) -> None:
    """Print cities, road matrix and budget matrix."""
    bundle = _runtime(root)
    store = bundle.store
    typer.echo(
        render.render_all(
            store.list_cities(), store.road_matrix(), store.budget_matrix(), bundle.budget_unit
        )
    )


def cities_add(names: list[str], root: Path | None = None) -> None:
    """Add each name in turn; rejected names are reported and skipped."""
    bundle = _runtime(root)
    failures = 0
    for name in names:
        try:
            index = bundle.store.add_city(name)
        except GraphError as exc:
            failures += 1
            bundle.event_bus.emit(
                COMMAND_REJECTED,
                {"command": "add_city", "error": type(exc).__name__, "reason": str(exc), "name": name},
            )
            typer.echo(f"Error: {exc}", err=True)
            continue
        city = bundle.store.find_by_index(index)
        bundle.commit(CITY_ADDED, index=index, name=city.name)
        typer.echo(f"Added city '{city.name}' with index {index}")
    if failures:
        raise typer.Exit(code=1)


def cities_rename(index: int, name: str, root: Path | None = None) -> None:
    bundle = _runtime(root)
    try:
        old_name = bundle.store.rename_city(index, name)
    except GraphError as exc:
        _fail(bundle, "rename_city", exc)
        return
    new_name = bundle.store.find_by_index(index).name
    bundle.commit(CITY_RENAMED, index=index, old_name=old_name, name=new_name)
    typer.echo(f"Changed city {index} from '{old_name}' to '{new_name}'")


def cities_find(name: str | None = None, index: int | None = None, root: Path | None = None) -> None:
    """Look a city up by exact name or by index."""
    if (name is None) == (index is None):
        typer.echo("Error: pass exactly one of --name or --index.", err=True)
        raise typer.Exit(code=2)
    bundle = _runtime(root)
    try:
        city = bundle.store.find_by_name(name) if name is not None else bundle.store.find_by_index(index)
    except GraphError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(render.render_city(city))


def cities_list(newest_first: bool = False, root: Path | None = None) -> None:
    bundle = _runtime(root)
    if newest_first:
        typer.echo(render.render_cities(bundle.store.list_cities_descending(), title="Cities (newest first)"))
    else:
        typer.echo(render.render_cities(bundle.store.list_cities()))


def roads_add(a: int, b: int, root: Path | None = None) -> None:
    bundle = _runtime(root)
    try:
        road = bundle.store.add_road(a, b)
    except GraphError as exc:
        _fail(bundle, "add_road", exc)
        return
    bundle.commit(ROAD_ADDED, a=road.a, b=road.b)
    typer.echo(f"Added road between {road.a_name} ({road.a}) and {road.b_name} ({road.b})")


def roads_budget(a: int, b: int, amount: float, root: Path | None = None) -> None:
    bundle = _runtime(root)
    try:
        road = bundle.store.set_budget(a, b, amount)
    except GraphError as exc:
        _fail(bundle, "set_budget", exc)
        return
    bundle.commit(BUDGET_SET, a=road.a, b=road.b, budget=road.budget)
    typer.echo(
        f"Assigned budget of {road.budget:.2f} {bundle.budget_unit} to road between "
        f"{road.a_name} and {road.b_name}"
    )


def roads_list(root: Path | None = None) -> None:
    bundle = _runtime(root)
    store = bundle.store
    typer.echo(render.render_roads(store.list_roads(), store.road_matrix(), bundle.budget_unit))


def config_show(root: Path | None = None) -> None:
    """Show effective runtime config and resolved paths."""
    bundle = _runtime(root)
    payload = {"config": bundle.config, "paths": {k: str(v) for k, v in bundle.paths.items()}}
    typer.echo(json.dumps(payload, indent=2))
