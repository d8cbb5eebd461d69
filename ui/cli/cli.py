"""CLI entrypoint for cityroads."""

from __future__ import annotations

from pathlib import Path

import typer

from ui.cli import commands

app = typer.Typer(help="City and road budget record keeper")
cities_app = typer.Typer(help="City commands")
roads_app = typer.Typer(help="Road commands")
config_app = typer.Typer(help="Configuration commands")


def _root(ctx: typer.Context) -> Path | None:
    return (ctx.obj or {}).get("root")


@app.callback()
def main_callback(
    ctx: typer.Context,
    root: Path = typer.Option(
        None,
        "--root",
        help="Directory holding config/ and the data files (defaults to the working directory)",
    ),
) -> None:
    ctx.obj = {"root": root}


@app.command("run")
def run_cmd(ctx: typer.Context) -> None:
    """Interactive menu session."""
    commands.run(root=_root(ctx))


@app.command("show")
def show_cmd(ctx: typer.Context) -> None:
    """Display all recorded data."""
    commands.show(root=_root(ctx))


@cities_app.command("add")
def cities_add_cmd(
    ctx: typer.Context,
    names: list[str] = typer.Argument(..., help="One or more city names"),
) -> None:
    """Add new cities."""
    commands.cities_add(names=names, root=_root(ctx))


@cities_app.command("rename")
def cities_rename_cmd(
    ctx: typer.Context,
    index: int = typer.Argument(..., min=1, help="Index of the city to rename"),
    name: str = typer.Argument(..., help="New city name"),
) -> None:
    """Rename a city."""
    commands.cities_rename(index=index, name=name, root=_root(ctx))


@cities_app.command("find")
def cities_find_cmd(
    ctx: typer.Context,
    name: str = typer.Option(None, "--name", help="Exact city name"),
    index: int = typer.Option(None, "--index", min=1, help="City index"),
) -> None:
    """Search for a city by name or by index."""
    commands.cities_find(name=name, index=index, root=_root(ctx))


@cities_app.command("list")
def cities_list_cmd(
    ctx: typer.Context,
    newest_first: bool = typer.Option(False, "--newest-first", help="Highest index first"),
) -> None:
    """List cities."""
    commands.cities_list(newest_first=newest_first, root=_root(ctx))


@roads_app.command("add")
def roads_add_cmd(
    ctx: typer.Context,
    a: int = typer.Argument(..., help="First city index"),
    b: int = typer.Argument(..., help="Second city index"),
) -> None:
    """Add a road between two cities."""
    commands.roads_add(a=a, b=b, root=_root(ctx))


@roads_app.command("budget")
def roads_budget_cmd(
    ctx: typer.Context,
    a: int = typer.Argument(..., help="First city index"),
    b: int = typer.Argument(..., help="Second city index"),
    amount: float = typer.Argument(..., help="Budget amount"),
) -> None:
    """Set the budget of an existing road."""
    commands.roads_budget(a=a, b=b, amount=amount, root=_root(ctx))


@roads_app.command("list")
def roads_list_cmd(ctx: typer.Context) -> None:
    """List roads with their budgets."""
    commands.roads_list(root=_root(ctx))


@config_app.command("show")
def config_show_cmd(ctx: typer.Context) -> None:
    """Show effective configuration."""
    commands.config_show(root=_root(ctx))


app.add_typer(cities_app, name="cities")
app.add_typer(roads_app, name="roads")
app.add_typer(config_app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
