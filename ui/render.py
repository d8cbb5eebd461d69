"""Plain-text rendering of the city/road graph for the console."""

from __future__ import annotations

from collections.abc import Sequence

from network.models import City, MatrixView, Road

DEFAULT_BUDGET_UNIT = "billions RWF"
MENU_TITLE = "=== City Connection System ==="


def render_city(city: City) -> str:
    return f"Found: Index {city.index}, Name: {city.name}"


def render_cities(cities: Sequence[City], title: str = "Cities") -> str:
    """Index/name table."""
    lines = [
        f"\n--- {title} ---",
        "Index | City Name",
        "------|----------",
    ]
    lines += [f"{city.index:>5} | {city.name}" for city in cities]
    return "\n".join(lines)


def render_road_matrix(view: MatrixView) -> str:
    """Existence matrix; 1 where a road exists."""
    lines = [
        "\nRoad Adjacency Matrix (1 = road exists, 0 = no road):",
        "   " + "".join(f"{label:>5}" for label in view.labels),
    ]
    for label, row in zip(view.labels, view.rows):
        lines.append(f"{label:>2}:" + "".join(f"{int(cell):>5}" for cell in row))
    return "\n".join(lines)


def render_budget_matrix(view: MatrixView, unit: str = DEFAULT_BUDGET_UNIT) -> str:
    lines = [
        f"\nBudget Adjacency Matrix ({unit}):",
        "   " + "".join(f"{label:>8}" for label in view.labels),
    ]
    for label, row in zip(view.labels, view.rows):
        lines.append(f"{label:>2}:" + "".join(f"{cell:>8.2f}" for cell in row))
    return "\n".join(lines)


def render_roads(roads: Sequence[Road], matrix: MatrixView, unit: str = DEFAULT_BUDGET_UNIT) -> str:
    """Road/budget table followed by the existence matrix."""
    header = f"Road | Budget ({unit})"
    lines = [
        "\n--- Roads ---",
        header,
        "-----|" + "-" * (len(header) - len("Road |")),
    ]
    lines += [f"{road.label} | {road.budget:.2f}" for road in roads]
    return "\n".join(lines) + "\n" + render_road_matrix(matrix)


def render_all(
    cities: Sequence[City],
    road_matrix: MatrixView,
    budget_matrix: MatrixView,
    unit: str = DEFAULT_BUDGET_UNIT,
) -> str:
    return "\n".join(
        [
            "\n--- Recorded Data ---",
            render_cities(cities),
            render_road_matrix(road_matrix),
            render_budget_matrix(budget_matrix, unit),
        ]
    )


def render_menu(labels: Sequence[str]) -> str:
    lines = [f"\n{MENU_TITLE}"]
    lines += [f"{number}. {label}" for number, label in enumerate(labels, start=1)]
    return "\n".join(lines)


def render_help(
    cities_file: str = "cities.txt",
    roads_file: str = "roads.txt",
    unit: str = DEFAULT_BUDGET_UNIT,
) -> str:
    return "\n".join(
        [
            "This system records cities and the roads connecting them, together",
            "with the budget allocated to each road.",
            "",
            "Features Overview:",
            "- City management: add cities, rename them and search by name or index",
            "- Road management: connect two different cities and assign a budget",
            "- Data persistence: every change is saved to flat files immediately",
            "- Automatic indices: new cities are numbered after the existing ones",
            "",
            "Tips for Usage:",
            "- City names must be unique and cannot contain commas",
            f"- Budgets are non-negative amounts in {unit}, kept to 2 decimals",
            "- A road must exist before it can be given a budget",
            "",
            "File Information:",
            f"- {cities_file}: index and name of every city",
            f"- {roads_file}: every road as 'a-b' with its budget",
            "- Files are created automatically if they don't exist",
        ]
    )
