"""Console rendering tests."""

from __future__ import annotations

from network.graph_store import GraphStore
from ui import render


def test_render_cities_table() -> None:
    store = GraphStore()
    lines = render.render_cities(store.list_cities()).splitlines()

    assert lines[1:4] == ["--- Cities ---", "Index | City Name", "------|----------"]
    assert lines[4] == "    1 | Kigali"
    assert lines[-1] == "    7 | Rusizi"


def test_render_roads_table_and_matrix() -> None:
    store = GraphStore()
    store.add_city("Gisenyi")
    store.add_road(1, 8)
    store.set_budget(1, 8, 12)

    text = render.render_roads(store.list_roads(), store.road_matrix())
    lines = text.splitlines()
    assert "Road | Budget (billions RWF)" in lines
    assert "-----|----------------------" in lines
    assert "Kigali-Gisenyi | 12.00" in lines
    assert "   " + "".join(f"{i:>5}" for i in range(1, 9)) in lines
    assert " 1:    0    0    0    0    0    0    0    1" in lines
    assert " 8:    1    0    0    0    0    0    0    0" in lines


def test_render_all_shows_zero_budget_for_missing_roads() -> None:
    store = GraphStore()
    store.add_road(1, 2)
    store.set_budget(1, 2, 3.5)
    store.budgets[3][4] = store.budgets[4][3] = 8.0

    text = render.render_all(
        store.list_cities(), store.road_matrix(), store.budget_matrix(), unit="RWF"
    )
    lines = text.splitlines()
    assert "Budget Adjacency Matrix (RWF):" in lines
    assert " 2:    3.50    0.00    0.00    0.00    0.00    0.00    0.00" in lines
    assert " 3:    0.00    0.00    0.00    0.00    0.00    0.00    0.00" in lines


def test_render_menu_numbers_entries() -> None:
    text = render.render_menu(["Add", "Exit"])
    assert text.splitlines()[1:] == [render.MENU_TITLE, "1. Add", "2. Exit"]


def test_render_city() -> None:
    store = GraphStore()
    assert render.render_city(store.find_by_index(4)) == "Found: Index 4, Name: Musanze"
