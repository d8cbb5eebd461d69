"""Interactive command loop tests driven by scripted input."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer

from core.control_loop import ControlLoop
from core.event_bus import MUTATION_EVENTS, EventBus
from network.graph_store import GraphStore
from storage.flat_file_store import FlatFileStore
from ui.input_reader import InputReader

EXIT = "12"


class Session:
    """Scripted console: answers come from a list, output goes to a list."""

    def __init__(self, tmp_path: Path, answers: list[str]) -> None:
        self._answers = iter(answers)
        self.output: list[str] = []
        self.events: list[tuple[str, dict[str, Any]]] = []
        self.store = GraphStore()
        self.storage = FlatFileStore(tmp_path / "cities.txt", tmp_path / "roads.txt")
        bus = EventBus()
        bus.subscribe_many(MUTATION_EVENTS, lambda name, payload: self.events.append((name, payload)))
        self.loop = ControlLoop(
            store=self.store,
            storage=self.storage,
            reader=InputReader(prompt=self._prompt, echo=self.output.append),
            event_bus=bus,
            echo=self.output.append,
        )

    def _prompt(self, text: str) -> str:
        try:
            return next(self._answers)
        except StopIteration:
            raise typer.Abort() from None

    @property
    def text(self) -> str:
        return "\n".join(self.output)


def test_budget_scenario_through_menu(tmp_path: Path) -> None:
    session = Session(
        tmp_path,
        [
            "1", "1", "Gisenyi",      # add one city
            "2", "1", "8",            # road 1-8
            "3", "1", "8", "12",      # budget 12
            "2", "1", "8",            # duplicate road
            "3", "2", "8",            # no road 2-8, no amount asked
            "2", "3", "3",            # self loop
            EXIT,
        ],
    )
    session.loop.run()

    store = session.store
    assert store.find_by_index(8).name == "Gisenyi"
    assert [(r.a, r.b, r.budget) for r in store.list_roads()] == [(1, 8, 12.0)]
    assert "Added city 'Gisenyi' with index 8" in session.text
    assert "Error: Road between Kigali and Gisenyi already exists!" in session.text
    assert "Error: No road exists between Huye and Gisenyi!" in session.text
    assert "Error: Cannot add a road from a city to itself!" in session.text
    assert (tmp_path / "roads.txt").read_text(encoding="utf-8") == "road,budget\n1-8,12.00\n"

    names = [name for name, _ in session.events]
    assert names == [
        "city_added",
        "road_added",
        "budget_set",
        "command_rejected",
        "command_rejected",
        "command_rejected",
    ]
    assert session.events[3][1]["error"] == "DuplicateEdgeError"
    assert session.events[4][1]["error"] == "NoEdgeError"


def test_batch_add_retries_same_slot(tmp_path: Path) -> None:
    session = Session(tmp_path, ["1", "2", "Kigali", "Gisenyi", "Gisenyi", "Nyanza", EXIT])
    session.loop.run()

    assert [city.name for city in session.store.list_cities()][-2:] == ["Gisenyi", "Nyanza"]
    assert session.store.next_index == 10
    assert session.output.count("\nAdding city 1 of 2") == 2
    assert session.output.count("\nAdding city 2 of 2") == 2
    assert session.text.count("already exists!") == 2


def test_each_mutation_is_saved_immediately(tmp_path: Path) -> None:
    session = Session(tmp_path, ["1", "1", "Gisenyi"])
    session.loop.step()

    assert "8,Gisenyi" in (tmp_path / "cities.txt").read_text(encoding="utf-8")


def test_edit_city_and_searches(tmp_path: Path) -> None:
    session = Session(
        tmp_path,
        [
            "4", "2", "Butare",       # rename Huye
            "4", "3", "Kigali",       # clash
            "5", "Butare",
            "5", "Huye",
            "6", "7",
            EXIT,
        ],
    )
    session.loop.run()

    assert session.store.find_by_index(2).name == "Butare"
    assert session.store.find_by_index(3).name == "Muhanga"
    assert "Changed city 2 from 'Huye' to 'Butare'" in session.text
    assert "Error: City named 'Kigali' already exists!" in session.text
    assert "Found: Index 2, Name: Butare" in session.text
    assert "Error: City named 'Huye' not found!" in session.text
    assert "Found: Index 7, Name: Rusizi" in session.text


def test_menu_rejects_out_of_range_choices(tmp_path: Path) -> None:
    session = Session(tmp_path, ["0", "13", "menu", EXIT])
    session.loop.run()

    assert session.output.count("Please enter a number between 1 and 12.") == 2
    assert "Invalid input. Please enter a valid number." in session.output


def test_city_index_prompt_bounded_by_next_index(tmp_path: Path) -> None:
    session = Session(tmp_path, ["2", "9", "1", "2", EXIT])
    session.loop.run()

    assert "Please enter a number between 1 and 7." in session.output
    assert session.store.has_road(1, 2)


def test_end_of_input_flushes(tmp_path: Path) -> None:
    session = Session(tmp_path, ["2", "1", "2"])
    session.loop.run()

    assert (tmp_path / "roads.txt").read_text(encoding="utf-8") == "road,budget\n1-2,0.00\n"
    assert (tmp_path / "cities.txt").exists()


def test_display_commands(tmp_path: Path) -> None:
    session = Session(tmp_path, ["1", "1", "Gisenyi", "7", "8", "9", "10", "11", EXIT])
    session.loop.run()

    text = session.text
    assert "--- Cities ---" in text
    assert "--- Cities (newest first) ---" in text
    assert "--- Roads ---" in text
    assert "--- Recorded Data ---" in text
    assert "Budget Adjacency Matrix (billions RWF):" in text
    assert "cities.txt" in text and "roads.txt" in text
