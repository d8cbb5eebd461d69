"""Numbered-menu command loop: prompt, dispatch, save, repeat.

Every mutating command validates its input, applies the change to the
graph store and then saves both data files before the next prompt. The
loop saves once more when it ends, whether through the Exit entry or
because the input stream closed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import typer

from core.event_bus import (
    BUDGET_SET,
    CITY_ADDED,
    CITY_RENAMED,
    COMMAND_REJECTED,
    ROAD_ADDED,
    EventBus,
)
from network.errors import DuplicateNameError, GraphError, InputValidationError
from network.graph_store import GraphStore
from storage.flat_file_store import FlatFileStore
from ui import render
from ui.input_reader import EchoFn, InputReader

logger = logging.getLogger("cityroads.loop")


@dataclass
class MenuEntry:
    """One numbered menu option."""

    label: str
    handler: Callable[[], None] | None = None


class ControlLoop:
    """Interactive dispatcher over a single ``GraphStore``."""

    def __init__(
        self,
        store: GraphStore,
        storage: FlatFileStore,
        reader: InputReader,
        event_bus: EventBus | None = None,
        echo: EchoFn | None = None,
        budget_unit: str = render.DEFAULT_BUDGET_UNIT,
    ) -> None:
        self.store = store
        self.storage = storage
        self.reader = reader
        self.event_bus = event_bus or EventBus()
        self.echo = echo or typer.echo
        self.budget_unit = budget_unit
        self.menu = [
            MenuEntry("Add new city(ies)", self.add_cities),
            MenuEntry("Add road between cities", self.add_road),
            MenuEntry("Set the budget for a road", self.set_budget),
            MenuEntry("Edit city", self.edit_city),
            MenuEntry("Search for a city by name", self.search_by_name),
            MenuEntry("Search for a city by index", self.search_by_index),
            MenuEntry("Display cities", self.show_cities),
            MenuEntry("Display cities (newest first)", self.show_cities_newest_first),
            MenuEntry("Display roads", self.show_roads),
            MenuEntry("Display recorded data", self.show_all),
            MenuEntry("Help", self.show_help),
            MenuEntry("Exit"),
        ]

    # ── Main entry point ─────────────────────────────────────────────

    def run(self) -> None:
        """Serve menu choices until Exit or end of input, then flush."""
        try:
            while self.step():
                pass
        except typer.Abort:
            logger.info("Input closed; leaving command loop")
            self.echo("")
        finally:
            self.storage.save(self.store)
            logger.info("Final save complete")

    def step(self) -> bool:
        """Show the menu, run one command and report whether to continue."""
        self.echo(render.render_menu([entry.label for entry in self.menu]))
        choice = self.reader.read_int("Choose: ", 1, len(self.menu))
        entry = self.menu[choice - 1]
        if entry.handler is None:
            return False
        entry.handler()
        return True

    # ── Mutating commands ────────────────────────────────────────────

    def add_cities(self) -> None:
        """Add several cities; a rejected name retries the same slot."""
        count = self.reader.read_int("Number of cities to add: ", 1)
        slot = 0
        while slot < count:
            self.echo(f"\nAdding city {slot + 1} of {count}")
            name = self.reader.read_name("City name: ")
            try:
                index = self.store.add_city(name)
            except (DuplicateNameError, InputValidationError) as exc:
                self._reject("add_city", exc, name=name)
                continue
            self._commit(CITY_ADDED, index=index, name=name)
            self.echo(f"Added city '{name}' with index {index}")
            slot += 1

    def add_road(self) -> None:
        a, b = self._read_pair()
        try:
            road = self.store.add_road(a, b)
        except GraphError as exc:
            self._reject("add_road", exc, a=a, b=b)
            return
        self._commit(ROAD_ADDED, a=road.a, b=road.b)
        self.echo(
            f"Added road between {road.a_name} ({road.a}) and {road.b_name} ({road.b})"
        )

    def set_budget(self) -> None:
        a, b = self._read_pair()
        try:
            self.store.get_road(a, b)
        except GraphError as exc:
            self._reject("set_budget", exc, a=a, b=b)
            return
        amount = self.reader.read_amount(f"Enter budget ({self.budget_unit}): ")
        road = self.store.set_budget(a, b, amount)
        self._commit(BUDGET_SET, a=road.a, b=road.b, budget=road.budget)
        self.echo(
            f"Assigned budget of {road.budget:.2f} {self.budget_unit} to road between "
            f"{road.a_name} and {road.b_name}"
        )

    def edit_city(self) -> None:
        index = self._read_index("Enter city index to edit: ")
        try:
            self.store.find_by_index(index)
        except GraphError as exc:
            self._reject("rename_city", exc, index=index)
            return
        new_name = self.reader.read_name("Enter new city name: ")
        try:
            old_name = self.store.rename_city(index, new_name)
        except GraphError as exc:
            self._reject("rename_city", exc, index=index, name=new_name)
            return
        self._commit(CITY_RENAMED, index=index, old_name=old_name, name=new_name)
        self.echo(f"Changed city {index} from '{old_name}' to '{new_name}'")

    # ── Queries ──────────────────────────────────────────────────────

    def search_by_name(self) -> None:
        name = self.reader.read_name("Enter city name to search: ")
        try:
            city = self.store.find_by_name(name)
        except GraphError as exc:
            self.echo(f"Error: {exc}")
            return
        self.echo(render.render_city(city))

    def search_by_index(self) -> None:
        index = self._read_index("Enter city index to search: ")
        try:
            city = self.store.find_by_index(index)
        except GraphError as exc:
            self.echo(f"Error: {exc}")
            return
        self.echo(render.render_city(city))

    def show_cities(self) -> None:
        self.echo(render.render_cities(self.store.list_cities()))

    def show_cities_newest_first(self) -> None:
        self.echo(render.render_cities(self.store.list_cities_descending(), title="Cities (newest first)"))

    def show_roads(self) -> None:
        self.echo(
            render.render_roads(
                self.store.list_roads(), self.store.road_matrix(), self.budget_unit
            )
        )

    def show_all(self) -> None:
        self.echo(
            render.render_all(
                self.store.list_cities(),
                self.store.road_matrix(),
                self.store.budget_matrix(),
                self.budget_unit,
            )
        )

    def show_help(self) -> None:
        self.echo(
            render.render_help(
                cities_file=self.storage.cities_path.name,
                roads_file=self.storage.roads_path.name,
                unit=self.budget_unit,
            )
        )

    # ── Helpers ──────────────────────────────────────────────────────

    def _read_index(self, text: str) -> int:
        return self.reader.read_int(text, 1, self.store.next_index - 1)

    def _read_pair(self) -> tuple[int, int]:
        a = self._read_index("Enter first city index: ")
        b = self._read_index("Enter second city index: ")
        return a, b

    def _commit(self, event_name: str, **details: Any) -> None:
        self.storage.save(self.store)
        self.event_bus.emit(event_name, details)

    def _reject(self, command: str, exc: GraphError, **details: Any) -> None:
        self.echo(f"Error: {exc}")
        logger.info("Rejected %s: %s", command, exc)
        self.event_bus.emit(
            COMMAND_REJECTED,
            {"command": command, "error": type(exc).__name__, "reason": str(exc), **details},
        )
