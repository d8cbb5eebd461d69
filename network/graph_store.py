"""In-memory city/road graph backed by dense adjacency matrices."""

from __future__ import annotations

import logging

from network.errors import (
    DuplicateEdgeError,
    DuplicateNameError,
    InputValidationError,
    InvalidSelfLoopError,
    NoEdgeError,
    NotFoundError,
)
from network.models import City, MatrixView, Road
from network.validation import check_amount, validate_name

logger = logging.getLogger("cityroads.store")

SEED_CITIES: dict[int, str] = {
    1: "Kigali",
    2: "Huye",
    3: "Muhanga",
    4: "Musanze",
    5: "Nyagatare",
    6: "Rubavu",
    7: "Rusizi",
}
FIRST_FREE_INDEX = 8


class GraphStore:
    """Owns the city table, the road and budget matrices and the next index.

    Both matrices are symmetric and sized to at least ``next_index``. They
    grow as cities are added and never shrink. The store does not persist
    itself; callers save through ``storage.flat_file_store.FlatFileStore``
    after a successful mutation.
    """

    def __init__(self, seed: dict[int, str] | None = None) -> None:
        self.cities: dict[int, City] = {}
        self.roads: list[list[bool]] = []
        self.budgets: list[list[float]] = []
        self.next_index = FIRST_FREE_INDEX
        for index, name in (SEED_CITIES if seed is None else seed).items():
            self.cities[index] = City(index=index, name=name)
            self.next_index = max(self.next_index, index + 1)
        self._grow()

    @property
    def matrix_size(self) -> int:
        return len(self.roads)

    def _grow(self) -> None:
        """Extend both matrices to cover every index below ``next_index``."""
        size = max(self.next_index, FIRST_FREE_INDEX)
        current = len(self.roads)
        if size <= current:
            return
        for row in self.roads:
            row.extend([False] * (size - current))
        for row in self.budgets:
            row.extend([0.0] * (size - current))
        for _ in range(current, size):
            self.roads.append([False] * size)
            self.budgets.append([0.0] * size)

    # ── Cities ───────────────────────────────────────────────────────

    def contains(self, index: int) -> bool:
        return index in self.cities

    def add_city(self, name: str) -> int:
        """Insert a city under the next free index and return that index."""
        clean = self._clean_name(name)
        self._ensure_unique_name(clean)
        index = self.next_index
        self.cities[index] = City(index=index, name=clean)
        self.next_index += 1
        self._grow()
        logger.info("Added city %r with index %d", clean, index)
        return index

    def rename_city(self, index: int, new_name: str) -> str:
        """Rename a city and return its previous name."""
        city = self.find_by_index(index)
        clean = self._clean_name(new_name)
        self._ensure_unique_name(clean, ignore_index=index)
        old_name = city.name
        self.cities[index] = City(index=index, name=clean)
        logger.info("Renamed city %d from %r to %r", index, old_name, clean)
        return old_name

    def find_by_name(self, name: str) -> City:
        """Return the first city whose name matches exactly."""
        for index in sorted(self.cities):
            city = self.cities[index]
            if city.name == name:
                return city
        raise NotFoundError(f"City named '{name}' not found!")

    def find_by_index(self, index: int) -> City:
        city = self.cities.get(index)
        if city is None:
            raise NotFoundError(f"City with index {index} does not exist!")
        return city

    def list_cities(self) -> list[City]:
        """Cities in ascending index order."""
        return [self.cities[index] for index in sorted(self.cities)]

    def list_cities_descending(self) -> list[City]:
        """Cities newest first."""
        return [self.cities[index] for index in sorted(self.cities, reverse=True)]

    def restore_cities(self, entries: dict[int, str]) -> None:
        """Apply persisted cities in one step.

        Entries override seeded cities with the same index and may extend
        the table. The caller is responsible for handing in a name-unique
        set; applying them together lets persisted renames among existing
        cities land without transient clashes.
        """
        for index, name in entries.items():
            self.cities[index] = City(index=index, name=name)
            self.next_index = max(self.next_index, index + 1)
        self._grow()

    # ── Roads ────────────────────────────────────────────────────────

    def has_road(self, a: int, b: int) -> bool:
        if not (self.contains(a) and self.contains(b)):
            return False
        return self.roads[a][b]

    def budget(self, a: int, b: int) -> float:
        """Budget of the road between ``a`` and ``b``; 0 where there is no road."""
        if not self.has_road(a, b):
            return 0.0
        return self.budgets[a][b]

    def add_road(self, a: int, b: int) -> Road:
        """Connect two distinct cities with an unbudgeted road."""
        first, second = self._require_pair(a, b)
        if a == b:
            raise InvalidSelfLoopError("Cannot add a road from a city to itself!")
        if self.roads[a][b]:
            raise DuplicateEdgeError(
                f"Road between {first.name} and {second.name} already exists!"
            )
        self.roads[a][b] = self.roads[b][a] = True
        self.budgets[a][b] = self.budgets[b][a] = 0.0
        logger.info("Added road %d-%d", a, b)
        return self._road(a, b)

    def get_road(self, a: int, b: int) -> Road:
        first, second = self._require_pair(a, b)
        if not self.roads[a][b]:
            raise NoEdgeError(f"No road exists between {first.name} and {second.name}!")
        return self._road(a, b)

    def set_budget(self, a: int, b: int, amount: float) -> Road:
        """Assign a budget to an existing road, overwriting any earlier one."""
        self.get_road(a, b)
        checked = check_amount(float(amount))
        if not checked.ok:
            raise InputValidationError(checked.error)
        self.budgets[a][b] = self.budgets[b][a] = checked.value
        logger.info("Set budget of road %d-%d to %.2f", a, b, checked.value)
        return self._road(a, b)

    def restore_road(self, a: int, b: int, amount: float) -> None:
        """Re-create a persisted road together with its budget."""
        self._require_pair(a, b)
        if a == b:
            raise InvalidSelfLoopError("Cannot add a road from a city to itself!")
        checked = check_amount(amount)
        if not checked.ok:
            raise InputValidationError(checked.error)
        self.roads[a][b] = self.roads[b][a] = True
        self.budgets[a][b] = self.budgets[b][a] = checked.value

    def list_roads(self) -> list[Road]:
        """Every road once, ordered by (lower index, higher index)."""
        indices = sorted(self.cities)
        return [
            self._road(i, j)
            for pos, i in enumerate(indices)
            for j in indices[pos + 1 :]
            if self.roads[i][j]
        ]

    def road_matrix(self) -> MatrixView:
        indices = sorted(self.cities)
        rows = [[1.0 if self.roads[i][j] else 0.0 for j in indices] for i in indices]
        return MatrixView(labels=indices, rows=rows)

    def budget_matrix(self) -> MatrixView:
        indices = sorted(self.cities)
        rows = [[self.budget(i, j) for j in indices] for i in indices]
        return MatrixView(labels=indices, rows=rows)

    # ── Helpers ──────────────────────────────────────────────────────

    def _require_pair(self, a: int, b: int) -> tuple[City, City]:
        if not (self.contains(a) and self.contains(b)):
            raise NotFoundError("One or both cities do not exist!")
        return self.cities[a], self.cities[b]

    def _road(self, a: int, b: int) -> Road:
        low, high = min(a, b), max(a, b)
        return Road(
            a=low,
            b=high,
            a_name=self.cities[low].name,
            b_name=self.cities[high].name,
            budget=self.budgets[low][high],
        )

    @staticmethod
    def _clean_name(name: str) -> str:
        result = validate_name(name)
        if not result.ok:
            raise InputValidationError(result.error)
        return result.value

    def _ensure_unique_name(self, name: str, ignore_index: int | None = None) -> None:
        for index, city in self.cities.items():
            if city.name == name and index != ignore_index:
                raise DuplicateNameError(name)
