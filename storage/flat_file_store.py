"""Comma-delimited flat file persistence for the city/road graph."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from network.errors import GraphError, ParseError
from network.graph_store import GraphStore
from network.validation import validate_name

logger = logging.getLogger("cityroads.storage")

CITIES_HEADER = "index,city_name"
ROADS_HEADER = "road,budget"
DELIMITER = ","
PAIR_SEPARATOR = "-"
ENCODING = "utf-8"
DEFAULT_MAX_INDEX = 1000


@dataclass
class LoadReport:
    """Outcome of one load: what was applied and which lines were skipped."""

    cities_loaded: int = 0
    roads_loaded: int = 0
    errors: list[ParseError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class FlatFileStore:
    """Reads and rewrites ``cities.txt`` and ``roads.txt``."""

    def __init__(
        self, cities_path: Path, roads_path: Path, max_index: int = DEFAULT_MAX_INDEX
    ) -> None:
        self.cities_path = cities_path
        self.roads_path = roads_path
        # Matrices are dense, so a stray huge index would allocate its square.
        self.max_index = max_index

    def save(self, store: GraphStore) -> None:
        """Rewrite both files from the current store state."""
        city_lines = [CITIES_HEADER]
        city_lines += [f"{city.index}{DELIMITER}{city.name}" for city in store.list_cities()]
        road_lines = [ROADS_HEADER]
        road_lines += [
            f"{road.a}{PAIR_SEPARATOR}{road.b}{DELIMITER}{road.budget:.2f}"
            for road in store.list_roads()
        ]
        self._write(self.cities_path, city_lines)
        self._write(self.roads_path, road_lines)
        logger.debug(
            "Saved %d cities and %d roads", len(city_lines) - 1, len(road_lines) - 1
        )

    def load(self, store: GraphStore) -> LoadReport:
        """Merge persisted cities and roads into ``store``.

        Unreadable lines are skipped and reported; loading never aborts.
        """
        report = LoadReport()
        self._load_cities(store, report)
        self._load_roads(store, report)
        for error in report.errors:
            logger.warning("Skipped line: %s", error)
        logger.info(
            "Loaded %d cities and %d roads (%d lines skipped)",
            report.cities_loaded,
            report.roads_loaded,
            len(report.errors),
        )
        return report

    # ── Cities ───────────────────────────────────────────────────────

    def _load_cities(self, store: GraphStore, report: LoadReport) -> None:
        errors: list[ParseError] = []
        parsed: dict[int, tuple[int, str, str]] = {}
        for line_number, line in self._data_lines(self.cities_path, errors):
            fields = line.split(DELIMITER)
            try:
                index = int(fields[0].strip())
            except ValueError:
                errors.append(self._error(self.cities_path, line_number, line, "index is not a number"))
                continue
            if index < 1:
                errors.append(self._error(self.cities_path, line_number, line, "index must be positive"))
                continue
            if index > self.max_index:
                errors.append(
                    self._error(self.cities_path, line_number, line, f"index exceeds limit of {self.max_index}")
                )
                continue
            name = validate_name(fields[1]) if len(fields) > 1 else validate_name("")
            if not name.ok:
                errors.append(self._error(self.cities_path, line_number, line, "missing city name"))
                continue
            # A later line for the same index replaces the earlier one.
            parsed[index] = (line_number, line, name.value)

        current = {city.index: city.name for city in store.list_cities()}
        while True:
            clash = self._first_name_clash(current, parsed)
            if clash is None:
                break
            index, holder = clash
            line_number, line, _ = parsed.pop(index)
            errors.append(
                self._error(self.cities_path, line_number, line, f"name already used by city {holder}")
            )

        accepted = {index: name for index, (_, _, name) in parsed.items()}
        store.restore_cities(accepted)
        report.cities_loaded = len(accepted)
        report.errors += sorted(errors, key=lambda error: error.line_number)

    @staticmethod
    def _first_name_clash(
        current: dict[int, str], parsed: dict[int, tuple[int, str, str]]
    ) -> tuple[int, int] | None:
        """Earliest parsed line whose name another city would also carry.

        Cities the file does not redefine keep their names; among file lines
        the earlier one wins. A rejected line leaves its index on its current
        name, so the caller re-checks after every rejection.
        """
        holders = {name: index for index, name in current.items() if index not in parsed}
        for index, (_, _, name) in sorted(parsed.items(), key=lambda item: item[1][0]):
            if name in holders:
                return index, holders[name]
            holders[name] = index
        return None

    # ── Roads ────────────────────────────────────────────────────────

    def _load_roads(self, store: GraphStore, report: LoadReport) -> None:
        for line_number, line in self._data_lines(self.roads_path, report.errors):
            fields = line.split(DELIMITER)
            pair = fields[0]
            if PAIR_SEPARATOR not in pair:
                report.errors.append(self._error(self.roads_path, line_number, line, "road is not of the form a-b"))
                continue
            left, right = pair.split(PAIR_SEPARATOR, 1)
            try:
                a, b = int(left.strip()), int(right.strip())
            except ValueError:
                report.errors.append(self._error(self.roads_path, line_number, line, "city index is not a number"))
                continue
            try:
                amount = float(fields[1].strip()) if len(fields) > 1 else None
            except ValueError:
                amount = None
            if amount is None:
                report.errors.append(self._error(self.roads_path, line_number, line, "budget is not a number"))
                continue
            try:
                store.restore_road(a, b, amount)
            except GraphError as exc:
                report.errors.append(self._error(self.roads_path, line_number, line, str(exc)))
                continue
            report.roads_loaded += 1

    # ── File helpers ─────────────────────────────────────────────────

    def _data_lines(self, path: Path, errors: list[ParseError]) -> list[tuple[int, str]]:
        """Non-blank lines after the header, numbered from 1 like an editor.

        A file that cannot be read, and any line that is not valid UTF-8, is
        recorded in ``errors`` instead of stopping the load.
        """
        if not path.exists():
            return []
        try:
            raw = path.read_bytes()
        except OSError as exc:
            errors.append(self._error(path, 0, "", f"file could not be read: {exc.strerror or exc}"))
            return []
        lines: list[tuple[int, str]] = []
        for number, chunk in enumerate(raw.splitlines()[1:], start=2):
            try:
                line = chunk.decode(ENCODING)
            except UnicodeDecodeError:
                shown = chunk.decode(ENCODING, errors="replace")
                errors.append(self._error(path, number, shown, "line is not valid UTF-8"))
                continue
            if line.strip():
                lines.append((number, line))
        return lines

    @staticmethod
    def _write(path: Path, lines: list[str]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding=ENCODING, newline="\n") as fh:
            fh.write("\n".join(lines) + "\n")

    @staticmethod
    def _error(path: Path, line_number: int, line: str, reason: str) -> ParseError:
        return ParseError(path.name, line_number, line, reason)
