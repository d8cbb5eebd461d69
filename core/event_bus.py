"""In-process event bus used to announce graph mutations."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Any

EventHandler = Callable[[str, dict[str, Any]], None]

CITY_ADDED = "city_added"
CITY_RENAMED = "city_renamed"
ROAD_ADDED = "road_added"
BUDGET_SET = "budget_set"
COMMAND_REJECTED = "command_rejected"

MUTATION_EVENTS = (CITY_ADDED, CITY_RENAMED, ROAD_ADDED, BUDGET_SET, COMMAND_REJECTED)


class EventBus:
    """Dispatches events to subscribers by event name."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        self._handlers[event_name].append(handler)

    def subscribe_many(self, event_names: tuple[str, ...], handler: EventHandler) -> None:
        """Register one callback for several events."""
        for event_name in event_names:
            self.subscribe(event_name, handler)

    def emit(self, event_name: str, payload: dict[str, Any]) -> None:
        """Call every subscriber with the event name and payload, in order."""
        for handler in self._handlers.get(event_name, []):
            handler(event_name, payload)
