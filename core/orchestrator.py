"""Top-level application wiring."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from core.audit_logger import AuditLogger
from core.control_loop import ControlLoop
from core.event_bus import MUTATION_EVENTS, EventBus
from core.policy_runtime import configure_logging, ensure_runtime_dirs, load_effective_config
from network.graph_store import GraphStore
from storage.flat_file_store import DEFAULT_MAX_INDEX, FlatFileStore, LoadReport
from ui.input_reader import EchoFn, InputReader, PromptFn


@dataclass
class RuntimeBundle:
    """Holds initialized runtime components."""

    config: dict[str, Any]
    paths: dict[str, Path]
    store: GraphStore
    storage: FlatFileStore
    event_bus: EventBus
    audit: AuditLogger | None
    load_report: LoadReport

    @property
    def budget_unit(self) -> str:
        return str(self.config.get("display", {}).get("budget_unit", "billions RWF"))

    def commit(self, event_name: str, **details: Any) -> None:
        """Save the store and announce a one-shot mutation."""
        self.storage.save(self.store)
        self.event_bus.emit(event_name, details)

    def control_loop(self, prompt: PromptFn | None = None, echo: EchoFn | None = None) -> ControlLoop:
        return ControlLoop(
            store=self.store,
            storage=self.storage,
            reader=InputReader(prompt=prompt, echo=echo),
            event_bus=self.event_bus,
            echo=echo,
            budget_unit=self.budget_unit,
        )


class Orchestrator:
    """Creates and wires runtime components for CLI use."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or Path.cwd()).resolve()

    def build(self) -> RuntimeBundle:
        config = load_effective_config(self.root)
        configure_logging(config)
        paths = ensure_runtime_dirs(self.root, config)

        store = GraphStore()
        storage = FlatFileStore(
            paths["cities_path"],
            paths["roads_path"],
            max_index=int(config.get("storage", {}).get("max_index", DEFAULT_MAX_INDEX)),
        )
        load_report = storage.load(store)

        event_bus = EventBus()
        audit: AuditLogger | None = None
        if config.get("audit", {}).get("enabled", True):
            audit = AuditLogger(paths["audit_log_path"])
            event_bus.subscribe_many(MUTATION_EVENTS, audit.handle_event)

        return RuntimeBundle(
            config=config,
            paths=paths,
            store=store,
            storage=storage,
            event_bus=event_bus,
            audit=audit,
            load_report=load_report,
        )
