"""JSONL audit trail of graph mutations."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from core.event_bus import COMMAND_REJECTED


class AuditLogger:
    """Appends one JSON line per mutating command."""

    def __init__(self, log_path: Path) -> None:
        self.log_path = log_path
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self.logger = logging.getLogger("cityroads.audit")

    def log(self, event: str, details: dict[str, Any], outcome: str) -> None:
        """Append one JSONL audit record."""
        record = {
            "timestamp": datetime.now(UTC).isoformat(),
            "event": event,
            "details": details,
            "outcome": outcome,
        }
        line = json.dumps(record, ensure_ascii=True, sort_keys=True, default=str)
        with self.log_path.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")
        self.logger.info(line)

    def handle_event(self, event_name: str, payload: dict[str, Any]) -> None:
        """Event bus subscriber."""
        outcome = "rejected" if event_name == COMMAND_REJECTED else "applied"
        self.log(event=event_name, details=payload, outcome=outcome)

    def read_records(self) -> list[dict[str, Any]]:
        if not self.log_path.exists():
            return []
        with self.log_path.open("r", encoding="utf-8") as fh:
            return [json.loads(line) for line in fh if line.strip()]
