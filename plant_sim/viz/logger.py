"""Structured event logging for narrative and debugging."""

from __future__ import annotations

import json
import os
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, TextIO

from plant_sim.core.config import LOG_HISTORY_SIZE


@dataclass
class LogEntry:
    """A single log entry."""

    timestamp: float  # epoch ms
    category: str
    message: str
    plant_ids: list[str] = field(default_factory=list)
    data: dict = field(default_factory=dict)

    @property
    def time_label(self) -> str:
        return datetime.fromtimestamp(self.timestamp / 1000.0).strftime("%Y-%m-%d %H:%M:%S")


class SimLogger:
    """Structured logging with categories and verbosity control."""

    # Category constants
    LIFECYCLE = "LIFECYCLE"
    ACHIEVEMENT = "ACHIEVEMENT"
    WARNING = "WARNING"
    CARE = "CARE"
    ENVIRONMENT = "ENVIRONMENT"
    GROWTH = "GROWTH"

    _VERBOSITY_MAP = {
        LIFECYCLE: 0,
        ACHIEVEMENT: 0,
        WARNING: 0,
        CARE: 1,
        ENVIRONMENT: 2,
        GROWTH: 3,
    }

    def __init__(
        self,
        verbosity: int = 1,
        log_file: Optional[str] = None,
        stdout: bool = True,
        history_size: int = LOG_HISTORY_SIZE,
    ) -> None:
        """
        verbosity levels:
            0 = lifecycle, achievements and warnings
            1 = + care actions
            2 = + day/night and room changes
            3 = everything (per-tick growth)

        Only the newest `history_size` flushed entries are kept in memory;
        the log file receives every entry that passes the filter.
        """
        self.verbosity = verbosity
        self._buffer: list[LogEntry] = []
        self._all_entries: deque[LogEntry] = deque(maxlen=history_size)
        self._file: Optional[TextIO] = None
        self._stdout = stdout

        if log_file:
            os.makedirs(os.path.dirname(log_file) if os.path.dirname(log_file) else ".", exist_ok=True)
            self._file = open(log_file, "w", encoding="utf-8")

    @property
    def entries(self) -> list[LogEntry]:
        """Flushed entries followed by any still buffered."""
        return list(self._all_entries) + self._buffer

    def log(
        self,
        category: str,
        message: str,
        plant_ids: Optional[list[str]] = None,
        timestamp: float = 0.0,
        **data,
    ) -> None:
        """Log an event."""
        entry = LogEntry(
            timestamp=timestamp,
            category=category,
            message=message,
            plant_ids=plant_ids or [],
            data=data,
        )
        self._buffer.append(entry)

    def flush(self) -> None:
        """Write buffered entries that pass the verbosity filter."""
        for entry in self._buffer:
            required_verbosity = self._VERBOSITY_MAP.get(entry.category, 1)
            if required_verbosity <= self.verbosity:
                line = f"[{entry.time_label}] [{entry.category:<11}] {entry.message}"
                if self._stdout:
                    print(line)
                if self._file:
                    self._file.write(line + "\n")

        self._all_entries.extend(self._buffer)
        self._buffer.clear()

        if self._file:
            self._file.flush()

    def get_narrative(self, plant_id: str) -> str:
        """Human-readable history of everything logged about one plant."""
        plant_entries = [e for e in self.entries if plant_id in e.plant_ids]
        if not plant_entries:
            return "Nothing notable happened."

        lines = []
        for entry in plant_entries:
            lines.append(f"  [{entry.time_label}] [{entry.category}] {entry.message}")
        return "\n".join(lines)

    def export_json(self, filepath: str) -> None:
        """Export all log entries to JSON."""
        os.makedirs(os.path.dirname(filepath) if os.path.dirname(filepath) else ".", exist_ok=True)
        data = [
            {
                "timestamp": e.timestamp,
                "category": e.category,
                "message": e.message,
                "plant_ids": e.plant_ids,
                "data": e.data,
            }
            for e in self.entries
        ]
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None
