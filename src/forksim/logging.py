"""Simulation event log.

The engine writes one entry for everything that happens on the
simulated CPU: admissions, context switches, forks, signal deliveries
and dropped signals.  Entries are structured rather than free text:

- ``tick`` — the clock value when the event happened;
- ``pid`` — the process the event concerns (None for run-wide events
  such as the boot summary or a signal nobody could receive);
- ``source`` — the subsystem that logged it (``scheduler``, ``fork``,
  ``signal``, ``boot``, ``engine``).

Front ends slice the log by any of those fields, so "everything that
happened to P7" is a query, not a text search.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class LogLevel(IntEnum):
    """Severity levels, ordered so ``min_level`` filtering is a comparison."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single simulation event.

    Attributes:
        tick: Simulated clock value of the event.
        level: Severity.
        source: Subsystem that generated the event (e.g. "fork").
        message: Human-readable description.
        pid: Process the event concerns, if any.

    """

    tick: int
    level: LogLevel
    source: str
    message: str
    pid: int | None = None

    def matches(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
        pid: int | None = None,
    ) -> bool:
        """Return True if this entry passes every given criterion."""
        if min_level is not None and self.level < min_level:
            return False
        if source is not None and self.source != source:
            return False
        return pid is None or self.pid == pid

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping."""
        return {
            "tick": self.tick,
            "level": self.level.name,
            "source": self.source,
            "pid": self.pid,
            "message": self.message,
        }

    def __str__(self) -> str:
        """Format as ``[t=N] [LEVEL] source: message``."""
        return f"[t={self.tick}] [{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Append-only event log for one simulation run."""

    def __init__(self) -> None:
        """Create an empty log."""
        self._entries: list[LogEntry] = []

    def __len__(self) -> int:
        """Return the number of logged events."""
        return len(self._entries)

    @property
    def entries(self) -> tuple[LogEntry, ...]:
        """Return every entry in the order it was logged."""
        return tuple(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        tick: int = 0,
        pid: int | None = None,
    ) -> LogEntry:
        """Record one event and return the new entry."""
        entry = LogEntry(tick=tick, level=level, source=source, message=message, pid=pid)
        self._entries.append(entry)
        return entry

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
        pid: int | None = None,
    ) -> list[LogEntry]:
        """Return the entries matching every given criterion, oldest first.

        Args:
            min_level: Drop entries below this severity.
            source: Keep only entries from this subsystem.
            pid: Keep only entries about this process.

        """
        return [
            e for e in self._entries if e.matches(min_level=min_level, source=source, pid=pid)
        ]
