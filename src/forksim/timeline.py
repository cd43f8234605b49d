"""Timeline recorder — the Gantt chart of a run.

Every time a burst ends the engine records one ``GanttEntry``: which
process held the CPU, from when, until when.  The recorder is
append-only and checks two things on every record:

- the interval is not empty (``start < end``);
- it starts exactly where the previous one ended — the simulated CPU
  is never idle while work remains, so the chart has no gaps.

Either violation means the engine was driven incorrectly, so it raises
``ValueError`` rather than recording a broken chart.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(frozen=True)
class GanttEntry:
    """One contiguous interval of CPU occupancy.

    Attributes:
        pid: The process that held the CPU.
        start: Clock value when the burst began.
        end: Clock value when the burst ended (exclusive).

    """

    pid: int
    start: int
    end: int

    @property
    def duration(self) -> int:
        """Return the number of ticks in this interval."""
        return self.end - self.start

    def to_dict(self) -> dict[str, int]:
        """Return a JSON-friendly mapping."""
        return {"pid": self.pid, "start": self.start, "end": self.end}

    def __str__(self) -> str:
        """Format as ``P1 [0, 4)``."""
        return f"P{self.pid} [{self.start}, {self.end})"


class Timeline:
    """Append-only sequence of Gantt entries."""

    def __init__(self) -> None:
        """Create an empty timeline."""
        self._entries: list[GanttEntry] = []

    def __len__(self) -> int:
        """Return the number of recorded intervals."""
        return len(self._entries)

    def __iter__(self) -> Iterator[GanttEntry]:
        """Iterate over entries in recorded order."""
        return iter(tuple(self._entries))

    @property
    def entries(self) -> tuple[GanttEntry, ...]:
        """Return a read-only snapshot of all entries."""
        return tuple(self._entries)

    @property
    def end_time(self) -> int:
        """Return the end of the last interval, or 0 if nothing is recorded."""
        return self._entries[-1].end if self._entries else 0

    def record(self, *, pid: int, start: int, end: int) -> GanttEntry:
        """Append an interval to the chart.

        Returns:
            The recorded entry.

        Raises:
            ValueError: If the interval is empty or leaves a gap.

        """
        if start >= end:
            msg = f"Empty interval for process {pid}: start={start}, end={end}"
            raise ValueError(msg)
        if self._entries and start != self.end_time:
            msg = f"Interval for process {pid} starts at {start}, expected {self.end_time}"
            raise ValueError(msg)
        entry = GanttEntry(pid=pid, start=start, end=end)
        self._entries.append(entry)
        return entry

    def cpu_time(self) -> dict[int, int]:
        """Return total ticks on the CPU per PID, in ascending PID order."""
        totals: defaultdict[int, int] = defaultdict(int)
        for entry in self._entries:
            totals[entry.pid] += entry.duration
        return dict(sorted(totals.items()))
