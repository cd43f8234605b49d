"""Run results and their text rendering.

Once a simulation finishes, ``collect_result`` freezes what the
outside world needs to see into a ``SimulationResult``:

- the Gantt chart, in recorded order;
- how many signals each process received, in ascending PID order;
- how many signals were dropped because no process could take them.

The formatting helpers are pure functions returning strings, so the
console and web front ends can share them and tests can check them
without capturing output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

    from forksim.engine import SimulationState
    from forksim.timeline import GanttEntry

_GANTT_BORDER = "+----------+------------+----------+"


@dataclass(frozen=True)
class ProcessSummary:
    """Final counters of one process."""

    pid: int
    process_class: str
    parent_pid: int | None
    priority: int
    total_ticks: int
    executed_ticks: int
    received_signals: int
    fork_count: int

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping."""
        return {
            "pid": self.pid,
            "class": self.process_class,
            "parent_pid": self.parent_pid,
            "priority": self.priority,
            "total_ticks": self.total_ticks,
            "executed_ticks": self.executed_ticks,
            "received_signals": self.received_signals,
            "fork_count": self.fork_count,
        }


@dataclass(frozen=True)
class SimulationResult:
    """Read-only outcome of a finished run."""

    gantt: tuple[GanttEntry, ...]
    processes: tuple[ProcessSummary, ...]
    dropped_signals: int
    final_clock: int

    @property
    def signal_counts(self) -> dict[int, int]:
        """Return received signals per PID, in ascending PID order."""
        return {p.pid: p.received_signals for p in self.processes}

    @property
    def total_signals(self) -> int:
        """Return the sum of signals received by every process."""
        return sum(p.received_signals for p in self.processes)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping of the whole result."""
        return {
            "gantt": [entry.to_dict() for entry in self.gantt],
            "signals": {str(pid): count for pid, count in self.signal_counts.items()},
            "total_signals": self.total_signals,
            "dropped_signals": self.dropped_signals,
            "final_clock": self.final_clock,
            "processes": [p.to_dict() for p in self.processes],
        }


def collect_result(state: SimulationState) -> SimulationResult:
    """Freeze a finished simulation into a ``SimulationResult``."""
    summaries = tuple(
        ProcessSummary(
            pid=p.pid,
            process_class=str(p.process_class),
            parent_pid=p.parent_pid,
            priority=p.priority,
            total_ticks=p.total_ticks,
            executed_ticks=p.executed_ticks,
            received_signals=p.received_signals,
            fork_count=p.fork_count,
        )
        for p in sorted(state.processes.values(), key=lambda p: p.pid)
    )
    return SimulationResult(
        gantt=state.timeline.entries,
        processes=summaries,
        dropped_signals=state.dropped_signals,
        final_clock=state.clock,
    )


def format_gantt_chart(entries: Iterable[GanttEntry]) -> str:
    """Render Gantt entries as a boxed table."""
    lines = [
        "Gantt Chart:",
        _GANTT_BORDER,
        "| Process  | Start Time | End Time |",
        _GANTT_BORDER,
    ]
    lines.extend(f"| {'P' + str(e.pid):<8} | {e.start:<10} | {e.end:<8} |" for e in entries)
    lines.append(_GANTT_BORDER)
    return "\n".join(lines)


def format_signal_counts(result: SimulationResult) -> str:
    """Render per-process signal counts followed by the total."""
    lines = ["Signal Count per Process:"]
    lines.extend(f"P{pid}: {count} signals" for pid, count in result.signal_counts.items())
    lines.append("")
    lines.append(f"Total signals: {result.total_signals}")
    if result.dropped_signals:
        lines.append(f"Dropped signals: {result.dropped_signals}")
    return "\n".join(lines)


def format_report(result: SimulationResult) -> str:
    """Render the full report: Gantt chart, then signal counts."""
    return f"{format_gantt_chart(result.gantt)}\n\n{format_signal_counts(result)}"
