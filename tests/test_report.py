"""Tests for result collection and text formatting."""

from forksim.bootstrap import simulate
from forksim.report import (
    ProcessSummary,
    SimulationResult,
    format_gantt_chart,
    format_report,
    format_signal_counts,
)
from forksim.timeline import GanttEntry

GANTT_ROWS = 27
PROCESS_COUNT = 13


def _small_result(*, dropped: int = 0) -> SimulationResult:
    """Build a hand-made two-process result."""
    summaries = (
        ProcessSummary(
            pid=1,
            process_class="PC",
            parent_pid=None,
            priority=1,
            total_ticks=5,
            executed_ticks=5,
            received_signals=1,
            fork_count=0,
        ),
        ProcessSummary(
            pid=12,
            process_class="PC",
            parent_pid=1,
            priority=1,
            total_ticks=5,
            executed_ticks=5,
            received_signals=2,
            fork_count=0,
        ),
    )
    gantt = (GanttEntry(pid=1, start=0, end=5), GanttEntry(pid=12, start=5, end=10))
    return SimulationResult(gantt=gantt, processes=summaries, dropped_signals=dropped, final_clock=10)


class TestSimulationResult:
    """Verify the frozen result object."""

    def test_signal_counts_in_pid_order(self) -> None:
        """Signal counts are keyed by PID, ascending."""
        result = simulate()
        assert list(result.signal_counts) == sorted(result.signal_counts)
        assert len(result.signal_counts) == PROCESS_COUNT

    def test_total_signals(self) -> None:
        """The total is the sum over every process."""
        assert _small_result().total_signals == 3  # noqa: PLR2004

    def test_gantt_is_copied(self) -> None:
        """The result carries the whole chart."""
        assert len(simulate().gantt) == GANTT_ROWS

    def test_to_dict(self) -> None:
        """JSON form exposes chart, counts and totals."""
        data = _small_result(dropped=1).to_dict()
        assert data["gantt"][1] == {"pid": 12, "start": 5, "end": 10}
        assert data["signals"] == {"1": 1, "12": 2}
        assert data["total_signals"] == 3  # noqa: PLR2004
        assert data["dropped_signals"] == 1
        assert data["processes"][1]["parent_pid"] == 1


class TestFormatting:
    """Verify the text report."""

    def test_gantt_table_layout(self) -> None:
        """Rows are padded into fixed-width columns."""
        text = format_gantt_chart(_small_result().gantt)
        lines = text.splitlines()
        assert lines[0] == "Gantt Chart:"
        assert lines[2] == "| Process  | Start Time | End Time |"
        assert lines[4] == "| P1       | 0          | 5        |"
        assert lines[5] == "| P12      | 5          | 10       |"
        assert lines[-1] == lines[1]

    def test_signal_lines(self) -> None:
        """One line per process, then the total."""
        text = format_signal_counts(_small_result())
        assert "P1: 1 signals" in text
        assert "P12: 2 signals" in text
        assert text.endswith("Total signals: 3")

    def test_dropped_line_only_when_dropped(self) -> None:
        """Dropped signals are reported only if there were any."""
        assert "Dropped" not in format_signal_counts(_small_result())
        assert "Dropped signals: 1" in format_signal_counts(_small_result(dropped=1))

    def test_full_report_has_both_sections(self) -> None:
        """The report starts with the chart and includes the counts."""
        text = format_report(simulate())
        assert text.startswith("Gantt Chart:")
        assert "Total signals: 25" in text
        assert "Dropped signals: 1" in text
