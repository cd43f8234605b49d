"""Tests for the fixed two-seed bootstrap."""

from forksim.bootstrap import FIRST_FORK_PID, SEED_CLASSES, boot, dmesg, simulate
from forksim.process.pcb import ProcessClass, ProcessState

SEED_COUNT = 2


class TestBoot:
    """Verify the starting state."""

    def test_seed_classes(self) -> None:
        """P1 is PA, P2 is PB."""
        assert SEED_CLASSES == (ProcessClass.PA, ProcessClass.PB)

    def test_first_fork_pid_is_three(self) -> None:
        """Forked children are numbered after the seeds."""
        assert FIRST_FORK_PID == 3  # noqa: PLR2004
        assert boot().next_pid == FIRST_FORK_PID

    def test_p1_runs_first(self) -> None:
        """P1 holds the CPU at time 0."""
        state = boot()
        assert state.current is not None
        assert state.current.pid == 1
        assert state.current.state is ProcessState.RUNNING
        assert state.clock == 0
        assert state.burst_start == 0

    def test_p2_is_queued(self) -> None:
        """P2 waits in the ready queue."""
        state = boot()
        ready = state.scheduler.ready_processes
        assert [p.pid for p in ready] == [2]
        assert ready[0].process_class is ProcessClass.PB

    def test_both_seeds_registered(self) -> None:
        """The registry holds both seeds."""
        assert sorted(boot().processes) == [1, 2]

    def test_dmesg_lists_boot_messages(self) -> None:
        """The boot log mentions each seed and completion."""
        lines = dmesg(boot())
        assert len(lines) == SEED_COUNT + 1
        assert "P1(PA)" in lines[0]
        assert lines[-1].startswith("[OK] Boot complete")

    def test_boots_are_independent(self) -> None:
        """Two boots share no state."""
        first = boot()
        second = boot()
        assert first.processes[1] is not second.processes[1]


class TestSimulate:
    """Verify the one-call entry point."""

    def test_simulate_returns_finished_result(self) -> None:
        """simulate() boots, runs and collects."""
        result = simulate()
        assert result.final_clock == 78  # noqa: PLR2004
        assert result.total_signals == 25  # noqa: PLR2004
