"""Tests for the ready queue and the single-CPU scheduler.

Selection is by smallest priority number, ties broken by arrival order.
The scheduler owns the queue and the CPU slot and enforces process
states as processes move between them.
"""

import pytest

from forksim.process.pcb import Process, ProcessClass, ProcessState
from forksim.process.scheduler import ReadyQueue, Scheduler

THREE_QUEUED = 3


def _ready(pid: int, process_class: ProcessClass) -> Process:
    """Create an admitted (READY) process."""
    process = Process(pid=pid, process_class=process_class)
    process.admit()
    return process


class TestReadyQueue:
    """Verify insertion and priority extraction."""

    def test_empty_queue_returns_none(self) -> None:
        """Extracting from an empty queue is not an error."""
        assert ReadyQueue().extract_highest_priority() is None

    def test_insert_requires_ready(self) -> None:
        """Only READY processes may be queued."""
        queue = ReadyQueue()
        with pytest.raises(RuntimeError, match="Cannot queue"):
            queue.insert(Process(pid=1, process_class=ProcessClass.PA))

    def test_smallest_priority_wins(self) -> None:
        """PC (1) beats PA (2) beats PB (3) regardless of arrival."""
        queue = ReadyQueue()
        queue.insert(_ready(1, ProcessClass.PB))
        queue.insert(_ready(2, ProcessClass.PA))
        queue.insert(_ready(3, ProcessClass.PC))
        picked = [queue.extract_highest_priority() for _ in range(THREE_QUEUED)]
        assert [p.pid for p in picked if p is not None] == [3, 2, 1]

    def test_ties_break_by_arrival(self) -> None:
        """Within a tier, the earliest insertion wins."""
        queue = ReadyQueue()
        for pid in (5, 2, 9):
            queue.insert(_ready(pid, ProcessClass.PB))
        picked = [queue.extract_highest_priority() for _ in range(THREE_QUEUED)]
        assert [p.pid for p in picked if p is not None] == [5, 2, 9]

    def test_reinserted_process_goes_behind_peers(self) -> None:
        """A process re-entering the queue gets a fresh arrival stamp."""
        queue = ReadyQueue()
        first = _ready(1, ProcessClass.PB)
        queue.insert(first)
        queue.insert(_ready(2, ProcessClass.PB))
        extracted = queue.extract_highest_priority()
        assert extracted is first
        queue.insert(first)
        second = queue.extract_highest_priority()
        assert second is not None
        assert second.pid == 2  # noqa: PLR2004

    def test_len_and_snapshot(self) -> None:
        """Length and snapshot reflect arrival order."""
        queue = ReadyQueue()
        queue.insert(_ready(1, ProcessClass.PB))
        queue.insert(_ready(2, ProcessClass.PC))
        assert len(queue) == 2  # noqa: PLR2004
        assert [p.pid for p in queue.processes] == [1, 2]


class TestScheduler:
    """Verify CPU slot management."""

    def test_new_scheduler_is_idle(self) -> None:
        """No current process and no ready processes."""
        scheduler = Scheduler()
        assert scheduler.current is None
        assert scheduler.is_idle

    def test_add_admits_process(self) -> None:
        """Adding a NEW process makes it READY and queued."""
        scheduler = Scheduler()
        process = Process(pid=1, process_class=ProcessClass.PA)
        scheduler.add(process)
        assert process.state is ProcessState.READY
        assert scheduler.ready_count == 1

    def test_dispatch_fills_cpu(self) -> None:
        """Dispatch moves the best process onto the CPU."""
        scheduler = Scheduler()
        process = Process(pid=1, process_class=ProcessClass.PA)
        scheduler.add(process)
        assert scheduler.dispatch() is process
        assert scheduler.current is process
        assert process.state is ProcessState.RUNNING

    def test_dispatch_empty_returns_none(self) -> None:
        """Dispatching with nothing ready leaves the CPU empty."""
        assert Scheduler().dispatch() is None

    def test_dispatch_while_busy_raises(self) -> None:
        """The single CPU slot cannot hold two processes."""
        scheduler = Scheduler()
        scheduler.run_directly(Process(pid=1, process_class=ProcessClass.PA))
        scheduler.add(Process(pid=2, process_class=ProcessClass.PB))
        with pytest.raises(RuntimeError, match="still holds the CPU"):
            scheduler.dispatch()

    def test_run_directly_bypasses_queue(self) -> None:
        """A boot process starts RUNNING without being queued."""
        scheduler = Scheduler()
        process = Process(pid=1, process_class=ProcessClass.PA)
        scheduler.run_directly(process)
        assert scheduler.current is process
        assert scheduler.ready_count == 0

    def test_release_requeues_incomplete(self) -> None:
        """An unfinished process goes back to the queue with a fresh quantum."""
        scheduler = Scheduler()
        process = Process(pid=1, process_class=ProcessClass.PA)
        scheduler.run_directly(process)
        process.execute_tick()
        scheduler.release()
        assert process.state is ProcessState.READY
        assert process.current_quantum == 0
        assert scheduler.ready_processes == [process]
        assert scheduler.context_switches == 1

    def test_release_retires_complete(self) -> None:
        """A finished process is terminated and never queued again."""
        scheduler = Scheduler()
        process = Process(pid=1, process_class=ProcessClass.PC)
        scheduler.run_directly(process)
        while not process.is_complete:
            process.execute_tick()
        scheduler.release()
        assert process.state is ProcessState.TERMINATED
        assert scheduler.is_idle

    def test_release_without_current_raises(self) -> None:
        """There must be a running process to release."""
        with pytest.raises(RuntimeError, match="No process is currently running"):
            Scheduler().release()
