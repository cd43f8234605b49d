"""CPU scheduler — the ready queue and the single CPU slot.

The ready queue holds every process that could run but currently does
not.  Selection is *priority first, arrival second*: the process with
the numerically smallest priority wins, and among equals the one that
entered the queue earliest wins (FIFO within a tier).

Priority is looked up from the process at selection time, so the
queue keeps no sorted structure.  Instead every insertion is stamped
with a monotonically increasing sequence number and selection does a
full scan for the smallest ``(priority, sequence)`` pair.  The explicit
sequence key means FIFO tie-breaking never depends on container
iteration order.

The ``Scheduler`` owns the ready queue and the CPU slot.  It does not
decide *when* to switch — that is the engine's job — it only carries
out the moves and enforces the process state machine along the way.
"""

from __future__ import annotations

from collections import deque
from itertools import count

from forksim.process.pcb import Process, ProcessState

TIME_QUANTUM = 4


class ReadyQueue:
    """Runnable processes awaiting the CPU, stamped with arrival order."""

    def __init__(self) -> None:
        """Create an empty ready queue."""
        self._entries: deque[tuple[int, Process]] = deque()
        self._sequence = count()

    def __len__(self) -> int:
        """Return the number of queued processes."""
        return len(self._entries)

    @property
    def processes(self) -> list[Process]:
        """Return a snapshot of the queued processes in arrival order."""
        return [process for _, process in self._entries]

    def insert(self, process: Process) -> None:
        """Append a READY process to the queue.

        Raises:
            RuntimeError: If the process is not in the READY state.

        """
        if process.state is not ProcessState.READY:
            msg = f"Cannot queue process {process.pid}: state is {process.state}, expected ready"
            raise RuntimeError(msg)
        self._entries.append((next(self._sequence), process))

    def extract_highest_priority(self) -> Process | None:
        """Remove and return the best process, or None if the queue is empty."""
        if not self._entries:
            return None
        best_idx = 0
        best_key = (self._entries[0][1].priority, self._entries[0][0])
        for i in range(1, len(self._entries)):
            seq, process = self._entries[i]
            key = (process.priority, seq)
            if key < best_key:
                best_key = key
                best_idx = i
        _, process = self._entries[best_idx]
        del self._entries[best_idx]
        return process


class Scheduler:
    """The single-CPU scheduler — ready queue plus the CPU slot."""

    def __init__(self) -> None:
        """Create a scheduler with an empty queue and an idle CPU."""
        self._ready_queue = ReadyQueue()
        self._current: Process | None = None
        self._context_switches: int = 0

    @property
    def current(self) -> Process | None:
        """Return the process holding the CPU slot, or None."""
        return self._current

    @property
    def ready_count(self) -> int:
        """Return the number of processes in the ready queue."""
        return len(self._ready_queue)

    @property
    def ready_processes(self) -> list[Process]:
        """Return a snapshot of the ready queue in arrival order."""
        return self._ready_queue.processes

    @property
    def context_switches(self) -> int:
        """Return how many times a burst has ended."""
        return self._context_switches

    @property
    def is_idle(self) -> bool:
        """Return True when nothing is running and nothing is ready."""
        return self._current is None and not self._ready_queue

    def add(self, process: Process) -> None:
        """Admit a NEW process and append it to the ready queue."""
        process.admit()
        self._ready_queue.insert(process)

    def dispatch(self) -> Process | None:
        """Move the best ready process into the CPU slot.

        Returns:
            The dispatched process, or None if the queue is empty.

        Raises:
            RuntimeError: If the CPU slot is already occupied.

        """
        if self._current is not None:
            msg = f"Cannot dispatch: process {self._current.pid} still holds the CPU"
            raise RuntimeError(msg)
        process = self._ready_queue.extract_highest_priority()
        if process is None:
            return None
        process.dispatch()
        self._current = process
        return process

    def run_directly(self, process: Process) -> None:
        """Place a NEW process straight into an empty CPU slot.

        Used at boot, where the first process starts on the CPU without
        passing through the ready queue.
        """
        if self._current is not None:
            msg = f"Cannot run process {process.pid}: CPU is held by {self._current.pid}"
            raise RuntimeError(msg)
        process.admit()
        process.dispatch()
        self._current = process

    def release(self) -> Process:
        """End the current burst and free the CPU slot.

        An incomplete process has its quantum reset and goes to the back
        of the ready queue.  A complete one is terminated and never
        queued again.

        Returns:
            The process that just left the CPU.

        Raises:
            RuntimeError: If no process is currently running.

        """
        process = self._current
        if process is None:
            msg = "No process is currently running"
            raise RuntimeError(msg)
        if process.is_complete:
            process.terminate()
        else:
            process.preempt()
            process.reset_quantum()
            self._ready_queue.insert(process)
        self._current = None
        self._context_switches += 1
        return process
