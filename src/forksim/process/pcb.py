"""Process descriptor (the Process Control Block).

Every process in the simulation belongs to one of three fixed
*classes*.  The class is chosen at creation and never changes; it
decides how important the process is (its priority) and how much CPU
work it needs before it finishes (its total ticks):

    =====  ========  ===========
    Class  Priority  Total ticks
    =====  ========  ===========
    PC     1         5
    PA     2         10
    PB     3         7
    =====  ========  ===========

Smaller priority numbers win — PC beats PA beats PB.

Processes follow a strict state machine.  Each transition method
(admit, dispatch, preempt, terminate) checks that the process is in
the correct source state before moving it::

    NEW → READY ⇄ RUNNING → TERMINATED

There is no WAITING state: simulated processes never block.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ProcessState(StrEnum):
    """Lifecycle states of a simulated process.

    - NEW: just created, not yet admitted.
    - READY: waiting in the ready queue for CPU time.
    - RUNNING: holding the CPU slot.
    - TERMINATED: executed all of its ticks; kept for reporting.
    """

    NEW = "new"
    READY = "ready"
    RUNNING = "running"
    TERMINATED = "terminated"


class ProcessClass(StrEnum):
    """The closed set of process classes."""

    PA = "PA"
    PB = "PB"
    PC = "PC"


@dataclass(frozen=True)
class ClassProfile:
    """Scheduling attributes fixed by a process class."""

    priority: int
    total_ticks: int


CLASS_PROFILES: dict[ProcessClass, ClassProfile] = {
    ProcessClass.PA: ClassProfile(priority=2, total_ticks=10),
    ProcessClass.PB: ClassProfile(priority=3, total_ticks=7),
    ProcessClass.PC: ClassProfile(priority=1, total_ticks=5),
}
"""Map every process class to its priority and CPU demand.

A process copies these values at construction; changing the table
later has no effect on processes that already exist.
"""


def parse_process_class(value: ProcessClass | str) -> ProcessClass:
    """Return the ``ProcessClass`` named by *value*.

    Raises:
        ValueError: If *value* is not one of PA, PB or PC.

    """
    try:
        return ProcessClass(value)
    except ValueError:
        msg = f"Unknown process class {value!r} (expected one of PA, PB, PC)"
        raise ValueError(msg) from None


class Process:
    """A simulated process.

    Counters only ever go up, with one exception: ``current_quantum``
    is reset to zero whenever the process goes back to the ready queue,
    because it measures the length of the current burst only.
    """

    def __init__(
        self,
        *,
        pid: int,
        process_class: ProcessClass | str,
        parent_pid: int | None = None,
    ) -> None:
        """Create a new process in the NEW state.

        Args:
            pid: Unique positive process identifier.
            process_class: One of PA, PB, PC.
            parent_pid: PID of the forking parent, if any.

        Raises:
            ValueError: If the pid is not positive or the class is unknown.

        """
        if pid <= 0:
            msg = f"PID must be positive, got {pid}"
            raise ValueError(msg)
        self._pid: int = pid
        self._class: ProcessClass = parse_process_class(process_class)
        profile = CLASS_PROFILES[self._class]
        self._priority: int = profile.priority
        self._total_ticks: int = profile.total_ticks
        self._parent_pid: int | None = parent_pid
        self._state: ProcessState = ProcessState.NEW
        self._executed_ticks: int = 0
        self._current_quantum: int = 0
        self._received_signals: int = 0
        self._fork_count: int = 0

    @property
    def pid(self) -> int:
        """Return the unique process identifier."""
        return self._pid

    @property
    def process_class(self) -> ProcessClass:
        """Return the process class (immutable)."""
        return self._class

    @property
    def priority(self) -> int:
        """Return the scheduling priority (smaller = more important)."""
        return self._priority

    @property
    def total_ticks(self) -> int:
        """Return the number of ticks needed to complete."""
        return self._total_ticks

    @property
    def parent_pid(self) -> int | None:
        """Return the parent's PID, or None for seed processes."""
        return self._parent_pid

    @property
    def state(self) -> ProcessState:
        """Return the current lifecycle state."""
        return self._state

    @property
    def executed_ticks(self) -> int:
        """Return the ticks executed so far."""
        return self._executed_ticks

    @property
    def remaining_ticks(self) -> int:
        """Return the ticks still needed to complete."""
        return self._total_ticks - self._executed_ticks

    @property
    def current_quantum(self) -> int:
        """Return the ticks executed in the current burst."""
        return self._current_quantum

    @property
    def received_signals(self) -> int:
        """Return how many signals were delivered to this process."""
        return self._received_signals

    @property
    def fork_count(self) -> int:
        """Return how many children this process has spawned."""
        return self._fork_count

    @property
    def is_complete(self) -> bool:
        """Return True once every required tick has been executed."""
        return self._executed_ticks >= self._total_ticks

    def execute_tick(self) -> None:
        """Consume one tick of CPU time.

        Raises:
            RuntimeError: If the process is not running or already complete.

        """
        if self._state is not ProcessState.RUNNING:
            msg = f"Cannot execute: process {self._pid} is {self._state}, expected running"
            raise RuntimeError(msg)
        if self.is_complete:
            msg = f"Cannot execute: process {self._pid} has already completed"
            raise RuntimeError(msg)
        self._executed_ticks += 1
        self._current_quantum += 1

    def reset_quantum(self) -> None:
        """Start a fresh burst on the next dispatch."""
        self._current_quantum = 0

    def receive_signal(self) -> None:
        """Count one delivered signal."""
        self._received_signals += 1

    def record_fork(self) -> None:
        """Count one spawned child."""
        self._fork_count += 1

    def _transition(self, action: str, expected: ProcessState, target: ProcessState) -> None:
        """Enforce a state transition.

        Raises:
            RuntimeError: If the process is not in the expected state.

        """
        if self._state is not expected:
            msg = f"Cannot {action}: process {self._pid} is {self._state}, expected {expected}"
            raise RuntimeError(msg)
        self._state = target

    def admit(self) -> None:
        """Transition NEW → READY."""
        self._transition("admit", ProcessState.NEW, ProcessState.READY)

    def dispatch(self) -> None:
        """Transition READY → RUNNING."""
        self._transition("dispatch", ProcessState.READY, ProcessState.RUNNING)

    def preempt(self) -> None:
        """Transition RUNNING → READY."""
        self._transition("preempt", ProcessState.RUNNING, ProcessState.READY)

    def terminate(self) -> None:
        """Transition RUNNING → TERMINATED.

        Raises:
            RuntimeError: If the process is not running or still has
                ticks left to execute.

        """
        if not self.is_complete:
            msg = (
                f"Cannot terminate: process {self._pid} has executed "
                f"{self._executed_ticks}/{self._total_ticks} ticks"
            )
            raise RuntimeError(msg)
        self._transition("terminate", ProcessState.RUNNING, ProcessState.TERMINATED)

    def __str__(self) -> str:
        """Return the short label used in reports, e.g. ``P1(PA)``."""
        return f"P{self._pid}({self._class})"

    def __repr__(self) -> str:
        """Return a debug-friendly representation."""
        return (
            f"Process(pid={self._pid}, class={self._class}, state={self._state}, "
            f"executed={self._executed_ticks}/{self._total_ticks})"
        )
