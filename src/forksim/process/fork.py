"""Fork policy — when does a process spawn a child, and of what class?

Forking is driven by execution progress.  Every ``FORK_INTERVAL``
executed ticks (3, 6, 9, ...) a process of a *forking* class spawns
exactly one child.  The child's class is always one step further down
the chain::

    PA → PB → PC → (nothing)

Because every child belongs to a class with fewer total ticks, the
fork tree is at most two levels deep and the simulation always ends.

The policy functions here are pure: they look at a process and answer
a question.  Only ``fork_process`` mutates anything (the parent's fork
counter), and only at the moment the child is actually created.
"""

from __future__ import annotations

from forksim.process.pcb import Process, ProcessClass

FORK_INTERVAL = 3

CHILD_CLASS: dict[ProcessClass, ProcessClass] = {
    ProcessClass.PA: ProcessClass.PB,
    ProcessClass.PB: ProcessClass.PC,
}
"""Map each forking class to the class of the children it spawns.

Classes missing from this table (PC) never fork.
"""


def child_class_of(process_class: ProcessClass) -> ProcessClass | None:
    """Return the class a *process_class* parent spawns, or None."""
    return CHILD_CLASS.get(process_class)


def expected_forks(executed_ticks: int) -> int:
    """Return how many forks a forking process owes after *executed_ticks*."""
    return executed_ticks // FORK_INTERVAL


def should_fork(process: Process) -> bool:
    """Decide whether *process* is due to fork right now.

    A process forks when its executed tick count sits on a milestone
    (a positive multiple of ``FORK_INTERVAL``) and it has not yet forked
    for that milestone.  Comparing ``fork_count`` with the number of
    milestones passed keeps a re-evaluated milestone from forking twice.
    """
    if child_class_of(process.process_class) is None:
        return False
    executed = process.executed_ticks
    if executed <= 0 or executed % FORK_INTERVAL != 0:
        return False
    return process.fork_count < expected_forks(executed)


def fork_process(parent: Process, *, pid: int) -> Process:
    """Create *parent*'s next child with the given PID.

    The parent's fork counter is bumped here, so callers must admit the
    returned child in the same step.

    Raises:
        ValueError: If the parent's class never forks.

    """
    child_class = child_class_of(parent.process_class)
    if child_class is None:
        msg = f"Process {parent.pid} of class {parent.process_class} cannot fork"
        raise ValueError(msg)
    child = Process(pid=pid, process_class=child_class, parent_pid=parent.pid)
    parent.record_fork()
    return child
