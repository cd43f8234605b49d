"""Process subsystem — PCB, fork policy, signal policy, and scheduling.

Re-exports public symbols so callers can write::

    from forksim.process import Process, ProcessClass, Scheduler
"""

from forksim.process.fork import (
    CHILD_CLASS,
    FORK_INTERVAL,
    child_class_of,
    fork_process,
    should_fork,
)
from forksim.process.pcb import (
    CLASS_PROFILES,
    ClassProfile,
    Process,
    ProcessClass,
    ProcessState,
    parse_process_class,
)
from forksim.process.scheduler import TIME_QUANTUM, ReadyQueue, Scheduler
from forksim.process.signals import (
    SIGNAL_INTERVAL,
    SignalRoute,
    is_signal_tick,
    route_signal,
)

__all__ = [
    "CHILD_CLASS",
    "CLASS_PROFILES",
    "FORK_INTERVAL",
    "SIGNAL_INTERVAL",
    "TIME_QUANTUM",
    "ClassProfile",
    "Process",
    "ProcessClass",
    "ProcessState",
    "ReadyQueue",
    "Scheduler",
    "SignalRoute",
    "child_class_of",
    "fork_process",
    "is_signal_tick",
    "parse_process_class",
    "route_signal",
    "should_fork",
]
