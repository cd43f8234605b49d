"""Bootstrap — the fixed two-process starting scenario.

Every run starts the same way:

- **P1** (class PA) is placed straight onto the CPU; its first burst
  starts at time 0.
- **P2** (class PB) waits in the ready queue.
- Forked children are numbered from ``FIRST_FORK_PID`` (3) onwards.

``boot`` builds that state and writes a short boot log.  ``simulate``
is the one-call entry point: boot, run to completion, collect results.
"""

from __future__ import annotations

from forksim.engine import SimulationState, register, run
from forksim.logging import LogLevel
from forksim.process.pcb import Process, ProcessClass
from forksim.report import SimulationResult, collect_result

SEED_CLASSES: tuple[ProcessClass, ...] = (ProcessClass.PA, ProcessClass.PB)
FIRST_FORK_PID = len(SEED_CLASSES) + 1


def boot() -> SimulationState:
    """Create the initial simulation state.

    The first seed runs immediately; the rest are queued in order.
    """
    state = SimulationState(next_pid=FIRST_FORK_PID)
    for pid, process_class in enumerate(SEED_CLASSES, start=1):
        process = Process(pid=pid, process_class=process_class)
        register(state, process)
        if state.scheduler.current is None:
            state.scheduler.run_directly(process)
            state.burst_start = state.clock
        else:
            state.scheduler.add(process)
        state.logger.log(LogLevel.INFO, f"[OK] Seeded {process}", source="boot")
    state.logger.log(
        LogLevel.INFO,
        f"[OK] Boot complete: {state.current} running, {state.scheduler.ready_count} ready",
        source="boot",
    )
    return state


def dmesg(state: SimulationState) -> list[str]:
    """Return the boot log lines (like Linux ``dmesg``)."""
    return [entry.message for entry in state.logger.filter(source="boot")]


def simulate() -> SimulationResult:
    """Boot, run to completion and return the results."""
    return collect_result(run(boot()))
