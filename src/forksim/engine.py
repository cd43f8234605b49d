"""Execution engine — the tick-by-tick driver of the simulation.

Each call to ``step`` simulates exactly one tick of CPU time:

    1. **Admit** — if the CPU slot is empty, dispatch the best ready
       process and start a new burst at the current clock value.
    2. **Execute** — the running process consumes one tick.
    3. **Fork** — if the fork policy says so, a child is created and
       queued immediately.
    4. **Advance** the clock by one.
    5. **Decide** whether the running process must yield: it has
       completed, or its burst reached ``TIME_QUANTUM`` ticks.  Priority
       alone never preempts a running burst.
    6. **Route the signal** raised on this tick (if any).  When a
       switch is pending the signal is held for the incoming process.
    7. **Switch** — record the Gantt interval, requeue or retire the
       outgoing process, dispatch the next one and hand it any held
       signal.

All mutable state — clock, scheduler, process registry, timeline, id
counter, log — lives in one ``SimulationState`` value that every step
function receives.  Nothing is kept in module globals, so any number
of independent simulations can exist side by side.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from forksim.logging import Logger, LogLevel
from forksim.process.fork import fork_process, should_fork
from forksim.process.pcb import Process
from forksim.process.scheduler import TIME_QUANTUM, Scheduler
from forksim.process.signals import SignalRoute, route_signal
from forksim.timeline import Timeline


class SimulationError(RuntimeError):
    """Raise when the engine is driven out of order.

    Examples: executing a tick with an empty CPU slot, or registering
    two processes under the same PID.
    """


@dataclass
class SimulationState:
    """Everything a running simulation knows.

    Attributes:
        scheduler: Ready queue and CPU slot.
        processes: Registry of every process ever created, by PID.
        timeline: Gantt chart recorded so far.
        logger: Event log.
        clock: Current simulated time in ticks.
        next_pid: PID the next forked child will receive.
        burst_start: Clock value at which the running burst began.
        dropped_signals: Signals raised while the CPU was left empty.

    """

    scheduler: Scheduler = field(default_factory=Scheduler)
    processes: dict[int, Process] = field(default_factory=dict)
    timeline: Timeline = field(default_factory=Timeline)
    logger: Logger = field(default_factory=Logger)
    clock: int = 0
    next_pid: int = 1
    burst_start: int = 0
    dropped_signals: int = 0

    @property
    def current(self) -> Process | None:
        """Return the process holding the CPU slot, or None."""
        return self.scheduler.current

    @property
    def finished(self) -> bool:
        """Return True once nothing is running and nothing is ready."""
        return self.scheduler.is_idle


@dataclass(frozen=True)
class TickEvent:
    """What happened during one simulated tick.

    ``tick`` is the clock value after the advance.  ``signal_pid`` is
    the process that received this tick's signal, if one was delivered.
    """

    tick: int
    pid: int
    child_pid: int | None = None
    switched: bool = False
    incoming_pid: int | None = None
    signal_pid: int | None = None
    signal_dropped: bool = False


def register(state: SimulationState, process: Process) -> None:
    """Add *process* to the registry.

    Raises:
        SimulationError: If the PID is already registered.

    """
    if process.pid in state.processes:
        msg = f"PID {process.pid} is already registered"
        raise SimulationError(msg)
    state.processes[process.pid] = process


def _require_current(state: SimulationState) -> Process:
    process = state.scheduler.current
    if process is None:
        msg = "No process holds the CPU"
        raise SimulationError(msg)
    return process


def admit(state: SimulationState) -> Process | None:
    """Fill an empty CPU slot from the ready queue.

    Returns:
        The running process, or None if there is nothing left to run.

    """
    if state.scheduler.current is not None:
        return state.scheduler.current
    process = state.scheduler.dispatch()
    if process is not None:
        state.burst_start = state.clock
        state.logger.log(
            LogLevel.INFO,
            f"Dispatched {process}",
            source="scheduler",
            tick=state.clock,
            pid=process.pid,
        )
    return process


def execute_tick(state: SimulationState) -> Process | None:
    """Run the current process for one tick and advance the clock.

    The fork policy is consulted on the process's post-tick state; a
    child, if due, is registered and queued before the clock moves.

    Returns:
        The newly forked child, or None.

    """
    process = _require_current(state)
    process.execute_tick()
    child: Process | None = None
    if should_fork(process):
        child = fork_process(process, pid=state.next_pid)
        register(state, child)
        state.scheduler.add(child)
        state.next_pid += 1
    state.clock += 1
    if child is not None:
        state.logger.log(
            LogLevel.INFO,
            f"{process} forked {child} at {process.executed_ticks} executed ticks",
            source="fork",
            tick=state.clock,
            pid=process.pid,
        )
    return child


def needs_switch(process: Process) -> bool:
    """Return True if *process* must give up the CPU now."""
    return process.is_complete or process.current_quantum >= TIME_QUANTUM


def deliver_signal(state: SimulationState, process: Process) -> None:
    """Deliver the current tick's signal to *process*."""
    process.receive_signal()
    state.logger.log(
        LogLevel.DEBUG,
        f"Signal delivered to {process}",
        source="signal",
        tick=state.clock,
        pid=process.pid,
    )


def context_switch(state: SimulationState, *, signal_pending: bool = False) -> Process | None:
    """End the current burst and dispatch the next process.

    Args:
        state: The simulation to act on.
        signal_pending: Whether a signal raised this tick is waiting
            for the incoming process.

    Returns:
        The incoming process, or None if the ready queue was empty.

    """
    outgoing = _require_current(state)
    state.timeline.record(pid=outgoing.pid, start=state.burst_start, end=state.clock)
    state.scheduler.release()
    if outgoing.is_complete:
        state.logger.log(
            LogLevel.INFO,
            f"{outgoing} completed",
            source="scheduler",
            tick=state.clock,
            pid=outgoing.pid,
        )
    else:
        state.logger.log(
            LogLevel.INFO,
            f"{outgoing} preempted after quantum ({outgoing.remaining_ticks} ticks left)",
            source="scheduler",
            tick=state.clock,
            pid=outgoing.pid,
        )

    incoming = admit(state)
    if signal_pending:
        if incoming is None:
            state.dropped_signals += 1
            state.logger.log(
                LogLevel.WARNING,
                "Signal dropped: no process to receive it",
                source="signal",
                tick=state.clock,
            )
        else:
            deliver_signal(state, incoming)
    return incoming


def step(state: SimulationState) -> TickEvent | None:
    """Simulate one tick.

    Returns:
        A description of the tick, or None if there was nothing to run.

    """
    process = admit(state)
    if process is None:
        return None

    child = execute_tick(state)
    switch_pending = needs_switch(process)
    route = route_signal(state.clock, switch_pending=switch_pending)

    signal_pid: int | None = None
    if route is SignalRoute.CURRENT:
        deliver_signal(state, process)
        signal_pid = process.pid

    incoming: Process | None = None
    if switch_pending:
        incoming = context_switch(state, signal_pending=route is SignalRoute.DEFERRED)
        if route is SignalRoute.DEFERRED and incoming is not None:
            signal_pid = incoming.pid

    return TickEvent(
        tick=state.clock,
        pid=process.pid,
        child_pid=child.pid if child is not None else None,
        switched=switch_pending,
        incoming_pid=incoming.pid if incoming is not None else None,
        signal_pid=signal_pid,
        signal_dropped=route is SignalRoute.DEFERRED and incoming is None,
    )


def run(state: SimulationState) -> SimulationState:
    """Step until nothing is left to run.

    Returns:
        The same state, now finished.

    """
    while not state.finished:
        if step(state) is None:
            break
    state.logger.log(
        LogLevel.INFO,
        f"Simulation finished: {len(state.processes)} processes, "
        f"{len(state.timeline)} bursts",
        source="engine",
        tick=state.clock,
    )
    return state
