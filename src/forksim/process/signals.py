"""Signal delivery policy.

Signals in this simulation are not sent by processes.  They come from
the clock: every time the clock reaches a multiple of
``SIGNAL_INTERVAL`` (3, 6, 9, ...) exactly one signal is raised, much
like a periodic ``SIGALRM``.

Who receives it depends on what the CPU is about to do:

- **CURRENT** — no context switch is pending, so the running process
  gets the signal immediately.
- **DEFERRED** — a switch is pending, so the signal is held until the
  switch completes and is delivered to the *incoming* process.  If the
  switch leaves the CPU empty the signal is dropped.
- **NONE** — not a signal tick.

The decision is made before the switch and applied after it, which is
why routing is a separate pure function.
"""

from enum import StrEnum

SIGNAL_INTERVAL = 3


class SignalRoute(StrEnum):
    """Where the signal raised on a tick should go."""

    NONE = "none"
    CURRENT = "current"
    DEFERRED = "deferred"


def is_signal_tick(clock: int) -> bool:
    """Return True if a signal fires when the clock reaches *clock*."""
    return clock > 0 and clock % SIGNAL_INTERVAL == 0


def route_signal(clock: int, *, switch_pending: bool) -> SignalRoute:
    """Decide the route for the signal (if any) raised at *clock*.

    Args:
        clock: The clock value *after* this tick's advance.
        switch_pending: Whether the running process is about to yield.

    Returns:
        The route the engine must apply.

    """
    if not is_signal_tick(clock):
        return SignalRoute.NONE
    if switch_pending:
        return SignalRoute.DEFERRED
    return SignalRoute.CURRENT
