"""Console entry point.

``run()`` boots the fixed scenario, simulates it to completion and
prints the report.  With ``--log`` the event log is printed first;
``--level`` picks the minimum severity shown and ``--pid`` narrows the
log to the events of one process.

The argument parsing is kept in ``build_parser`` and the rendering in
``render`` so both are testable without touching stdout.
"""

from __future__ import annotations

import argparse

from forksim.bootstrap import boot
from forksim.engine import run as run_simulation
from forksim.logging import LogLevel
from forksim.report import collect_result, format_report


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``forksim`` command."""
    parser = argparse.ArgumentParser(
        prog="forksim",
        description="Simulate a preemptive priority scheduler with forking processes.",
    )
    parser.add_argument("--log", action="store_true", help="print the event log before the report")
    parser.add_argument(
        "--level",
        choices=[level.name.lower() for level in LogLevel],
        default="info",
        help="minimum log level shown with --log (default: info)",
    )
    parser.add_argument(
        "--pid",
        type=int,
        default=None,
        help="with --log, show only events about this process",
    )
    return parser


def render(
    *,
    show_log: bool = False,
    min_level: LogLevel = LogLevel.INFO,
    pid: int | None = None,
) -> str:
    """Run the simulation and return everything the CLI prints."""
    state = run_simulation(boot())
    report = format_report(collect_result(state))
    if not show_log:
        return report
    entries = state.logger.filter(min_level=min_level, pid=pid)
    heading = "Event Log:" if pid is None else f"Event Log (P{pid}):"
    log = "\n".join(str(entry) for entry in entries)
    return f"{heading}\n{log}\n\n{report}"


def run(argv: list[str] | None = None) -> None:
    """Parse *argv* and print the simulation report.

    This is the ``forksim`` console entry point.
    """
    args = build_parser().parse_args(argv)
    text = render(show_log=args.log, min_level=LogLevel[args.level.upper()], pid=args.pid)
    print(text)  # noqa: T201
