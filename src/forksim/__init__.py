"""forksim — a discrete-time, single-CPU priority scheduler simulation.

Two seed processes run on one simulated CPU.  They fork children as
they make progress, receive periodic clock-driven signals, and take
turns according to priority and a fixed time quantum.  The run
produces a Gantt chart and per-process signal counts.

Quick start::

    from forksim.bootstrap import simulate

    result = simulate()
"""

__version__ = "0.1.0"
