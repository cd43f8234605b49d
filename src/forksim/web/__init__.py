"""Browser front end for forksim.

This package provides a Flask application that serves simulation
results over HTTP.  It is an **optional** extra — install with::

    pip install forksim[web]

The ``create_app`` factory in ``app.py`` serves three endpoints:

- ``GET /`` — plain-text report.
- ``GET /api/run`` — full result as JSON.
- ``GET /api/log`` — event log as JSON, filterable by level and pid.
"""
