"""Flask application factory for the forksim web front end.

The ``create_app`` function returns a Flask app with three endpoints:

- ``GET /`` — the plain-text report (Gantt chart and signal counts).
- ``GET /api/run`` — the full result as JSON.
- ``GET /api/log`` — the event log as JSON, filtered by ``?level=`` and ``?pid=``.

The simulation is deterministic, so each request simply runs it again.
"""

from __future__ import annotations

from flask import Flask, Response, jsonify, request

from forksim.bootstrap import boot
from forksim.engine import run
from forksim.logging import LogLevel
from forksim.report import collect_result, format_report

_HTTP_BAD_REQUEST = 400


def create_app() -> Flask:
    """Create and configure the Flask application.

    Returns:
        A configured Flask application ready to serve.

    """
    app = Flask(__name__)

    @app.route("/")
    def index() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the text report."""
        result = collect_result(run(boot()))
        return Response(format_report(result), mimetype="text/plain")

    @app.route("/api/run")
    def run_simulation() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the simulation result as JSON."""
        return jsonify(collect_result(run(boot())).to_dict())

    @app.route("/api/log")
    def event_log() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Return the event log as JSON.

        Accepts optional query parameters: ``level`` (debug, info,
        warning, error) giving the minimum severity, and ``pid`` keeping
        only the events about one process.

        """
        level_name = request.args.get("level", "debug").upper()
        if level_name not in LogLevel.__members__:
            return jsonify({"error": f"Unknown log level {level_name.lower()!r}"}), _HTTP_BAD_REQUEST
        pid = request.args.get("pid", type=int)
        if "pid" in request.args and pid is None:
            return jsonify({"error": "pid must be an integer"}), _HTTP_BAD_REQUEST

        state = run(boot())
        entries = state.logger.filter(min_level=LogLevel[level_name], pid=pid)
        return jsonify({"entries": [e.to_dict() for e in entries]})

    return app


def main() -> None:
    """Run the web development server.

    This is the ``forksim-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
