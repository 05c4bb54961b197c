"""
Command-line entry point for the todo service.

Runs the Flask app on Werkzeug's threaded server, so each request is
handled on its own thread against the single shared task store.

Exit codes:
    - ``0`` -- server stopped normally
    - ``1`` -- the task store could not be opened
"""

from __future__ import annotations

import argparse
import logging
import sys

from todo_app import create_app
from todo_app.store import StorageError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_STORE_ERROR = 1


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the server."""
    parser = argparse.ArgumentParser(description="Run the todo task service.")
    parser.add_argument(
        "--persist",
        action="store_true",
        help="Persist tasks to SQLite instead of keeping them in memory",
    )
    parser.add_argument(
        "--dbpath",
        default="tasks.db",
        help="Path to the SQLite file (used with --persist)",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    parser.add_argument("--port", type=int, default=8080, help="Port to listen on")
    parser.add_argument(
        "--env",
        default=None,
        help="Configuration environment (development, testing, production)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Build the app from CLI flags and serve it until interrupted."""
    args = parse_args(argv)
    overrides = {"TASKS_PERSIST": args.persist, "TASKS_DB_PATH": args.dbpath}

    try:
        app = create_app(args.env, overrides=overrides)
    except StorageError as exc:
        logger.error("Cannot start: %s", exc)
        return EXIT_STORE_ERROR

    logger.info("Listening on %s:%d", args.host, args.port)
    app.run(host=args.host, port=args.port, threaded=True, use_reloader=False)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
