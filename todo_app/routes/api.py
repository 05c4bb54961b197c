"""
REST API endpoints for Task management.

This module maps HTTP verbs and paths onto :class:`~todo_app.store.TaskStore`
calls.  Input (content type, JSON body, ids) is validated here, before the
store is touched; store errors are translated into JSON error responses by
the handlers at the bottom of the module.

Endpoints:
    GET    /health         - Health check
    POST   /task           - Create a task, returns its id
    GET    /tasks          - List all tasks
    GET    /task/<id>      - Get a single task by ID
    DELETE /task/<id>      - Delete a task
"""

import logging
import re

from flask import Blueprint, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from todo_app import get_store
from todo_app.store import StorageError, TaskNotFoundError

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)

ALLOWED_TASK_FIELDS = frozenset({"text"})

_TASK_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

# Ids must fit a signed 64-bit integer, the range of SQLite INTEGER keys
MIN_TASK_ID = -(2**63)
MAX_TASK_ID = 2**63 - 1


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------

def error_response(message: str, status: int) -> tuple[Response, int]:
    """Build the JSON error body used by every endpoint."""
    return jsonify({"error": message}), status


def parse_task_id(raw_id: str) -> int | None:
    """
    Parse a task id taken from the URL path.

    Args:
        raw_id: The path segment.

    Returns:
        The id as an integer, or None if the segment is not a plain
        (optionally signed) ASCII decimal integer in the signed 64-bit range.
    """
    if not _TASK_ID_PATTERN.fullmatch(raw_id):
        return None
    task_id = int(raw_id)
    if not MIN_TASK_ID <= task_id <= MAX_TASK_ID:
        return None
    return task_id


def parse_task_text(data: object) -> tuple[str | None, str | None]:
    """
    Extract the task text from a decoded request body.

    A missing ``text`` field counts as the empty string.  Any field other
    than ``text`` is rejected.

    Args:
        data: The decoded JSON body.

    Returns:
        Tuple of (text, error_message); exactly one of them is None.
    """
    if not isinstance(data, dict):
        return None, "Request body must be a JSON object"

    unknown = sorted(set(data) - ALLOWED_TASK_FIELDS)
    if unknown:
        return None, f"Unknown field(s): {', '.join(unknown)}"

    text = data.get("text", "")
    if not isinstance(text, str):
        return None, "'text' must be a string"

    return text, None


# -----------------------------------------------------------------------------
# API Endpoints
# -----------------------------------------------------------------------------

@api_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Health check endpoint reporting which backend is active."""
    return jsonify({
        "status": "healthy",
        "backend": get_store().backend_name,
    }), 200


@api_bp.route("/task", methods=["POST"])
def create_task() -> tuple[Response, int]:
    """
    Create a new task.

    Request Body (JSON, ``Content-Type: application/json``):
        text: Task text (optional, defaults to the empty string)

    Returns:
        JSON ``{"id": <int>}`` and 201 status code,
        or error message and 400 if the request is malformed.
    """
    logger.info(f"handling add task at {request.path}")

    if request.mimetype != "application/json":
        logger.warning(f"Rejected content type: {request.content_type!r}")
        return error_response("expect application/json Content-Type", 400)

    data = request.get_json(silent=True)
    text, error = parse_task_text(data)
    if error:
        logger.warning(f"Validation failed: {error}")
        return error_response(error, 400)

    task_id = get_store().create_task(text)

    logger.info(f"Created task with ID: {task_id}")
    return jsonify({"id": task_id}), 201


@api_bp.route("/tasks", methods=["GET"])
def get_tasks() -> tuple[Response, int]:
    """
    List all tasks.

    Returns:
        JSON array of ``{"id", "text"}`` objects (empty when there are no
        tasks) and 200 status code.
    """
    logger.info(f"handling get all tasks at {request.path}")

    tasks = get_store().get_tasks()
    return jsonify([task.to_dict() for task in tasks]), 200


@api_bp.route("/task/<raw_id>", methods=["GET"])
def get_task(raw_id: str) -> tuple[Response, int]:
    """
    Get a single task by ID.

    Returns:
        JSON task object and 200 status code, 400 for a malformed id,
        or 404 if no such task exists.
    """
    logger.info(f"handling get task at {request.path}")

    task_id = parse_task_id(raw_id)
    if task_id is None:
        return error_response("invalid id", 400)

    task = get_store().get_task(task_id)
    return jsonify(task.to_dict()), 200


@api_bp.route("/task/<raw_id>", methods=["DELETE"])
def delete_task(raw_id: str) -> tuple[Response | str, int]:
    """
    Delete a task.

    Returns:
        Empty body and 200 status code, 400 for a malformed id,
        or 404 if no such task exists.
    """
    logger.info(f"handling delete task at {request.path}")

    task_id = parse_task_id(raw_id)
    if task_id is None:
        return error_response("invalid id", 400)

    get_store().delete_task(task_id)

    logger.info(f"Deleted task {task_id}")
    return "", 200


# -----------------------------------------------------------------------------
# Error Handlers
# -----------------------------------------------------------------------------

@api_bp.errorhandler(TaskNotFoundError)
def task_not_found(error: TaskNotFoundError) -> tuple[Response, int]:
    """Handle lookups of ids with no live task."""
    logger.warning(f"Task {error.task_id} not found")
    return error_response(str(error), 404)


@api_bp.errorhandler(StorageError)
def storage_failure(error: StorageError) -> tuple[Response, int]:
    """Handle backend failures with a generic error."""
    logger.error(f"Storage failure: {error}", exc_info=error)
    return error_response("Storage failure", 400)


@api_bp.app_errorhandler(HTTPException)
def http_error(error: HTTPException) -> tuple[Response, int]:
    """Render Werkzeug HTTP errors (404, 405, ...) as JSON."""
    status = error.code or 500
    if status >= 500:
        logger.error(f"Internal server error: {error}")
    response, status = error_response(error.name, status)
    allow = error.get_response().headers.get("Allow")
    if allow:
        response.headers["Allow"] = allow
    return response, status


@api_bp.app_errorhandler(500)
def internal_error(error: Exception) -> tuple[Response, int]:
    """Handle unexpected exceptions."""
    logger.error(f"Internal server error: {error}")
    return error_response("Internal server error", 500)
