import asyncio
import logging
import math
import re

from flask import Blueprint, jsonify, request

from ..models.task import TaskValidationError, clean_task_text, is_valid_task_id

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50
MAX_LIMIT = 100
FALLBACK_ERROR = "Internal server error"

# SQLite INTEGER range; OFFSET must stay inside it.
MAX_SQL_INT = 2**63 - 1
MAX_PAGE = MAX_SQL_INT // MAX_LIMIT + 1

_LEADING_INT_RE = re.compile(r"^\s*([+-]?)([0-9]+)")


def parse_int(raw, default):
    """Leading integer of a query value; missing, non-numeric or 0 gives ``default``."""
    match = _LEADING_INT_RE.match(raw or "")
    if not match:
        return default
    sign, digits = match.groups()
    # Digit runs longer than 18 saturate instead of reaching int().
    value = MAX_SQL_INT if len(digits.lstrip("0")) > 18 else int(digits)
    if sign == "-":
        value = -value
    return value or default


def page_params(args):
    page = min(max(parse_int(args.get("page"), 1), 1), MAX_PAGE)
    limit = min(max(parse_int(args.get("limit"), DEFAULT_LIMIT), 1), MAX_LIMIT)
    return page, limit


def create_tasks_blueprint(store, production=False):
    """
    Build the task collection blueprint around a TaskStore.

    ``production`` is fixed at construction; when set, 500 responses carry
    only the generic message instead of the underlying error text.
    """
    tasks_bp = Blueprint("tasks", __name__)

    def send_error(err, status=500, fallback=FALLBACK_ERROR):
        detail = str(err) if err is not None else ""
        message = fallback if production else (detail or fallback)
        return jsonify({"error": message}), status

    async def run_store(func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    # GET / - list tasks, newest first, with page metadata
    @tasks_bp.route("/", methods=["GET"], strict_slashes=False)
    async def list_tasks():
        try:
            page, limit = page_params(request.args)
            skip = (page - 1) * limit

            # Estimated count is read from collection metadata; it can lag the page under concurrent writes.
            tasks, total = await asyncio.gather(
                run_store(store.find_tasks, skip, limit),
                run_store(store.estimated_count),
            )

            pages = math.ceil(total / limit) if total else 0
            return jsonify({
                "tasks": [task.to_dict() for task in tasks],
                "meta": {"total": total, "page": page, "limit": limit, "pages": pages},
            })
        except Exception as e:
            logger.error(f"Error listing tasks: {e}", exc_info=True)
            return send_error(e)

    # POST / - create a task from a JSON body
    @tasks_bp.route("/", methods=["POST"], strict_slashes=False)
    async def create_task():
        try:
            # Accepts application/json and application/*+json
            if not request.is_json:
                return jsonify({"error": "Content-Type must be application/json"}), 415

            data = request.get_json(silent=True)
            if data is None and request.get_data(cache=True).strip():
                return jsonify({"error": "Request body must be valid JSON"}), 400
            if not isinstance(data, dict):
                data = {}

            try:
                cleaned = clean_task_text(data.get("text"))
            except TaskValidationError as e:
                return jsonify({"error": str(e)}), 400

            task = await run_store(store.create_task, cleaned)
            return jsonify({"task": task.to_dict()}), 201
        except Exception as e:
            logger.error(f"Error creating task: {e}", exc_info=True)
            return send_error(e)

    # DELETE /<task_id> - 204 on success
    @tasks_bp.route("/<task_id>", methods=["DELETE"])
    async def delete_task(task_id):
        try:
            if not is_valid_task_id(task_id):
                return jsonify({"error": "Invalid task id"}), 400

            deleted = await run_store(store.find_and_delete, task_id)
            if deleted is None:
                return jsonify({"error": "Task not found"}), 404

            return "", 204
        except Exception as e:
            logger.error(f"Error deleting task {task_id}: {e}", exc_info=True)
            return send_error(e)

    return tasks_bp
