# taskapi/__init__.py

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .config import Config
from .extensions import cors
from .routes.tasks import create_tasks_blueprint
from .services.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_app(config=None, store=None):
    """Application factory: wires the task store and routes under /api/tasks."""
    config = config or Config.from_env()
    store = store or TaskStore(config.db_path)

    app = Flask(__name__)

    cors.init_app(app, resources={r"/api/*": {"origins": config.cors_origins}})

    app.register_blueprint(
        create_tasks_blueprint(store, production=config.production),
        url_prefix="/api/tasks",
    )

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    # Routing errors (unknown path, wrong method) keep the {error} shape
    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"error": e.description}), e.code

    logger.info(f"Task API ready env={config.app_env} db={config.db_path}")
    return app
