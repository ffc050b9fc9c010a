"""Flask application configuration and blueprint registration."""

from __future__ import annotations

from flask import Flask, jsonify

from translink.logger import get_logger
from translink.translation.manager import TranslationManager

from .routes.translation import translation_bp

logger = get_logger(__name__)

EXTENSION_KEY = "translink"


def build_app(engine: TranslationManager = None, text_extractor=None) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)

    # Ensure JSON responses keep Unicode data.
    app.json.ensure_ascii = False

    app.extensions[EXTENSION_KEY] = {
        "engine": engine if engine is not None else TranslationManager(),
        "text_extractor": text_extractor,
    }

    register_blueprints(app)
    register_default_routes(app)

    return app


def register_blueprints(app: Flask) -> None:
    """Register Flask blueprints."""
    app.register_blueprint(translation_bp, url_prefix="/api")


def register_default_routes(app: Flask) -> None:
    """Register health route and JSON error handlers."""

    @app.get("/health")
    def health_check():
        logger.debug("Health check requested")
        engine = app.extensions[EXTENSION_KEY]["engine"]
        return jsonify({"status": "ok", **engine.get_status()})

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "Not found", "code": "not_found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"error": "Method not allowed", "code": "method_not_allowed"}), 405

    @app.errorhandler(500)
    def internal_error(e):
        logger.exception("Internal server error: %s", e)
        return jsonify({"error": "Internal server error", "code": "internal_error"}), 500
