"""Flask application factory for the Alert Service API."""

import logging
import os

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from alert_service import (
    AlertLifecycleEngine,
    AlertValidationError,
    create_notifier_from_config,
    get_alert_store,
)

from .config import get_config, notifier_settings

logger = logging.getLogger(__name__)


def create_app(config=None, store=None, notifier=None):
    """Create and configure the Flask application.

    Args:
        config: Optional configuration object or dict
        store: Alert store to use instead of one built from config
        notifier: Notifier to use instead of one built from config

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)

    # Load configuration
    if config is None:
        config = get_config()

    if isinstance(config, dict):
        app.config.update(config)
    else:
        app.config.from_object(config)

    # Initialize lifecycle engine
    if store is None:
        store = get_alert_store(
            db_path=app.config.get("ALERT_DB_PATH"),
            db_url=app.config.get("ALERT_DB_URL") or None,
        )
    if notifier is None:
        notifier = create_notifier_from_config(notifier_settings(app.config))
    app.alert_engine = AlertLifecycleEngine(store=store, notifier=notifier)

    # Register blueprints
    from .routes.api import api_bp

    app.register_blueprint(api_bp, url_prefix="/api")

    @app.route("/health")
    def health():
        return jsonify({"status": "ok"})

    register_error_handlers(app)

    return app


def register_error_handlers(app: Flask) -> None:
    """Translate exceptions into JSON error responses."""

    @app.errorhandler(AlertValidationError)
    def handle_validation_error(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.exception(f"Unhandled error: {e}")
        return jsonify({"error": "Internal server error"}), 500


def run_dev_server(port: int | None = None):
    """Run development server."""
    app = create_app()
    app.run(
        host="0.0.0.0",
        port=port or int(os.environ.get("PORT", 5000)),
        debug=app.config.get("DEBUG", False),
    )


if __name__ == "__main__":
    run_dev_server()
