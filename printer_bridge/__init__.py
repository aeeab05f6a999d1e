"""Flask application factory."""
import os
from typing import Optional

from flask import Flask, jsonify, request
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def create_app(config_name: str = "default", printer_service=None):
    """Create and configure the Flask application.

    Args:
        config_name: Key into ``printer_bridge.config.config``
        printer_service: PrintService to use instead of one built from config
    """
    app = Flask(__name__)

    # Load configuration
    from printer_bridge.config import config
    app.config.from_object(config[config_name])

    # Initialize extensions
    os.makedirs(app.instance_path, exist_ok=True)
    db.init_app(app)

    if printer_service is None:
        from printer_bridge.printer import PrintService
        printer_service = PrintService.from_config(app.config)
    app.extensions["printer"] = printer_service

    # Register blueprints
    from printer_bridge.routes.print import print_bp
    from printer_bridge.routes.api import api_bp

    app.register_blueprint(print_bp)
    app.register_blueprint(api_bp, url_prefix="/api")

    app.after_request(add_cors_headers)
    register_error_handlers(app)

    # Create tables
    with app.app_context():
        from printer_bridge import models  # noqa: F401
        db.create_all()

    return app


def add_cors_headers(response):
    """Allow the admin site on any origin to call this local bridge.

    Chrome's Private Network Access preflight also asks for
    ``Access-Control-Allow-Private-Network`` before an HTTPS page may reach
    127.0.0.1.
    """
    origin: Optional[str] = request.headers.get("Origin")
    response.headers["Access-Control-Allow-Origin"] = origin or "*"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = request.headers.get(
        "Access-Control-Request-Headers", "Content-Type"
    )
    if origin:
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers.add("Vary", "Origin")
    if request.headers.get("Access-Control-Request-Private-Network"):
        response.headers["Access-Control-Allow-Private-Network"] = "true"
    return response


def register_error_handlers(app: Flask) -> None:
    """Return JSON for unknown paths and unhandled errors."""

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Endpoint not found", "path": request.path}), 404

    @app.errorhandler(500)
    def internal_error(error):
        app.logger.error("Unhandled error: %s", error)
        return jsonify({"error": "Internal server error"}), 500
