# backend/novasalud/__init__.py
from __future__ import annotations

from typing import Any, Mapping

from flask import Flask, request

from .config import Config
from .errors import register_error_handlers
from .extensions import db
from .services.concurrency import guard_shared_connection


def create_app(test_config: Mapping[str, Any] | None = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(app.config["LOG_LEVEL"])
    # Spanish product names stay readable in responses
    app.json.ensure_ascii = False

    # Initialize extensions
    db.init_app(app)

    # Import models so metadata is complete before create_all
    from . import models  # noqa: F401

    # Register blueprints
    from .routes.system import system_bp
    from .routes.catalog import catalog_bp
    from .routes.sales import sales_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(sales_bp)

    register_error_handlers(app)

    @app.after_request
    def add_cors_headers(response):
        allowed_origins = app.config["CORS_ALLOWED_ORIGINS"]
        origin = request.headers.get("Origin")
        if "*" in allowed_origins:
            response.headers["Access-Control-Allow-Origin"] = "*"
        elif origin in allowed_origins:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
        else:
            return response
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        response.headers["Access-Control-Allow-Methods"] = "GET,POST,PUT,DELETE,OPTIONS"
        return response

    # No migration tooling: the schema is created from the models
    with app.app_context():
        guard_shared_connection(db.engine)
        db.create_all()
        if app.config["SEED_ON_STARTUP"]:
            from .services.seed_service import seed_catalog
            seed_catalog()

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
