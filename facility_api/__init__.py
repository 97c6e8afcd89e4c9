import json
import logging
import os
import sqlite3

import click
import newrelic.agent
from dotenv import load_dotenv
from flask import Flask, jsonify
from marshmallow import ValidationError
from sqlalchemy import event
from sqlalchemy.engine import Engine
from werkzeug.exceptions import HTTPException

from facility_api.config import config
from facility_api.exceptions import TransactionFailure, UnknownReference
from facility_api.extensions import cors, db

# Load environment variables
load_dotenv()


def create_app(config_name=None, config_object=None):
    """Application factory pattern."""
    if config_object is not None:
        app_config = config_object
    else:
        config_name = config_name or os.environ.get("FLASK_ENV", "development")
        app_config_class = config.get(config_name, config["default"])
        app_config = app_config_class()

    app = Flask(__name__)
    app.config.from_object(app_config)

    # Set up logging
    if __name__ != "__main__":
        gunicorn_logger = logging.getLogger("gunicorn.error")
        if gunicorn_logger.handlers:
            app.logger.handlers = gunicorn_logger.handlers
            app.logger.setLevel(gunicorn_logger.level)

    # SQLite ignores foreign keys unless asked per connection
    if not event.contains(Engine, "connect", enable_sqlite_foreign_keys):
        event.listen(Engine, "connect", enable_sqlite_foreign_keys)

    # Initialize extensions
    cors.init_app(app, origins=app.config.get("CORS_ORIGINS", "*"))
    db.init_app(app)

    # Import models so they are registered on the metadata
    from facility_api import models  # noqa: F401

    # Register blueprints
    from facility_api.api import init_app as init_api
    init_api(app)

    # Register middleware, error handlers and commands
    register_middleware(app)
    register_error_handlers(app)
    register_commands(app)

    return app


def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Turn on foreign key enforcement for SQLite connections."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def register_middleware(app):
    """Register application middleware."""

    @app.before_request
    def capture_request_params():
        """Capture request parameters for monitoring."""
        if not app.config.get("DEBUG", False):
            newrelic.agent.capture_request_params()


def register_error_handlers(app):
    """Register error handlers."""

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        """Handle HTTP exceptions."""
        response = e.get_response()
        response.data = json.dumps({
            "code": e.code,
            "name": e.name,
            "msg": e.description,
        })
        response.content_type = "application/json"
        return response

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        """Handle rejected request bodies and query strings."""
        response = jsonify({
            "code": 400,
            "name": "Bad Request",
            "msg": e.messages,
        })
        response.status_code = 400
        return response

    @app.errorhandler(UnknownReference)
    def handle_unknown_reference(e):
        """Handle writes that point at rows which do not exist."""
        app.logger.warning(f"Rejected write: {str(e)}")
        response = jsonify({
            "code": 400,
            "name": "Bad Request",
            "msg": str(e),
        })
        response.status_code = 400
        return response

    @app.errorhandler(TransactionFailure)
    def handle_transaction_failure(e):
        """Handle writes that were rolled back."""
        newrelic.agent.notice_error(error=(type(e), e, e.__traceback__))
        app.logger.error(f"Transaction failure: {str(e.cause)}", exc_info=True)
        response = jsonify({
            "code": 500,
            "name": "Transaction Failure",
            "msg": "The change could not be saved. Nothing was written.",
        })
        response.status_code = 500
        return response

    @app.errorhandler(Exception)
    def handle_unhandled_exception(e):
        """Handle unhandled exceptions."""
        newrelic.agent.notice_error(error=(type(e), e, e.__traceback__))
        app.logger.error(f"Unhandled exception: {str(e)}", exc_info=True)
        response = jsonify({
            "code": 500,
            "name": "Internal Server Error",
            "msg": "An unexpected error occurred. Please try again later.",
        })
        response.status_code = 500
        return response


def register_commands(app):
    """Register CLI commands."""

    @app.cli.command("init-db")
    def init_db():
        """Create all database tables."""
        db.create_all()
        click.echo("Initialized the database.")
