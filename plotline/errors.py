"""JSON error responses for the API blueprints."""
from __future__ import annotations

from flask import Flask, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .extensions import db


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException):
        if not request.path.startswith("/api/"):
            return exc
        return jsonify({"error": exc.description}), exc.code

    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(exc: SQLAlchemyError):
        db.session.rollback()
        current_app.logger.exception("Data store error while handling %s %s", request.method, request.path)
        return jsonify({"error": "The data store is unavailable right now. Please try again."}), 500
