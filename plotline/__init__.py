from __future__ import annotations

from pathlib import Path

import click
from flask import Flask, jsonify
from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError

from .config import Config
from .extensions import csrf, db, login_manager, migrate
from .db_utils import ensure_database_schema
from .errors import register_error_handlers


BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")


def create_app(config_class: type[Config] = Config) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    register_extensions(app)
    register_blueprints(app)
    register_error_handlers(app)
    register_commands(app)

    with app.app_context():
        try:
            ensure_database_schema()
        except SQLAlchemyError:
            app.logger.exception("Database schema check failed; the store may be unavailable")
        else:
            if app.config.get("SEED_PLOT_TEMPLATES", True):
                from .services.template_catalog import seed_builtin_templates

                seed_builtin_templates()

    return app


def register_extensions(app: Flask) -> None:
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"error": "Sign in to continue."}), 401


def register_blueprints(app: Flask) -> None:
    from .auth import bp as auth_bp
    from .plots import bp as plots_bp
    from .projects import bp as projects_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(projects_bp)
    app.register_blueprint(plots_bp)


def register_commands(app: Flask) -> None:
    @app.cli.command("seed-templates")
    def seed_templates_command() -> None:
        """Insert the built-in plot structure templates if the catalog is empty."""
        from .services.template_catalog import seed_builtin_templates

        added = seed_builtin_templates()
        click.echo(f"Added {added} plot structure templates.")
