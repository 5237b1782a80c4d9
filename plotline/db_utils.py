"""Database helper utilities for ensuring schema consistency."""
from __future__ import annotations

from typing import Set

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from .extensions import db


def _get_table_names() -> Set[str]:
    inspector = inspect(db.engine)
    return set(inspector.get_table_names())


def ensure_database_schema() -> None:
    """Create any model tables that are missing from the connected database.

    The function is intentionally light-weight so it can run on every
    application start. Databases created before the plot structure tables
    were introduced get the ``plot_structure_templates``,
    ``template_sections``, ``plot_structures`` and
    ``plot_structure_sections`` tables on the next boot; existing tables are
    left untouched; column changes go through Flask-Migrate.
    """

    # Import locally to avoid circular import issues during application setup.
    from . import models  # noqa: F401

    try:
        table_names = _get_table_names()
        if "projects" not in table_names:
            db.create_all()
            return

        for table in db.metadata.sorted_tables:
            if table.name not in table_names:
                table.create(bind=db.engine)
    except SQLAlchemyError:
        # Leave the session usable; the caller decides whether to keep booting.
        db.session.rollback()
        raise
