"""Expand a plot structure template into an editable plot structure."""

from __future__ import annotations

from typing import Optional

from flask import current_app
from sqlalchemy import func

from ..extensions import db
from ..models import PlotStructure, PlotStructureSection
from .errors import InvalidInputError
from .template_catalog import SectionDefinition, get_template, section_definitions_for


def instantiate(
    project_id: int,
    template_id: int,
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
    parent_id: Optional[int] = None,
) -> PlotStructure:
    """Create a plot structure for ``project_id`` with one section per template section.

    Sections copy the template's key, title and order and start with empty
    content. The plot structure and its sections are committed together; if
    anything fails part way through, the session is rolled back so no rows
    from the attempt remain, and the error propagates.
    """

    template = get_template(template_id)
    definitions = section_definitions_for(template)

    if parent_id is not None:
        parent = db.session.get(PlotStructure, parent_id)
        if parent is None or parent.project_id != project_id:
            raise InvalidInputError(
                "Invalid parent plot structure.",
                {"parent_id": ["Choose a plot structure from the same project."]},
            )

    try:
        structure = PlotStructure(
            project_id=project_id,
            template_id=template.id,
            name=(name or "").strip() or template.name,
            description=description if description is not None else template.description,
            parent_id=parent_id,
            order=_next_order(project_id, parent_id),
        )
        db.session.add(structure)
        db.session.flush()

        for definition in definitions:
            db.session.add(_build_section(structure, definition))
            db.session.flush()

        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.warning(
            "Rolled back plot structure creation for project %s from template %s",
            project_id,
            template_id,
            exc_info=True,
        )
        raise

    current_app.logger.debug(
        "Created plot structure %s with %d sections from template '%s'",
        structure.id,
        len(definitions),
        template.template_type,
    )
    return structure


def _build_section(structure: PlotStructure, definition: SectionDefinition) -> PlotStructureSection:
    return PlotStructureSection(
        plot_structure_id=structure.id,
        section_key=definition.key,
        title=definition.title,
        content="",
        order=definition.order,
    )


def _next_order(project_id: int, parent_id: Optional[int]) -> int:
    query = db.session.query(func.max(PlotStructure.order)).filter(
        PlotStructure.project_id == project_id,
        PlotStructure.parent_id.is_(None) if parent_id is None else PlotStructure.parent_id == parent_id,
    )
    current_max = query.scalar()
    return (current_max or 0) + 1
