"""Catalog of plot structure templates and their section definitions."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..models import PlotStructureTemplate, TemplateSection
from .builtin_templates import BUILTIN_TEMPLATES
from .errors import InvalidTemplateError, NotFoundError


@dataclass(frozen=True)
class SectionDefinition:
    key: str
    title: str
    order: int
    description: str = ""


RawSections = Union[str, Sequence[Mapping[str, Any]]]


def list_templates() -> List[PlotStructureTemplate]:
    return PlotStructureTemplate.query.order_by(PlotStructureTemplate.id.asc()).all()


def get_template(template_id: int) -> PlotStructureTemplate:
    template = db.session.get(PlotStructureTemplate, template_id)
    if template is None:
        raise NotFoundError("Plot structure template not found.")
    return template


def parse_section_definitions(raw: RawSections) -> List[SectionDefinition]:
    """Validate serialized template sections and return them in ascending order.

    ``raw`` may be a JSON string or an already decoded list of mappings. Every
    entry needs a non-empty ``key`` and ``title`` and an integer ``order``;
    keys must be unique within the list. Problems are collected per entry so
    the author sees all of them at once.
    """

    data: Any = raw
    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise InvalidTemplateError(
                "Template sections could not be parsed.",
                {"sections": [f"Invalid JSON: {exc.msg}"]},
            ) from exc

    if not isinstance(data, list):
        raise InvalidTemplateError(
            "Template sections must be a list.",
            {"sections": ["Expected a list of section definitions."]},
        )

    errors: Dict[str, List[str]] = {}
    definitions: List[SectionDefinition] = []
    seen_keys: set[str] = set()

    for index, entry in enumerate(data):
        field = f"sections[{index}]"
        if not isinstance(entry, Mapping):
            errors[field] = ["Each section must be an object."]
            continue

        problems: List[str] = []
        key = entry.get("key")
        title = entry.get("title")
        order = entry.get("order")
        description = entry.get("description") or ""

        if not isinstance(key, str) or not key.strip():
            problems.append("A section key is required.")
        elif key in seen_keys:
            problems.append(f"Duplicate section key '{key}'.")
        if not isinstance(title, str) or not title.strip():
            problems.append("A section title is required.")
        if isinstance(order, bool) or not isinstance(order, int):
            problems.append("A section order must be an integer.")
        if not isinstance(description, str):
            problems.append("A section description must be text.")

        if problems:
            errors[field] = problems
            continue

        seen_keys.add(key)
        definitions.append(
            SectionDefinition(key=key, title=title.strip(), order=order, description=description)
        )

    if errors:
        raise InvalidTemplateError("Template sections are malformed.", errors)

    return sorted(definitions, key=lambda definition: definition.order)


def section_definitions_for(template: PlotStructureTemplate) -> List[SectionDefinition]:
    """Read a stored template's sections back as ordered definitions.

    Rows written outside :func:`create_template` are checked again; if two
    rows share a key the first one wins.
    """

    definitions: List[SectionDefinition] = []
    seen_keys: set[str] = set()
    for row in template.sections:
        if not row.key or not row.title or row.order is None:
            raise InvalidTemplateError(
                f"Template '{template.name}' has an incomplete section definition.",
                {"sections": [f"Section {row.id} is missing its key, title or order."]},
            )
        if row.key in seen_keys:
            continue
        seen_keys.add(row.key)
        definitions.append(
            SectionDefinition(
                key=row.key,
                title=row.title,
                order=row.order,
                description=row.description or "",
            )
        )
    return sorted(definitions, key=lambda definition: definition.order)


def create_template(
    template_type: str,
    name: str,
    sections: RawSections,
    *,
    description: Optional[str] = None,
    is_default: bool = False,
    commit: bool = True,
) -> PlotStructureTemplate:
    definitions = parse_section_definitions(sections)
    template = PlotStructureTemplate(
        template_type=template_type,
        name=name,
        description=description,
        is_default=is_default,
    )
    template.sections = list(_section_rows(definitions))
    db.session.add(template)
    if commit:
        db.session.commit()
    return template


def _section_rows(definitions: Iterable[SectionDefinition]) -> Iterable[TemplateSection]:
    for definition in definitions:
        yield TemplateSection(
            key=definition.key,
            title=definition.title,
            description=definition.description or None,
            order=definition.order,
        )


def _count_templates() -> int:
    return PlotStructureTemplate.query.count()


def seed_builtin_templates() -> int:
    """Insert the built-in templates when the catalog is empty.

    Returns the number of templates added. The check is by row count only, so
    calling this again once any template exists does nothing. Store failures
    are logged and reported as zero; the catalog stays empty until the next
    attempt.
    """

    logger = current_app.logger
    try:
        existing = _count_templates()
        if existing:
            logger.info("Found %d existing plot structure templates", existing)
            return 0

        logger.info("No plot structure templates found, initializing...")
        for entry in BUILTIN_TEMPLATES:
            create_template(
                entry["template_type"],
                entry["name"],
                entry["sections"],
                description=entry.get("description"),
                is_default=entry.get("is_default", False),
                commit=False,
            )
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Failed to initialize plot structure templates")
        return 0

    logger.info("Added %d plot structure templates to the database", len(BUILTIN_TEMPLATES))
    return len(BUILTIN_TEMPLATES)
