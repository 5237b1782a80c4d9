"""Reading and editing the prose stored in plot structure sections."""

from __future__ import annotations

from typing import Any, List, Mapping

from ..extensions import db
from ..models import PlotStructureSection, utcnow
from .errors import InvalidInputError, NotFoundError
from .plot_structures import get_plot_structure, touch_plot_structure

EDITABLE_FIELDS = ("title", "content", "order")


def list_sections(structure_id: int) -> List[PlotStructureSection]:
    get_plot_structure(structure_id)
    return (
        PlotStructureSection.query.filter_by(plot_structure_id=structure_id)
        .order_by(PlotStructureSection.order.asc(), PlotStructureSection.id.asc())
        .all()
    )


def get_section(section_id: int) -> PlotStructureSection:
    section = db.session.get(PlotStructureSection, section_id)
    if section is None:
        raise NotFoundError("Plot structure section not found.")
    return section


def update_section(
    section_id: int,
    changes: Mapping[str, Any],
    *,
    suppress_refresh: bool = False,
) -> PlotStructureSection:
    """Merge the given ``title``/``content``/``order`` values onto a section.

    Fields missing from ``changes`` keep their stored values and
    ``updated_at`` moves forward on every call. Writes are last-write-wins.

    Unless ``suppress_refresh`` is set, the owning plot structure's
    ``updated_at`` is touched as well so views watching the structure know
    to reload. Autosave writes pass ``suppress_refresh=True`` to avoid that.
    """

    section = get_section(section_id)

    unknown = sorted(set(changes) - set(EDITABLE_FIELDS))
    if unknown:
        raise InvalidInputError(
            "Unsupported fields in update.",
            {field: ["This field cannot be updated."] for field in unknown},
        )

    if "title" in changes:
        title = (changes["title"] or "").strip()
        if not title:
            raise InvalidInputError("A title is required.", {"title": ["Title cannot be blank."]})
        section.title = title
    if "content" in changes:
        section.content = changes["content"] or ""
    if "order" in changes and changes["order"] is not None:
        section.order = changes["order"]

    section.updated_at = utcnow()
    if not suppress_refresh:
        touch_plot_structure(section.plot_structure)

    db.session.commit()
    return section
