"""Plot structure (template instance) management."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..extensions import db
from ..models import PlotStructure, utcnow
from .errors import InvalidInputError, NotFoundError

UPDATABLE_FIELDS = ("name", "description", "order", "parent_id")


def list_plot_structures(project_id: int) -> List[PlotStructure]:
    return (
        PlotStructure.query.filter_by(project_id=project_id)
        .order_by(PlotStructure.order.asc(), PlotStructure.id.asc())
        .all()
    )


def get_plot_structure(structure_id: int) -> PlotStructure:
    structure = db.session.get(PlotStructure, structure_id)
    if structure is None:
        raise NotFoundError("Plot structure not found.")
    return structure


def update_plot_structure(structure_id: int, changes: Mapping[str, Any]) -> PlotStructure:
    """Rename, redescribe, reorder or re-parent a plot structure.

    A plot structure stays bound to the template it was created from, so a
    ``template_id`` that differs from the stored one is rejected.
    """

    structure = get_plot_structure(structure_id)

    if "template_id" in changes and changes["template_id"] != structure.template_id:
        raise InvalidInputError(
            "A plot structure cannot switch templates.",
            {"template_id": ["The template of an existing plot structure cannot be changed."]},
        )

    unknown = sorted(set(changes) - set(UPDATABLE_FIELDS) - {"template_id"})
    if unknown:
        raise InvalidInputError(
            "Unsupported fields in update.",
            {field: ["This field cannot be updated."] for field in unknown},
        )

    name = None
    if "name" in changes:
        name = (changes["name"] or "").strip()
        if not name:
            raise InvalidInputError("A name is required.", {"name": ["Name cannot be blank."]})
    if "parent_id" in changes:
        structure.parent_id = _validated_parent_id(structure, changes["parent_id"])

    if name is not None:
        structure.name = name
    if "description" in changes:
        structure.description = changes["description"]
    if "order" in changes and changes["order"] is not None:
        structure.order = changes["order"]

    structure.updated_at = utcnow()
    db.session.commit()
    return structure


def delete_plot_structure(structure_id: int) -> bool:
    """Delete a plot structure and all of its sections.

    Child plot structures are kept and moved to the top level.
    """

    structure = db.session.get(PlotStructure, structure_id)
    if structure is None:
        return False

    for child in list(structure.children):
        child.parent_id = None
    db.session.delete(structure)
    db.session.commit()
    return True


def touch_plot_structure(structure: PlotStructure) -> None:
    structure.updated_at = utcnow()


def _validated_parent_id(structure: PlotStructure, parent_id: Optional[int]) -> Optional[int]:
    if parent_id is None:
        return None

    errors: Dict[str, List[str]] = {}
    if parent_id == structure.id:
        errors["parent_id"] = ["A plot structure cannot be its own parent."]
        raise InvalidInputError("Invalid parent plot structure.", errors)

    parent = db.session.get(PlotStructure, parent_id)
    if parent is None or parent.project_id != structure.project_id:
        errors["parent_id"] = ["Choose a plot structure from the same project."]
        raise InvalidInputError("Invalid parent plot structure.", errors)

    ancestor: Optional[PlotStructure] = parent
    visited: set[int] = set()
    while ancestor is not None and ancestor.id not in visited:
        if ancestor.id == structure.id:
            errors["parent_id"] = ["This would nest a plot structure inside its own descendant."]
            raise InvalidInputError("Invalid parent plot structure.", errors)
        visited.add(ancestor.id)
        ancestor = ancestor.parent

    return parent_id
