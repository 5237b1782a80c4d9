from __future__ import annotations

from flask import abort, current_app, jsonify
from flask_login import login_required

from ..api import (
    error_response,
    flag_enabled,
    form_error_response,
    json_payload,
    owned_project_or_abort,
)
from ..models import PlotStructure, PlotStructureSection
from ..services import (
    InvalidInputError,
    NotFoundError,
    delete_plot_structure,
    get_plot_structure,
    get_section,
    get_template,
    instantiate,
    list_plot_structures,
    list_sections,
    list_templates,
    update_plot_structure,
    update_section,
)
from . import bp
from .forms import ApplyTemplateForm, PlotStructureUpdateForm, SectionUpdateForm


def _structure_or_404(structure_id: int) -> PlotStructure:
    try:
        structure = get_plot_structure(structure_id)
    except NotFoundError as exc:
        abort(404, description=str(exc))
    owned_project_or_abort(structure.project_id)
    return structure


def _section_or_404(section_id: int) -> PlotStructureSection:
    try:
        section = get_section(section_id)
    except NotFoundError as exc:
        abort(404, description=str(exc))
    owned_project_or_abort(section.plot_structure.project_id)
    return section


@bp.route("/plot-templates", methods=["GET"])
@login_required
def plot_templates():
    return jsonify([template.to_dict() for template in list_templates()])


@bp.route("/plot-templates/<int:template_id>", methods=["GET"])
@login_required
def plot_template(template_id: int):
    try:
        template = get_template(template_id)
    except NotFoundError as exc:
        return error_response(str(exc), 404)
    return jsonify(template.to_dict())


@bp.route("/projects/<int:project_id>/plot-structures", methods=["GET"])
@login_required
def project_plot_structures(project_id: int):
    owned_project_or_abort(project_id)
    return jsonify([structure.to_dict() for structure in list_plot_structures(project_id)])


@bp.route("/plot-structures", methods=["POST"])
@login_required
def apply_template():
    payload = json_payload()
    form = ApplyTemplateForm(payload)
    if not form.validate_on_submit():
        return form_error_response(form, "Invalid plot structure data.")

    project = owned_project_or_abort(form.project_id.data)
    try:
        structure = instantiate(
            project.id,
            form.template_id.data,
            name=form.name.data,
            description=form.description.data if "description" in payload else None,
            parent_id=form.parent_id.data,
        )
    except NotFoundError as exc:
        return error_response(str(exc), 404)
    except InvalidInputError as exc:
        return error_response(str(exc), 400, exc.errors)

    current_app.logger.info(
        "Applied template %s to project %s as plot structure %s",
        structure.template_id,
        project.id,
        structure.id,
    )
    return jsonify(structure.to_dict()), 201


@bp.route("/plot-structures/<int:structure_id>", methods=["GET"])
@login_required
def plot_structure(structure_id: int):
    structure = _structure_or_404(structure_id)
    return jsonify(structure.to_dict())


@bp.route("/plot-structures/<int:structure_id>", methods=["PUT", "PATCH"])
@login_required
def edit_plot_structure(structure_id: int):
    _structure_or_404(structure_id)
    payload = json_payload()
    form = PlotStructureUpdateForm(payload)
    form.validate_on_submit()
    errors = {field: messages for field, messages in form.errors.items() if field in payload}
    if errors:
        return error_response("Invalid plot structure data.", 400, errors)

    changes = {
        field.name: field.data
        for field in (form.name, form.description, form.order, form.parent_id, form.template_id)
        if field.name in payload
    }
    try:
        structure = update_plot_structure(structure_id, changes)
    except NotFoundError as exc:
        return error_response(str(exc), 404)
    except InvalidInputError as exc:
        return error_response(str(exc), 400, exc.errors)
    return jsonify(structure.to_dict())


@bp.route("/plot-structures/<int:structure_id>", methods=["DELETE"])
@login_required
def remove_plot_structure(structure_id: int):
    _structure_or_404(structure_id)
    if not delete_plot_structure(structure_id):
        return error_response("Plot structure not found.", 404)
    return "", 204


@bp.route("/plot-structures/<int:structure_id>/sections", methods=["GET"])
@login_required
def plot_structure_sections(structure_id: int):
    _structure_or_404(structure_id)
    return jsonify([section.to_dict() for section in list_sections(structure_id)])


@bp.route("/plot-structure-sections/<int:section_id>", methods=["GET"])
@login_required
def plot_structure_section(section_id: int):
    section = _section_or_404(section_id)
    return jsonify(section.to_dict())


@bp.route("/plot-structure-sections/<int:section_id>", methods=["PUT", "PATCH"])
@login_required
def edit_plot_structure_section(section_id: int):
    _section_or_404(section_id)
    payload = json_payload()
    form = SectionUpdateForm(payload)
    form.validate_on_submit()
    errors = {field: messages for field, messages in form.errors.items() if field in payload}
    if errors:
        return error_response("Invalid plot structure section data.", 400, errors)

    changes = {
        field.name: field.data
        for field in (form.title, form.content, form.order)
        if field.name in payload
    }
    try:
        section = update_section(
            section_id,
            changes,
            suppress_refresh=flag_enabled("suppress_refresh", payload),
        )
    except NotFoundError as exc:
        return error_response(str(exc), 404)
    except InvalidInputError as exc:
        return error_response(str(exc), 400, exc.errors)
    return jsonify(section.to_dict())
