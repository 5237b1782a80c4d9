from __future__ import annotations

from typing import Any, Dict, List, Mapping

from flask import jsonify, request
from flask_login import current_user, login_required
from sqlalchemy import func

from ..api import error_response, form_error_response, json_payload, owned_project_or_abort
from ..extensions import db
from ..models import Chapter, Project, StoryBibleEntry
from . import bp
from .forms import ChapterForm, ProjectForm, StoryBibleEntryForm


def _partial_errors(form, payload: Mapping[str, Any]) -> Dict[str, List[str]]:
    form.validate_on_submit()
    return {field: errors for field, errors in form.errors.items() if field in payload}


def _clean_optional(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip() or None
    return value


def _tags_from(payload: Mapping[str, Any]) -> tuple[list[str], list[str]]:
    raw = payload.get("tags")
    if raw is None:
        return [], []
    if not isinstance(raw, list) or not all(isinstance(tag, str) for tag in raw):
        return [], ["Tags must be a list of strings."]
    tags: list[str] = []
    for tag in raw:
        cleaned = tag.strip()
        if cleaned and cleaned not in tags:
            tags.append(cleaned)
    return tags, []


def _chapter_or_abort(chapter_id: int) -> Chapter:
    chapter = db.get_or_404(Chapter, chapter_id, description="Chapter not found.")
    owned_project_or_abort(chapter.project_id)
    return chapter


def _bible_entry_or_abort(entry_id: int) -> StoryBibleEntry:
    entry = db.get_or_404(StoryBibleEntry, entry_id, description="Story bible entry not found.")
    owned_project_or_abort(entry.project_id)
    return entry


@bp.route("/projects", methods=["GET"])
@login_required
def list_projects():
    include_archived = request.args.get("include_archived", "").lower() in {"1", "true", "yes"}
    query = Project.query.filter_by(owner_id=current_user.id)
    if not include_archived:
        query = query.filter_by(is_archived=False)
    projects = query.order_by(Project.updated_at.desc()).all()
    return jsonify([project.to_dict() for project in projects])


@bp.route("/projects", methods=["POST"])
@login_required
def create_project():
    form = ProjectForm(json_payload())
    if not form.validate_on_submit():
        return form_error_response(form)

    project = Project(
        title=form.title.data.strip(),
        description=(form.description.data or "").strip() or None,
        owner=current_user,
    )
    db.session.add(project)
    db.session.commit()
    return jsonify(project.to_dict()), 201


@bp.route("/projects/<int:project_id>", methods=["GET"])
@login_required
def get_project(project_id: int):
    project = owned_project_or_abort(project_id)
    return jsonify(project.to_dict())


@bp.route("/projects/<int:project_id>", methods=["PUT", "PATCH"])
@login_required
def update_project(project_id: int):
    project = owned_project_or_abort(project_id)
    payload = json_payload()
    form = ProjectForm(payload)
    errors = _partial_errors(form, payload)
    if errors:
        return error_response("Please correct the highlighted fields.", 400, errors)

    if "title" in payload:
        project.title = form.title.data.strip()
    if "description" in payload:
        project.description = _clean_optional(form.description.data)
    if "is_archived" in payload:
        project.is_archived = form.is_archived.data
    db.session.commit()
    return jsonify(project.to_dict())


@bp.route("/projects/<int:project_id>", methods=["DELETE"])
@login_required
def delete_project(project_id: int):
    project = owned_project_or_abort(project_id)
    db.session.delete(project)
    db.session.commit()
    return "", 204


@bp.route("/projects/<int:project_id>/chapters", methods=["GET"])
@login_required
def list_chapters(project_id: int):
    owned_project_or_abort(project_id)
    chapters = (
        Chapter.query.filter_by(project_id=project_id)
        .order_by(Chapter.order.asc(), Chapter.id.asc())
        .all()
    )
    return jsonify([chapter.to_dict() for chapter in chapters])


@bp.route("/projects/<int:project_id>/chapters", methods=["POST"])
@login_required
def create_chapter(project_id: int):
    project = owned_project_or_abort(project_id)
    payload = json_payload()
    form = ChapterForm(payload)
    if not form.validate_on_submit():
        return form_error_response(form)

    order = form.order.data
    if order is None:
        current_max = (
            db.session.query(func.max(Chapter.order)).filter(Chapter.project_id == project.id).scalar()
        )
        order = (current_max or 0) + 1

    chapter = Chapter(
        project=project,
        title=form.title.data.strip(),
        content=form.content.data or "",
        order=order,
        is_draft=form.is_draft.data if "is_draft" in payload else True,
    )
    db.session.add(chapter)
    db.session.commit()
    return jsonify(chapter.to_dict()), 201


@bp.route("/chapters/<int:chapter_id>", methods=["GET"])
@login_required
def get_chapter(chapter_id: int):
    return jsonify(_chapter_or_abort(chapter_id).to_dict())


@bp.route("/chapters/<int:chapter_id>", methods=["PUT", "PATCH"])
@login_required
def update_chapter(chapter_id: int):
    chapter = _chapter_or_abort(chapter_id)
    payload = json_payload()
    form = ChapterForm(payload)
    errors = _partial_errors(form, payload)
    if errors:
        return error_response("Please correct the highlighted fields.", 400, errors)

    if "title" in payload:
        chapter.title = form.title.data.strip()
    if "content" in payload:
        chapter.content = form.content.data or ""
    if "order" in payload and form.order.data is not None:
        chapter.order = form.order.data
    if "is_draft" in payload:
        chapter.is_draft = form.is_draft.data
    db.session.commit()
    return jsonify(chapter.to_dict())


@bp.route("/chapters/<int:chapter_id>", methods=["DELETE"])
@login_required
def delete_chapter(chapter_id: int):
    chapter = _chapter_or_abort(chapter_id)
    db.session.delete(chapter)
    db.session.commit()
    return "", 204


@bp.route("/projects/<int:project_id>/bible-entries", methods=["GET"])
@login_required
def list_bible_entries(project_id: int):
    owned_project_or_abort(project_id)
    query = StoryBibleEntry.query.filter_by(project_id=project_id)
    entry_type = (request.args.get("entry_type") or "").strip()
    if entry_type:
        query = query.filter_by(entry_type=entry_type)
    entries = query.order_by(StoryBibleEntry.title.asc(), StoryBibleEntry.id.asc()).all()
    return jsonify([entry.to_dict() for entry in entries])


@bp.route("/projects/<int:project_id>/bible-entries", methods=["POST"])
@login_required
def create_bible_entry(project_id: int):
    project = owned_project_or_abort(project_id)
    payload = json_payload()
    form = StoryBibleEntryForm(payload)
    valid = form.validate_on_submit()
    tags, tag_errors = _tags_from(payload)
    if not valid or tag_errors:
        errors = dict(form.errors)
        if tag_errors:
            errors["tags"] = tag_errors
        return error_response("Please correct the highlighted fields.", 400, errors)

    entry = StoryBibleEntry(
        project=project,
        entry_type=form.entry_type.data.strip().lower(),
        title=form.title.data.strip(),
        content=form.content.data or "",
        category=_clean_optional(form.category.data),
        tags=tags,
    )
    db.session.add(entry)
    db.session.commit()
    return jsonify(entry.to_dict()), 201


@bp.route("/bible-entries/<int:entry_id>", methods=["GET"])
@login_required
def get_bible_entry(entry_id: int):
    return jsonify(_bible_entry_or_abort(entry_id).to_dict())


@bp.route("/bible-entries/<int:entry_id>", methods=["PUT", "PATCH"])
@login_required
def update_bible_entry(entry_id: int):
    entry = _bible_entry_or_abort(entry_id)
    payload = json_payload()
    form = StoryBibleEntryForm(payload)
    errors = _partial_errors(form, payload)
    tags, tag_errors = _tags_from(payload)
    if tag_errors:
        errors["tags"] = tag_errors
    if errors:
        return error_response("Please correct the highlighted fields.", 400, errors)

    if "entry_type" in payload:
        entry.entry_type = form.entry_type.data.strip().lower()
    if "title" in payload:
        entry.title = form.title.data.strip()
    if "content" in payload:
        entry.content = form.content.data or ""
    if "category" in payload:
        entry.category = _clean_optional(form.category.data)
    if "tags" in payload:
        entry.tags = tags
    db.session.commit()
    return jsonify(entry.to_dict())


@bp.route("/bible-entries/<int:entry_id>", methods=["DELETE"])
@login_required
def delete_bible_entry(entry_id: int):
    entry = _bible_entry_or_abort(entry_id)
    db.session.delete(entry)
    db.session.commit()
    return "", 204
