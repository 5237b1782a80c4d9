"""Helpers shared by the JSON blueprints."""
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

from flask import abort, jsonify, request
from flask_login import current_user
from flask_wtf import FlaskForm
from werkzeug.datastructures import MultiDict
from wtforms import StringField

from .extensions import db
from .models import Project


def json_payload() -> Dict[str, Any]:
    """Return the request's JSON object, or an empty dict when there is no body.

    A body that is JSON but not an object is rejected with a 400.
    """

    if not request.data:
        return {}
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        abort(400, description="Send the request body as a JSON object.")
    return payload


def form_data(payload: Mapping[str, Any]) -> MultiDict:
    """Convert a JSON object into form data that WTForms fields can process."""

    data: MultiDict = MultiDict()
    for key, value in payload.items():
        values = value if isinstance(value, list) else [value]
        for item in values:
            data.add(key, _form_value(item))
    return data


def _form_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


class JsonForm(FlaskForm):
    """A FlaskForm bound to a decoded JSON object instead of request form data.

    Every declared field takes a single value: lists and objects are rejected,
    and text fields only accept strings or null.
    """

    def __init__(self, payload: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> None:
        self.payload: Dict[str, Any] = dict(payload or {})
        super().__init__(formdata=form_data(self.payload), **kwargs)

    def validate(self, extra_validators=None) -> bool:
        valid = super().validate(extra_validators=extra_validators)
        for name, field in self._fields.items():
            if name not in self.payload:
                continue
            problem = _shape_error(field, self.payload[name])
            if problem:
                field.errors = list(field.errors) + [problem]
                valid = False
        return valid


def _shape_error(field, value: Any) -> Optional[str]:
    if isinstance(value, (list, dict)):
        return "Expected a single value, not a list or object."
    if isinstance(field, StringField) and value is not None and not isinstance(value, str):
        return "Expected text."
    return None


def error_response(message: str, status: int = 400, errors: Optional[Mapping[str, List[str]]] = None):
    body: Dict[str, Any] = {"error": message}
    if errors:
        body["errors"] = dict(errors)
    return jsonify(body), status


def form_error_response(form, message: str = "Please correct the highlighted fields."):
    return error_response(message, 400, form.errors)


def owned_project_or_abort(project_id: int) -> Project:
    project = db.get_or_404(Project, project_id, description="Project not found.")
    if project.owner_id != current_user.id:
        abort(403, description="You do not have access to this project.")
    return project


def flag_enabled(name: str, payload: Mapping[str, Any]) -> bool:
    """Read a boolean option from the query string or the JSON body."""

    raw = request.args.get(name)
    if raw is None:
        raw = payload.get(name)
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return False
    return str(raw).strip().lower() in {"1", "true", "yes", "on"}
