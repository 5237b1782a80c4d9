from flask import jsonify
from flask_login import current_user, login_required, login_user, logout_user
from flask_wtf.csrf import generate_csrf

from ..api import error_response, form_error_response, json_payload
from ..extensions import db
from ..models import User
from . import bp
from .forms import LoginForm, RegistrationForm


@bp.route("/csrf-token", methods=["GET"])
def csrf_token():
    return jsonify({"csrf_token": generate_csrf()})


@bp.route("/register", methods=["POST"])
def register():
    form = RegistrationForm(json_payload())
    if not form.validate_on_submit():
        return form_error_response(form)

    user = User(email=form.email.data.lower(), display_name=form.display_name.data.strip())
    user.set_password(form.password.data)
    db.session.add(user)
    db.session.commit()
    login_user(user)
    return jsonify(user.to_dict()), 201


@bp.route("/login", methods=["POST"])
def login():
    form = LoginForm(json_payload())
    if not form.validate_on_submit():
        return form_error_response(form)

    user = User.query.filter_by(email=form.email.data.lower()).first()
    if not user or not user.check_password(form.password.data):
        return error_response("Invalid email or password.", 401)

    login_user(user)
    return jsonify(user.to_dict())


@bp.route("/logout", methods=["POST"])
@login_required
def logout():
    logout_user()
    return "", 204


@bp.route("/me", methods=["GET"])
@login_required
def me():
    return jsonify(current_user.to_dict())
