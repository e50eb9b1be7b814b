"""Flask web interface for X Man."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from flask import Flask, current_app, jsonify, redirect, request, session
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash

from .auth import (
    LOGIN_REQUIRED_FOR_PAGE,
    Unauthorized,
    authenticate,
    login_user,
    unauthorized_response,
)
from .config import CATEGORIES_PATH, AppConfig
from .db import (
    create_user,
    find_user_by_login,
    get_category_by_id,
    init_db,
    insert_category,
    list_categories,
    sign_out_user,
    update_category_by_id,
)
from .forms import (
    FORM_NOT_SUBMITTED,
    CreateCategoryForm,
    FormValidationError,
    UpdateCategoryForm,
    form_error_payload,
)
from .manifest import MANIFEST_MIMETYPE, build_manifest, manifest_headers
from .models import db
from .redirects import safe_redirect

logger = logging.getLogger(__name__)

APP_NAME = "X Man"
LOGIN_PATH = "/login"
SOMETHING_WENT_WRONG = "Something went wrong."
NOT_FOUND = "Not found."


def _page_title(name: Optional[str]) -> str:
    if not name:
        return f"Not found | {APP_NAME}"
    return f"Edit {name} | {APP_NAME}"


def _form_error(fields: Dict[str, str], status: int, message: str = FORM_NOT_SUBMITTED):
    return jsonify(form_error_payload(fields, message)), status


def _fallback() -> str:
    return safe_redirect(current_app.config.get("DEFAULT_REDIRECT"), CATEGORIES_PATH)


def create_app(config_path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    cfg = AppConfig.load(config_path)
    app.config.update(cfg.flask_settings())
    if overrides:
        app.config.update(overrides)

    db.init_app(app)
    with app.app_context():
        init_db()

    @app.route("/")
    def index():
        return redirect(_fallback())

    @app.route("/signup", methods=["POST"])
    def signup():
        errors: List[str] = []
        username = (request.form.get("username") or "").strip()
        email = (request.form.get("email") or "").strip()
        password = request.form.get("password") or ""
        if not username:
            errors.append("Username is required.")
        if not email:
            errors.append("Email is required.")
        if not password:
            errors.append("Password is required.")
        if not errors:
            try:
                user = create_user(username, email, password)
            except IntegrityError:
                errors.append("Username or email already exists.")
            else:
                if not login_user(user):
                    return jsonify({"errors": [SOMETHING_WENT_WRONG]}), 500
                return redirect(_fallback())
        return jsonify({"errors": errors}), 400

    @app.route("/login", methods=["GET", "POST"])
    def login():
        if request.method == "GET":
            return jsonify({"message": "Log in to continue."})
        username = (request.form.get("username") or "").strip()
        password = request.form.get("password") or ""
        user = find_user_by_login(username) if username else None
        if user is None or not check_password_hash(user.password_hash, password):
            logger.info("Rejected login for %r", username)
            return jsonify({"errors": ["Invalid credentials."]}), 401
        if not login_user(user):
            return jsonify({"errors": [SOMETHING_WENT_WRONG]}), 500
        return redirect(safe_redirect(request.form.get("redirectTo"), _fallback()))

    @app.route("/api/logout", methods=["GET"])
    def logout_page():
        return redirect("/")

    @app.route("/api/logout", methods=["POST"])
    def logout():
        if not session:
            return redirect(LOGIN_PATH)
        result = sign_out_user(session.get("session_id"))
        if result.error or not result.done:
            logger.warning("Error signing out user %s: %s", session.get("user_id"), result.error)
        session.clear()
        return redirect(LOGIN_PATH)

    @app.route("/app/categories", methods=["GET"])
    def categories():
        auth = authenticate(request)
        if isinstance(auth, Unauthorized):
            return unauthorized_response(auth)
        result = list_categories(auth.user.id)
        if not result.success:
            return jsonify({"message": SOMETHING_WENT_WRONG}), 500
        rows = [c.to_dict() for c in result.categories]
        return jsonify(
            {
                "categories": rows,
                "income": [c for c in rows if not c["expense"]],
                "expense": [c for c in rows if c["expense"]],
            }
        )

    @app.route("/app/categories/new", methods=["POST"])
    def new_category():
        auth = authenticate(request)
        if isinstance(auth, Unauthorized):
            return unauthorized_response(auth)

        try:
            form = CreateCategoryForm.parse(request.form)
        except FormValidationError as exc:
            return jsonify(exc.to_payload()), 403

        result = insert_category(auth.user.id, name=form.title, expense=form.expense)
        if not result.success:
            return _form_error({"title": form.title}, 500, SOMETHING_WENT_WRONG)

        return redirect(safe_redirect(form.redirect_to, _fallback()))

    @app.route("/app/categories/edit/", defaults={"category_id": None}, methods=["GET"])
    @app.route("/app/categories/edit/<category_id>", methods=["GET"])
    def edit_category(category_id: Optional[str]):
        auth = authenticate(request)
        if isinstance(auth, Unauthorized):
            return unauthorized_response(auth, LOGIN_REQUIRED_FOR_PAGE)

        if not category_id:
            return redirect(safe_redirect(request.args.get("redirectTo"), _fallback()))

        result = get_category_by_id(category_id, auth.user.id)
        if not result.success:
            return jsonify({"message": NOT_FOUND, "title": _page_title(None)}), 404

        return jsonify(
            {
                "message": "",
                "title": _page_title(result.category.name),
                "category": result.category.to_dict(),
            }
        )

    @app.route("/app/categories/edit/", defaults={"category_id": None}, methods=["POST"])
    @app.route("/app/categories/edit/<category_id>", methods=["POST"])
    def update_category(category_id: Optional[str]):
        auth = authenticate(request)
        if isinstance(auth, Unauthorized):
            return unauthorized_response(auth, LOGIN_REQUIRED_FOR_PAGE)

        if not category_id:
            return redirect(_fallback())

        try:
            form = UpdateCategoryForm.parse(request.form)
        except FormValidationError as exc:
            return jsonify(exc.to_payload()), 403

        result = update_category_by_id(category_id, auth.user.id, form.name)
        if result.error:
            return _form_error({"name": form.name}, 500, SOMETHING_WENT_WRONG)
        if result.category is None:
            return _form_error({"name": form.name}, 403)

        return redirect(safe_redirect(form.redirect_to, _fallback()))

    @app.route("/resources/manifest.json", methods=["GET"])
    def manifest():
        response = jsonify(build_manifest())
        response.mimetype = MANIFEST_MIMETYPE
        response.headers.update(manifest_headers())
        return response

    return app
