"""Session-cookie authentication.

``authenticate`` reads the signed session cookie off the request it is given
and returns either ``Authorized`` or ``Unauthorized``; handlers branch on the
result instead of passing callbacks around. It never writes to the session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from flask import Request, current_app, jsonify, session
from sqlalchemy.exc import SQLAlchemyError

from .db import get_auth_session, get_user, open_session
from .models import User

logger = logging.getLogger(__name__)

LOGIN_REQUIRED = "You must be logged in."
LOGIN_REQUIRED_FOR_PAGE = "You must be logged in to access this page"


@dataclass(frozen=True)
class Authorized:
    user: User


@dataclass(frozen=True)
class Unauthorized:
    reason: str = LOGIN_REQUIRED


AuthResult = Union[Authorized, Unauthorized]


def authenticate(request: Request) -> AuthResult:
    cookie_session = current_app.session_interface.open_session(current_app, request)
    if not cookie_session:
        return Unauthorized()

    user_id = cookie_session.get("user_id")
    session_id = cookie_session.get("session_id")
    if not user_id or not isinstance(user_id, str):
        return Unauthorized()
    if not session_id or not isinstance(session_id, str):
        return Unauthorized()

    try:
        auth_session = get_auth_session(session_id)
        if auth_session is None or not auth_session.active or auth_session.user_id != user_id:
            return Unauthorized()
        user = get_user(user_id)
    except SQLAlchemyError:
        logger.exception("Could not resolve session for user %s", user_id)
        return Unauthorized()

    if user is None:
        return Unauthorized()
    return Authorized(user)


def unauthorized_response(result: Unauthorized, message: str | None = None):
    return jsonify({"message": message or result.reason}), 401


def login_user(user: User) -> bool:
    """Start a session for ``user``. Returns False if the login could not be recorded."""
    auth_session = open_session(user.id)
    if auth_session is None:
        return False
    session.clear()
    session["user_id"] = user.id
    session["session_id"] = auth_session.id
    logger.info("User %s logged in", user.id)
    return True
