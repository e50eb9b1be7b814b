"""Data backend helpers on top of Flask-SQLAlchemy.

Every category call is a single read or a single write. Category and session
helpers never raise on database errors: they roll the session back, log the
failure and return a result whose ``error`` is set, so route handlers only
branch on success or failure.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import generate_password_hash

from .models import AuthSession, Category, User, db

logger = logging.getLogger(__name__)


@dataclass
class CategoryResult:
    category: Optional[Category] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None and self.category is not None


@dataclass
class CategoryListResult:
    categories: List[Category] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class SignOutResult:
    done: bool
    error: Optional[str] = None


def init_db() -> None:
    db.create_all()


def create_user(username: str, email: str, password: str) -> User:
    """Insert a user. Raises ``IntegrityError`` on duplicate username/email."""
    user = User(
        username=username,
        email=email,
        password_hash=generate_password_hash(password),
    )
    db.session.add(user)
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise
    logger.info("Created user %s", user.id)
    return user


def find_user_by_login(identifier: str) -> Optional[User]:
    return User.query.filter(
        (User.username == identifier) | (User.email == identifier)
    ).first()


def get_user(user_id: str) -> Optional[User]:
    return db.session.get(User, user_id)


def open_session(user_id: str) -> Optional[AuthSession]:
    """Record a new login. Returns ``None`` if it could not be stored."""
    auth_session = AuthSession(user_id=user_id)
    try:
        db.session.add(auth_session)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Failed to open session for user %s", user_id)
        return None
    return auth_session


def get_auth_session(session_id: str) -> Optional[AuthSession]:
    return db.session.get(AuthSession, session_id)


def sign_out_user(session_id: Optional[str]) -> SignOutResult:
    if not session_id:
        return SignOutResult(done=False, error="No session to sign out.")
    try:
        auth_session = db.session.get(AuthSession, session_id)
        if auth_session is None:
            return SignOutResult(done=False, error="Unknown session.")
        if auth_session.revoked_at is None:
            auth_session.revoked_at = dt.datetime.now(dt.timezone.utc)
            db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Failed to revoke session %s", session_id)
        return SignOutResult(done=False, error=str(exc))
    return SignOutResult(done=True)


def insert_category(user_id: str, name: str, expense: bool) -> CategoryResult:
    category = Category(user_id=user_id, name=name, expense=expense)
    try:
        db.session.add(category)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Failed to insert category for user %s", user_id)
        return CategoryResult(error=str(exc))
    logger.info("Inserted category %s for user %s", category.id, user_id)
    return CategoryResult(category=category)


def get_category_by_id(category_id: str, user_id: str) -> CategoryResult:
    """Fetch one category owned by ``user_id``.

    A category owned by someone else is reported exactly like a missing one.
    """
    try:
        category = Category.query.filter_by(id=category_id, user_id=user_id).first()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Failed to load category %s", category_id)
        return CategoryResult(error=str(exc))
    return CategoryResult(category=category)


def update_category_by_id(category_id: str, user_id: str, name: str) -> CategoryResult:
    """Rename a category. The income/expense flag is never touched."""
    try:
        category = Category.query.filter_by(id=category_id, user_id=user_id).first()
        if category is None:
            return CategoryResult()
        category.name = name
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Failed to update category %s", category_id)
        return CategoryResult(error=str(exc))
    logger.info("Renamed category %s", category_id)
    return CategoryResult(category=category)


def list_categories(user_id: str) -> CategoryListResult:
    try:
        categories = (
            Category.query.filter_by(user_id=user_id)
            .order_by(Category.name, Category.id)
            .all()
        )
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Failed to list categories for user %s", user_id)
        return CategoryListResult(error=str(exc))
    return CategoryListResult(categories=categories)
