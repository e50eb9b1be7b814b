"""SQLAlchemy models for the X Man web application."""

from __future__ import annotations

import datetime as dt
import uuid

from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=_utcnow, nullable=False)

    sessions = db.relationship("AuthSession", back_populates="user", cascade="all, delete-orphan")
    categories = db.relationship("Category", back_populates="user", cascade="all, delete-orphan")


class AuthSession(db.Model):
    """Server-side record of a login; the cookie carries its id."""

    __tablename__ = "auth_sessions"

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = db.Column(db.DateTime, default=_utcnow, nullable=False)
    revoked_at = db.Column(db.DateTime)

    user = db.relationship("User", back_populates="sessions")

    @property
    def active(self) -> bool:
        return self.revoked_at is None


class Category(db.Model):
    __tablename__ = "categories"

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = db.Column(db.String(120), nullable=False)
    # True = expense, False = income. Fixed at creation.
    expense = db.Column(db.Boolean, nullable=False)
    created_at = db.Column(db.DateTime, default=_utcnow, nullable=False)

    user = db.relationship("User", back_populates="categories")

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "expense": self.expense}
