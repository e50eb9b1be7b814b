"""Typed form submissions for the category endpoints.

Each form class has a ``parse`` step that either returns a populated
instance or raises ``FormValidationError`` carrying the fields to echo back
so the client can re-populate its inputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from .config import CATEGORIES_PATH

CATEGORY_TYPES = ("income", "expense")
FORM_NOT_SUBMITTED = "Form not submitted correctly."


def form_error_payload(fields: Dict[str, str], message: str = FORM_NOT_SUBMITTED) -> Dict[str, object]:
    return {"formError": message, "fields": dict(fields)}


class FormValidationError(ValueError):
    def __init__(self, fields: Dict[str, str], message: str = FORM_NOT_SUBMITTED):
        super().__init__(message)
        self.message = message
        self.fields = fields

    def to_payload(self) -> Dict[str, object]:
        return form_error_payload(self.fields, self.message)


def _text(form: Mapping[str, str], key: str) -> Optional[str]:
    value = form.get(key)
    if value is None or not isinstance(value, str):
        return None
    return value


@dataclass
class CreateCategoryForm:
    title: str
    type: str
    redirect_to: Optional[str] = None

    @property
    def expense(self) -> bool:
        return self.type == "expense"

    @classmethod
    def parse(cls, form: Mapping[str, str]) -> "CreateCategoryForm":
        raw_title = _text(form, "title")
        category_type = _text(form, "type")
        title = (raw_title or "").strip()
        if not title or category_type not in CATEGORY_TYPES:
            raise FormValidationError({"title": raw_title or ""})
        return cls(title=title, type=category_type, redirect_to=_text(form, "redirectTo"))


@dataclass
class UpdateCategoryForm:
    name: str
    redirect_to: str = field(default=CATEGORIES_PATH)

    @classmethod
    def parse(cls, form: Mapping[str, str]) -> "UpdateCategoryForm":
        raw_name = _text(form, "name")
        name = (raw_name or "").strip()
        if not name:
            raise FormValidationError({"name": raw_name or ""})
        return cls(name=name, redirect_to=_text(form, "redirectTo") or CATEGORIES_PATH)
