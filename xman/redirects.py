"""Post-action redirect targets.

Only same-origin, root-relative paths are ever forwarded; anything else falls
back to a fixed location.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlsplit

DEFAULT_REDIRECT = "/"

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def is_safe_path(candidate: str) -> bool:
    if not candidate.startswith("/"):
        return False
    # "//host" and "/\host" are treated as protocol-relative by browsers.
    if candidate.startswith("//") or candidate.startswith("/\\"):
        return False
    if _CONTROL_CHARS.search(candidate):
        return False
    parts = urlsplit(candidate)
    return not parts.scheme and not parts.netloc


def safe_redirect(candidate: Optional[object], fallback: str = DEFAULT_REDIRECT) -> str:
    if not candidate or not isinstance(candidate, str) or not candidate.strip():
        return fallback
    if not is_safe_path(candidate):
        return fallback
    return candidate
