"""Configuration utilities for X Man.

Provides the application defaults and a helper to load overrides from a
JSON file.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from .redirects import is_safe_path

PACKAGE_ROOT = Path(__file__).resolve().parent
PROJECT_ROOT = PACKAGE_ROOT.parent

DEFAULT_DATABASE_URI = f"sqlite:///{PROJECT_ROOT / 'xman.db'}"
DEFAULT_SECRET_KEY = "dev-xman-secret"
CATEGORIES_PATH = "/app/categories"
SECRET_KEY_ENV = "XMAN_SECRET_KEY"


@dataclass
class AppConfig:
    secret_key: str = DEFAULT_SECRET_KEY
    database_uri: str = DEFAULT_DATABASE_URI
    session_cookie_name: str = "xman_session"
    session_cookie_secure: bool = False
    log_level: str = "INFO"
    default_redirect: str = CATEGORIES_PATH

    @staticmethod
    def load(config_path: Optional[str | Path] = None) -> "AppConfig":
        """Load config from JSON if provided, else use defaults.

        JSON format (every key optional):
        {
          "secret_key": "change-me",
          "database_uri": "sqlite:////var/lib/xman/xman.db",
          "session_cookie_name": "xman_session",
          "session_cookie_secure": true,
          "log_level": "DEBUG",
          "default_redirect": "/app/categories"
        }

        The ``XMAN_SECRET_KEY`` environment variable wins over both.
        """

        values: Dict[str, Any] = {}
        known = {f.name for f in fields(AppConfig)}

        if config_path:
            p = Path(config_path)
            if p.exists():
                with p.open("r", encoding="utf-8") as f:
                    raw = json.load(f)
                if isinstance(raw, dict):
                    values = {k: v for k, v in raw.items() if k in known}

        redirect_to = values.get("default_redirect")
        if redirect_to is not None and (not isinstance(redirect_to, str) or not is_safe_path(redirect_to)):
            values["default_redirect"] = CATEGORIES_PATH

        env_secret = os.environ.get(SECRET_KEY_ENV)
        if env_secret:
            values["secret_key"] = env_secret
        return AppConfig(**values)

    def flask_settings(self) -> Dict[str, Any]:
        return {
            "SECRET_KEY": self.secret_key,
            "SQLALCHEMY_DATABASE_URI": self.database_uri,
            "SQLALCHEMY_TRACK_MODIFICATIONS": False,
            "SESSION_COOKIE_NAME": self.session_cookie_name,
            "SESSION_COOKIE_HTTPONLY": True,
            "SESSION_COOKIE_SAMESITE": "Lax",
            "SESSION_COOKIE_SECURE": self.session_cookie_secure,
            "DEFAULT_REDIRECT": self.default_redirect,
        }
