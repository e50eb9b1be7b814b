"""
Tests for configuration loading.
"""

import json

from xman.config import DEFAULT_SECRET_KEY, AppConfig


def test_defaults_without_file(monkeypatch):
    monkeypatch.delenv("XMAN_SECRET_KEY", raising=False)
    cfg = AppConfig.load(None)
    assert cfg.secret_key == DEFAULT_SECRET_KEY
    assert cfg.default_redirect == "/app/categories"


def test_missing_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("XMAN_SECRET_KEY", raising=False)
    cfg = AppConfig.load(tmp_path / "absent.json")
    assert cfg == AppConfig()


def test_json_overrides_and_unknown_keys_ignored(tmp_path, monkeypatch):
    monkeypatch.delenv("XMAN_SECRET_KEY", raising=False)
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"secret_key": "from-file", "log_level": "DEBUG", "bogus": 1}),
        encoding="utf-8",
    )
    cfg = AppConfig.load(path)
    assert cfg.secret_key == "from-file"
    assert cfg.log_level == "DEBUG"


def test_env_secret_wins(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"secret_key": "from-file"}), encoding="utf-8")
    monkeypatch.setenv("XMAN_SECRET_KEY", "from-env")
    assert AppConfig.load(path).secret_key == "from-env"


def test_flask_settings():
    settings = AppConfig(database_uri="sqlite://").flask_settings()
    assert settings["SQLALCHEMY_DATABASE_URI"] == "sqlite://"
    assert settings["SESSION_COOKIE_HTTPONLY"] is True
    assert settings["SESSION_COOKIE_SAMESITE"] == "Lax"


def test_unsafe_default_redirect_is_replaced(tmp_path, monkeypatch):
    monkeypatch.delenv("XMAN_SECRET_KEY", raising=False)
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"default_redirect": "https://evil.example/"}), encoding="utf-8")
    assert AppConfig.load(path).default_redirect == "/app/categories"


def test_safe_default_redirect_is_kept(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"default_redirect": "/app"}), encoding="utf-8")
    assert AppConfig.load(path).default_redirect == "/app"
