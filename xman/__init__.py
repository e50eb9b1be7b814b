"""X Man personal finance web application."""

__all__ = [
    "config",
    "models",
    "db",
    "auth",
    "forms",
    "redirects",
    "manifest",
    "webapp",
    "cli",
]

__version__ = "0.1.0"
