"""Command-line interface for X Man.

Usage:
  python -m xman.cli init-db
  python -m xman.cli add-user --username ada --email ada@example.com --password secret
  python -m xman.cli serve --port 5000

Every command accepts ``--config`` pointing at a JSON config file.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from .config import AppConfig
from .db import create_user, init_db
from .webapp import create_app


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="X Man personal finance app")
    p.add_argument("--config", "-c", help="Path to JSON config")
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create database tables")

    add_user = sub.add_parser("add-user", help="Create a user account")
    add_user.add_argument("--username", required=True)
    add_user.add_argument("--email", required=True)
    add_user.add_argument("--password", required=True)

    serve = sub.add_parser("serve", help="Run the development server")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=5000)
    serve.add_argument("--debug", action="store_true")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    cfg = AppConfig.load(args.config)
    logging.basicConfig(
        level=getattr(logging, cfg.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(args.config)

    if args.command == "serve":
        app.run(host=args.host, port=args.port, debug=args.debug)
        return 0

    with app.app_context():
        if args.command == "init-db":
            init_db()
            print(f"Initialized database: {cfg.database_uri}")
            return 0
        try:
            user = create_user(args.username, args.email, args.password)
        except IntegrityError:
            print("Username or email already exists.")
            return 1
        print(f"Created user {user.username} ({user.id})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
