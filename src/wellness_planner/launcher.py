"""
Wellness Planner command line launcher.

Subcommands:
- serve: apply pending migrations, then run the API with uvicorn
- migrate: apply pending migrations only
- issue-token: mint a development bearer token for a user id
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import uvicorn
from alembic import command
from alembic.config import Config

from .config import get_config
from .utils.logging_config import get_logger, initialize_logging

logger = get_logger("main")

# Migration scripts ship as package data
MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"


def alembic_config(db_url: Optional[str] = None) -> Config:
    """Alembic configuration pointing at the packaged migration scripts."""
    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    alembic_cfg.set_main_option("sqlalchemy.url", db_url or get_config().database.url)
    return alembic_cfg


def run_migrations(db_url: Optional[str] = None) -> None:
    """Upgrade the database schema to the latest revision."""
    alembic_cfg = alembic_config(db_url)
    logger.info(f"Applying migrations to {alembic_cfg.get_main_option('sqlalchemy.url')}")
    command.upgrade(alembic_cfg, "head")


def serve(host: Optional[str] = None, port: Optional[int] = None) -> int:
    config = get_config()
    run_migrations()

    uvicorn.run(
        "wellness_planner.main:app",
        host=host or config.server.host,
        port=port or config.server.port,
        reload=config.server.auto_reload,
        log_level="debug" if config.server.debug else "info",
    )
    return 0


def issue_token(user_id: str) -> int:
    """Print a bearer token for ``user_id``."""
    from .auth.jwt_auth import jwt_manager

    print(jwt_manager.create_access_token(user_id))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wellness-planner", description="Wellness Planner API server"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run migrations and start the API")
    serve_parser.add_argument("--host", help="Bind address (default from config)")
    serve_parser.add_argument("--port", type=int, help="Port (default from config)")

    subparsers.add_parser("migrate", help="Apply database migrations")

    token_parser = subparsers.add_parser(
        "issue-token", help="Mint a development access token"
    )
    token_parser.add_argument("--user-id", required=True, help="User id for the token subject")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the console script."""
    args = build_parser().parse_args(argv)
    initialize_logging()

    if args.command == "serve":
        return serve(args.host, args.port)
    if args.command == "migrate":
        run_migrations()
        return 0
    return issue_token(args.user_id)


if __name__ == "__main__":
    sys.exit(main())
