"""
Server launcher for the Knowledge Portal backend (``kb-portal-api``).

Store and session overrides given on the command line are exported as
``STORE_*`` / ``SESSION_*`` environment variables before uvicorn starts,
so the app (and any ``--reload`` worker process) picks them up through
the normal settings path.

Usage::

    kb-portal-api                               # settings from env / .env
    kb-portal-api --port 8080 --reload
    kb-portal-api --data-dir /srv/kb --no-seed  # production data, no demo rows
    kb-portal-api --session-ttl 8               # 8-hour sessions
"""

import argparse
import os
from typing import Optional, Sequence

import uvicorn

from knowledge_portal.config import Settings, get_settings, reload_settings
from knowledge_portal.core import (
    configure_logging,
    get_logger,
    suppress_third_party_loggers,
)

logger = get_logger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    """Argument parser whose defaults come from the current settings."""
    parser = argparse.ArgumentParser(
        prog="kb-portal-api",
        description="Serve the Knowledge Portal HTTP API.",
    )
    server = parser.add_argument_group("server")
    server.add_argument("--host", default=settings.api.host)
    server.add_argument("--port", type=int, default=settings.api.port)
    server.add_argument(
        "--reload", action="store_true", help="Restart on source changes"
    )

    store = parser.add_argument_group("record store")
    store.add_argument(
        "--data-dir",
        help=f"Directory holding users.json and queries.json "
        f"(current: {settings.store.data_dir})",
    )
    store.add_argument(
        "--no-seed",
        action="store_true",
        help="Do not seed demo users and queries into empty files",
    )

    session = parser.add_argument_group("sessions")
    session.add_argument(
        "--session-ttl",
        type=int,
        metavar="HOURS",
        help=f"Session lifetime in hours (current: {settings.session.ttl_hours})",
    )
    return parser


def apply_overrides(args: argparse.Namespace) -> Settings:
    """Export command-line overrides to the environment and reload settings."""
    if args.data_dir:
        os.environ["STORE_DATA_DIR"] = args.data_dir
    if args.no_seed:
        os.environ["STORE_SEED_DEMO_DATA"] = "false"
    if args.session_ttl is not None:
        if args.session_ttl <= 0:
            raise SystemExit("--session-ttl must be a positive number of hours")
        os.environ["SESSION_TTL_HOURS"] = str(args.session_ttl)
    return reload_settings()


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Parse arguments, apply overrides and hand over to uvicorn."""
    args = build_parser(get_settings()).parse_args(argv)

    configure_logging()
    suppress_third_party_loggers()

    settings = apply_overrides(args)
    logger.info(
        "Serving on %s:%d (data dir %s, seeding %s, session TTL %dh)",
        args.host,
        args.port,
        settings.store.data_dir,
        "on" if settings.store.seed_demo_data else "off",
        settings.session.ttl_hours,
    )

    uvicorn.run(
        "knowledge_portal.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
