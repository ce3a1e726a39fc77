"""Typer application root for the kb-portal CLI.

Global options are applied before any sub-command opens the record store:
``--data-dir`` repoints ``STORE_DATA_DIR`` and reloads settings, so
``kb-portal --data-dir /srv/kb manage users`` inspects another portal's
files without editing ``.env``.
"""

import logging
import os
from typing import Optional

import typer
from rich.console import Console

from knowledge_portal import __version__
from knowledge_portal.cli.manage import manage_app
from knowledge_portal.cli.search import search
from knowledge_portal.config import reload_settings
from knowledge_portal.core.logging import (
    LOGGER_NAME,
    configure_logging,
    suppress_third_party_loggers,
)

console = Console()

app = typer.Typer(
    name="kb-portal",
    help="Search the knowledge base and manage employee accounts.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"kb-portal {__version__}")
        raise typer.Exit()


def _data_dir_callback(value: Optional[str]) -> Optional[str]:
    """Point every sub-command at another record store directory."""
    if value:
        os.environ["STORE_DATA_DIR"] = value
        settings = reload_settings()
        console.print(f"[dim]Using data dir {settings.store.data_dir}[/dim]")
    return value


@app.callback()
def main(
    _version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Log store and search activity at DEBUG level.",
    ),
    _data_dir: Optional[str] = typer.Option(
        None,
        "--data-dir",
        "-D",
        help="Record store directory (overrides STORE_DATA_DIR).",
        callback=_data_dir_callback,
    ),
) -> None:
    """Search the knowledge base and manage employee accounts."""
    if verbose:
        # Module loggers may already have configured INFO at import time
        configure_logging(level=logging.DEBUG)
        package_logger = logging.getLogger(LOGGER_NAME)
        package_logger.setLevel(logging.DEBUG)
        for handler in package_logger.handlers:
            handler.setLevel(logging.DEBUG)
        suppress_third_party_loggers()


app.add_typer(manage_app, name="manage", help="Inspect the record store and register users.")
app.command(name="search")(search)
