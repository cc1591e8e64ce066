"""Flask CLI commands for refresh-token storage hygiene."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

import click
from flask.cli import with_appcontext

from donamatch.infra.db.token_store import SQLAlchemyTokenStore

LOGGER = logging.getLogger(__name__)


@click.group("tokens")
def tokens_cli() -> None:
    """Maintenance commands for stored refresh tokens."""


@tokens_cli.command("purge")
@with_appcontext
def purge_command() -> None:
    """Hard-delete revoked and expired refresh tokens."""
    removed = SQLAlchemyTokenStore().purge_stale(datetime.now(UTC))
    LOGGER.info("purged stale tokens", extra={"entity": "Token"})
    click.echo(f"Purged {removed} stale token(s).")
