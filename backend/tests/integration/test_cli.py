"""Integration tests for the ``flask seed`` and ``flask tokens`` commands."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from donamatch.models.catalog import Category, CategoryKey
from donamatch.models.token import Token, TokenType, TokenTypeKey
from tests.factories.token import TokenFactory


def test_seed_run_is_idempotent(app, session):
    runner = app.test_cli_runner()

    first = runner.invoke(args=["seed", "run"])
    second = runner.invoke(args=["seed", "run"])

    assert first.exit_code == 0, first.output
    assert "Seed summary:" in first.output
    assert f"created={len(CategoryKey):>2}" in first.output
    assert second.exit_code == 0, second.output
    assert "created= 0" in second.output
    assert session.query(Category).count() == len(CategoryKey)
    assert session.query(TokenType).count() == len(TokenTypeKey)


def test_seed_fresh_requires_confirmation(app, session, reference_data):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["seed", "fresh"], input="n\n")

    assert result.exit_code != 0
    assert session.query(Category).count() == len(CategoryKey)


def test_tokens_purge(app, session, reference_data):
    now = datetime.now(UTC)
    TokenFactory(token="live")
    TokenFactory(token="expired", expires_at=now - timedelta(days=1))
    TokenFactory(token="revoked", deleted_at=now)
    session.commit()

    result = app.test_cli_runner().invoke(args=["tokens", "purge"])

    assert result.exit_code == 0, result.output
    assert "Purged 2 stale token(s)." in result.output
    assert [t.token for t in session.query(Token).all()] == ["live"]
