"""Idempotent seed helpers for the reference tables every install needs."""

from __future__ import annotations

import logging
from typing import Any, TypeVar, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from donamatch.models.catalog import (
    Category,
    CategoryKey,
    CollectionCenter,
    DonationStatus,
    DonationStatusKey,
    RequestStatus,
    RequestStatusKey,
)
from donamatch.models.token import TokenType, TokenTypeKey

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

COLLECTION_CENTER_FIXTURES: list[dict[str, Any]] = [
    {
        "key": "Centro Cívico Delicias",
        "latitude": 41.6488,
        "longitude": -0.9053,
        "observation": "Lunes a viernes de 9:00 a 14:00.",
    },
    {
        "key": "Biblioteca Municipal Norte",
        "latitude": 40.4862,
        "longitude": -3.6934,
        "observation": "Entrada por la puerta lateral.",
    },
    {
        "key": "Parroquia San Miguel",
        "latitude": 37.3891,
        "longitude": -5.9845,
        "observation": None,
    },
]


def _session(database: SQLAlchemy) -> Session:
    return cast(Session, database.session)


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    """Update summary counters for the given table."""
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    if created:
        entry["created"] += 1
    else:
        entry["existing"] += 1


def _get_or_create(
    session: Session,
    model: type[T],
    *,
    defaults: dict[str, Any] | None = None,
    **filters: Any,
) -> tuple[T, bool]:
    """Fetch ``model`` by ``filters`` or create it using ``defaults``."""
    instance = session.execute(select(model).filter_by(**filters)).scalar_one_or_none()
    if instance is not None:
        return instance, False
    params = dict(defaults or {})
    params.update(filters)
    instance = cast(T, model(**params))
    session.add(instance)
    session.flush()
    return instance, True


def _seed_keys(
    session: Session,
    model: type[Any],
    keys: list[str],
    summary: dict[str, dict[str, int]],
) -> None:
    for key in keys:
        _, created = _get_or_create(session, model, key=key)
        _touch(summary, model.__tablename__, created)


def seed_lookup_tables(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Seed token types, categories and the donation/request status tables."""
    if verbose:
        LOGGER.info("Seeding lookup tables...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}
    _seed_keys(session, TokenType, [k.value for k in TokenTypeKey], summary)
    _seed_keys(session, Category, [k.value for k in CategoryKey], summary)
    _seed_keys(session, DonationStatus, [k.value for k in DonationStatusKey], summary)
    _seed_keys(session, RequestStatus, [k.value for k in RequestStatusKey], summary)
    return summary


def seed_collection_centers(
    database: SQLAlchemy, *, verbose: bool = False
) -> dict[str, dict[str, int]]:
    """Seed demo collection centres; existing rows keep their coordinates."""
    if verbose:
        LOGGER.info("Seeding collection centres...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}
    for fixture in COLLECTION_CENTER_FIXTURES:
        defaults = {k: v for k, v in fixture.items() if k != "key"}
        _, created = _get_or_create(
            session, CollectionCenter, key=fixture["key"], defaults=defaults
        )
        _touch(summary, CollectionCenter.__tablename__, created)
    return summary


def run_all(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Run every seeder in one transaction and commit."""
    if verbose:
        LOGGER.info("Running full seed pipeline...")
    session = _session(database)
    combined: dict[str, dict[str, int]] = {}
    try:
        for func in (seed_lookup_tables, seed_collection_centers):
            result = func(database, verbose=verbose)
            for table, counters in result.items():
                entry = combined.setdefault(table, {"created": 0, "existing": 0})
                entry["created"] += counters.get("created", 0)
                entry["existing"] += counters.get("existing", 0)
        session.commit()
    except Exception:
        session.rollback()
        raise
    return combined


__all__ = ["seed_lookup_tables", "seed_collection_centers", "run_all"]
