# comments in English; strict reST docstrings
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CategoryOut:
    """
    Public projection of a donation category.

    :param id: Primary key.
    :type id: int
    :param key: Seeded symbolic key, e.g. ``"libros"``.
    :type key: str
    """

    id: int
    key: str


@dataclass(frozen=True, slots=True)
class CollectionCenterOut:
    """
    Public projection of a collection centre.

    :param id: Primary key.
    :type id: int
    :param key: Display key of the centre.
    :type key: str
    :param latitude: WGS84 latitude.
    :type latitude: float
    :param longitude: WGS84 longitude.
    :type longitude: float
    :param observation: Optional free-text note (opening hours, access).
    :type observation: str | None
    """

    id: int
    key: str
    latitude: float
    longitude: float
    observation: str | None = None
