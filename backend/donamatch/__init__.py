"""Expose the application factory at package level.

Provide convenient access to :func:`donamatch.factory.create_app` so callers
can ``from donamatch import create_app`` (and ``flask --app donamatch``).
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
