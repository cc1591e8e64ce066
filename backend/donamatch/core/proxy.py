"""WSGI proxy middleware configuration helper."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Wrap the WSGI app in :class:`ProxyFix` when proxy hops are trusted.

    Parameters
    ----------
    app: flask.Flask
        Application whose WSGI pipeline should respect upstream proxy headers.

    Notes
    -----
    ``TRUSTED_PROXY_HOPS`` (default ``1``) is applied to every
    ``X-Forwarded-*`` header; ``0`` disables the middleware. Cookie ``Secure``
    decisions and generated URLs rely on the forwarded scheme being honoured.
    """
    hops = int(app.config.get("TRUSTED_PROXY_HOPS", 1))
    if hops <= 0:
        return
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops, x_prefix=hops)
