"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from flask import Flask

from donamatch.core.config import BaseConfig, get_config
from donamatch.core.logger import configure_logging, init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    :param config: Config object or import path; defaults to the class
        selected by ``APP_ENV``.
    :param instance_relative_config: Load overrides from the instance folder.
    :param instance_config_filename: Optional instance override file.
    :returns: Configured application with API blueprints, error handlers and
        CLI commands registered.
    :rtype: flask.Flask
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from donamatch.core import proxy

    proxy.init_app(app)

    from donamatch.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from donamatch.core import cors

    cors.init_app(app)

    from donamatch.api import init_app as init_api

    init_api(app)

    from donamatch.core import errors

    errors.init_app(app)

    from donamatch import cli

    cli.init_app(app)

    return app
