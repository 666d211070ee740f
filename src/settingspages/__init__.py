"""Settings Pages application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestConfig
from .logging_config import get_logger, setup_logging

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}

DEFAULT_PAGE_SLUG = "tns-custom-options"
DEFAULT_PAGE_ARGS = {
    "menu": "Custom Options",
    "options": "tns-custom-options",
    "page": "Custom Theme Options",
    "position": 62,
}

logger = get_logger("app")


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    yield "settingspages.blueprints.settings"


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_cls = _resolve_config(config_name or app.config.get("ENV"))
    config_obj = config_cls()
    app.config.from_object(config_obj)
    app.config.setdefault("SQLALCHEMY_ENGINE_OPTIONS", config_obj.sqlalchemy_engine_options())
    app.config["SETTINGSPAGES_CONFIG"] = config_obj

    setup_logging(config_obj)
    _register_blueprints(app)

    # Imported lazily so model classes can be imported without an engine
    from .extensions import init_db

    init_db(app)
    _register_default_page()
    _cli.init_app(app)

    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


def _register_default_page() -> None:
    """Build the stock settings page and attach the bundled feature modules."""

    from .features import register_general_settings
    from .pages import build_page, get_page

    if get_page(DEFAULT_PAGE_SLUG) is not None:
        return
    page = build_page(DEFAULT_PAGE_SLUG, DEFAULT_PAGE_ARGS)
    if page is None:
        logger.error("Could not load the base settings page.")
        return
    register_general_settings(page)


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]
