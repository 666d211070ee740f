"""Flask CLI commands for Settings Pages."""

from __future__ import annotations

import json

import click


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("settings-types")
    def settings_types() -> None:
        """List the registered field types."""

        from .fields import registry

        for type_name in registry.registered_types():
            click.echo(type_name)

    @app.cli.command("settings-show")
    @click.argument("name")
    def settings_show(name: str) -> None:
        """Print the stored values of one option group as JSON."""

        from .options import OptionsStore

        store = OptionsStore(name)
        if store.is_inert:
            raise click.BadParameter("Option name must contain letters, digits, dashes or underscores.")
        click.echo(json.dumps(store.get(), indent=2, sort_keys=True, default=str))
