"""Plugin management CLI commands."""
import click
from flask import current_app
from flask.cli import with_appcontext


def _manager():
    manager = getattr(current_app, "plugin_manager", None)
    if not manager:
        click.echo("Plugin system not initialized.")
    return manager


@click.group("plugins")
def plugins_cli():
    """Plugin management commands."""
    pass


@plugins_cli.command("list")
@with_appcontext
def list_plugins():
    """List all registered plugins."""
    manager = _manager()
    if not manager:
        return

    plugins = manager.get_all_plugins()
    if not plugins:
        click.echo("No plugins registered.")
        return

    for plugin in plugins:
        meta = plugin.metadata
        click.echo(f"{meta.name} ({meta.version}) - {plugin.status.value.upper()}")


@plugins_cli.command("enable")
@click.argument("name")
@with_appcontext
def enable_plugin(name):
    """Enable a plugin."""
    manager = _manager()
    if not manager:
        return

    if manager.is_enabled(name):
        click.echo(f"Plugin '{name}' is already enabled.")
        return
    try:
        manager.enable_plugin(name)
        click.echo(f"Plugin '{name}' enabled.")
    except ValueError as e:
        click.echo(f"Error: {e}")


@plugins_cli.command("disable")
@click.argument("name")
@with_appcontext
def disable_plugin(name):
    """Disable a plugin."""
    manager = _manager()
    if not manager:
        return

    try:
        manager.disable_plugin(name)
        click.echo(f"Plugin '{name}' disabled.")
    except ValueError as e:
        click.echo(f"Error: {e}")


@plugins_cli.command("set")
@click.argument("name")
@click.argument("key")
@click.argument("value")
@with_appcontext
def set_plugin_setting(name, key, value):
    """Save one plugin-wide setting (e.g. analytics_api_endpoint)."""
    manager = _manager()
    if not manager:
        return

    plugin = manager.get_plugin(name)
    if not plugin:
        click.echo(f"Plugin '{name}' not found.")
        return

    schema = current_app.schema_reader.get_config_schema(name)
    if schema and key not in schema:
        click.echo(f"Error: unknown setting '{key}' for '{name}'.")
        return

    config = dict(current_app.config_store.get_config(name))
    config[key] = value
    current_app.config_store.save_config(name, config)
    click.echo(f"Saved {name}.{key}.")
