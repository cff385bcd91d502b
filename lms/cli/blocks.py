"""Block placement and platform setup CLI commands."""
import json
import click
from flask import current_app
from flask.cli import with_appcontext
from lms.extensions import db
from lms.models import ContextLevel, Permission, Role


@click.group("blocks")
def blocks_cli():
    """Block management commands."""
    pass


@blocks_cli.command("install")
@with_appcontext
def install():
    """Create tables, the system context and plugin capabilities."""
    db.create_all()
    contexts = current_app.container.context_repository()
    if contexts.find_by_instance(ContextLevel.SYSTEM, 0) is None:
        contexts.create(ContextLevel.SYSTEM, 0)

    roles = current_app.container.role_repository()
    for plugin in current_app.plugin_manager.get_all_plugins():
        for capability, archetypes in getattr(plugin, "capabilities", {}).items():
            resource, _, action = capability.partition(".")
            permission = Permission.query.filter_by(name=capability).first()
            if permission is None:
                permission = Permission(name=capability, resource=resource, action=action)
                db.session.add(permission)
            for role_name in archetypes:
                role = roles.find_by_name(role_name)
                if role is None:
                    role = Role(name=role_name)
                    db.session.add(role)
                if permission not in role.permissions:
                    role.permissions.append(permission)
    db.session.commit()
    click.echo("Platform installed.")


@blocks_cli.command("add")
@click.argument("block_name")
@click.argument("context_id", type=int)
@click.option("--config", "config_json", default="{}", help="Instance settings as JSON.")
@with_appcontext
def add_block(block_name, context_id, config_json):
    """Place a block in a context."""
    if not current_app.plugin_manager.get_plugin(block_name):
        click.echo(f"Plugin '{block_name}' not found.")
        return

    try:
        raw = json.loads(config_json)
        if not isinstance(raw, dict):
            raise ValueError("Instance config must be a JSON object")
        config = current_app.schema_reader.validate_instance_config(block_name, raw)
    except ValueError as e:
        click.echo(f"Error: {e}")
        return

    contexts = current_app.container.context_repository()
    if contexts.instance_by_id(context_id) is None:
        click.echo(f"Context {context_id} not found.")
        return

    instance = current_app.container.block_instance_repository().create(
        block_name, context_id, config
    )
    click.echo(f"Added block instance {instance.id}.")


@blocks_cli.command("list")
@click.argument("context_id", type=int)
@with_appcontext
def list_blocks(context_id):
    """List block instances in a context."""
    instances = current_app.container.block_instance_repository().find_by_context(
        context_id
    )
    if not instances:
        click.echo("No blocks in this context.")
        return
    for instance in instances:
        click.echo(f"{instance.id}: {instance.block_name} {json.dumps(instance.config)}")


@blocks_cli.command("assign")
@click.argument("user_id", type=int)
@click.argument("role_name")
@click.argument("context_id", type=int)
@with_appcontext
def assign_role(user_id, role_name, context_id):
    """Grant a role to a user in a context and everything below it."""
    if current_app.container.user_repository().find_by_id(user_id) is None:
        click.echo(f"User {user_id} not found.")
        return
    if current_app.container.context_repository().instance_by_id(context_id) is None:
        click.echo(f"Context {context_id} not found.")
        return

    if current_app.container.role_repository().assign_role(user_id, role_name, context_id):
        click.echo(f"Assigned '{role_name}' to user {user_id} in context {context_id}.")
    else:
        click.echo(f"Role '{role_name}' not found.")
