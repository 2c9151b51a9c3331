"""Config commands."""

from __future__ import annotations

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

console = Console()


@click.group()
def config() -> None:
    """Manage CLI configuration."""


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def config_set(ctx: click.Context, key: str, value: str) -> None:
    """Set a configuration value.

    Example:
        vcd-metadata config set url https://vcd.example.com/api
        vcd-metadata config set token eyJhbGciOi...
    """
    config_manager = ctx.obj["config_manager"]

    try:
        config_manager.set(key, value)
    except KeyError:
        console.print(f"[red]Unknown configuration key '{key}'[/red]")
        ctx.exit(1)
    except ValidationError as e:
        console.print(f"[red]Invalid value for {key}: {e.errors()[0]['msg']}[/red]")
        ctx.exit(1)

    console.print(f"[green]✓[/green] Set {key} = {value}")


@config.command("get")
@click.argument("key")
@click.pass_context
def config_get(ctx: click.Context, key: str) -> None:
    """Get a configuration value.

    Example:
        vcd-metadata config get url
    """
    config_manager = ctx.obj["config_manager"]
    value = config_manager.get(key)

    if value is None:
        console.print(f"[yellow]Configuration key '{key}' not set[/yellow]")
    else:
        console.print(f"{key} = {value}")


@config.command("list")
@click.pass_context
def config_list(ctx: click.Context) -> None:
    """List all configuration values.

    Example:
        vcd-metadata config list
    """
    config_manager = ctx.obj["config_manager"]
    config = config_manager.load()

    table = Table(title="vcd-metadata Configuration")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in config.model_dump(exclude_none=True).items():
        # Mask token
        if key == "token" and value:
            value = f"{value[:8]}...{value[-4:]}" if len(value) > 12 else "***"
        table.add_row(key, str(value))

    console.print(table)


@config.command("delete")
@click.argument("key")
@click.pass_context
def config_delete(ctx: click.Context, key: str) -> None:
    """Delete a configuration value (reset to default).

    Example:
        vcd-metadata config delete token
    """
    config_manager = ctx.obj["config_manager"]
    config_manager.delete(key)
    console.print(f"[green]✓[/green] Deleted {key}")
