"""Metadata commands."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vcd_metadata import (
    MetadataTypedValueKind,
    MetadataValue,
    MetadataVisibility,
    VCDClient,
    VCDError,
)
from vcd_metadata.models import MetadataDomain

console = Console()

TYPE_CHOICES = click.Choice([kind.value for kind in MetadataTypedValueKind])
VISIBILITY_CHOICES = click.Choice([visibility.value for visibility in MetadataVisibility])


def _run(ctx: click.Context, operation: Any) -> Any:
    """Run ``operation(client)`` with a client built from the stored configuration."""
    config = ctx.obj["config_manager"].load()

    async def _call():
        async with VCDClient.from_settings(config) as client:
            return await operation(client)

    try:
        return asyncio.run(_call())
    except VCDError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        ctx.exit(1)


def _output_format(ctx: click.Context) -> str:
    return ctx.obj["config_manager"].load().output_format


@click.group()
def metadata() -> None:
    """Manage entity metadata."""


@metadata.command("list")
@click.argument("href")
@click.pass_context
def metadata_list(ctx: click.Context, href: str) -> None:
    """List all metadata entries of an entity.

    Example:
        vcd-metadata metadata list https://vcd.example.com/api/vApp/vm-1234
    """
    result = _run(ctx, lambda client: client.metadata.get(href))

    if _output_format(ctx) == "json":
        click.echo(json.dumps([entry.model_dump(exclude_none=True) for entry in result.entries], indent=2))
        return

    table = Table(title=f"Metadata of {href}")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")
    table.add_column("Type", style="blue")
    table.add_column("Domain", style="magenta")
    table.add_column("Visibility", style="yellow")

    for entry in result.entries:
        table.add_row(
            entry.key,
            entry.typed_value.value,
            entry.typed_value.xsi_type,
            entry.domain.domain if entry.domain else "",
            entry.domain.visibility if entry.domain else "",
        )

    console.print(table)
    console.print(f"\n{len(result.entries)} entries")


@metadata.command("get")
@click.argument("href")
@click.argument("key")
@click.option("--system", "is_system", is_flag=True, help="Read from the SYSTEM domain")
@click.pass_context
def metadata_get(ctx: click.Context, href: str, key: str, is_system: bool) -> None:
    """Get the metadata value of a key.

    Example:
        vcd-metadata metadata get https://vcd.example.com/api/vApp/vm-1234 env
    """
    value = _run(ctx, lambda client: client.metadata.get_by_key(href, key, is_system=is_system))

    if _output_format(ctx) == "json":
        click.echo(json.dumps(value.model_dump(exclude_none=True), indent=2))
        return

    console.print(f"\n[bold]{key}[/bold]\n")
    console.print(f"Value:       {value.typed_value.value}")
    console.print(f"Type:        {value.typed_value.xsi_type}")
    if value.domain:
        console.print(f"Domain:      {value.domain.domain}")
        console.print(f"Visibility:  {value.domain.visibility}")


@metadata.command("add")
@click.argument("href")
@click.argument("key")
@click.argument("value")
@click.option("--type", "typed_value", type=TYPE_CHOICES, default=MetadataTypedValueKind.STRING.value)
@click.option("--visibility", type=VISIBILITY_CHOICES, default=MetadataVisibility.READWRITE.value)
@click.option("--system", "is_system", is_flag=True, help="Write to the SYSTEM domain")
@click.option("--no-wait", is_flag=True, help="Return once the task is accepted")
@click.pass_context
def metadata_add(
    ctx: click.Context,
    href: str,
    key: str,
    value: str,
    typed_value: str,
    visibility: str,
    is_system: bool,
    no_wait: bool,
) -> None:
    """Add or overwrite a metadata entry.

    Example:
        vcd-metadata metadata add https://vcd.example.com/api/vApp/vm-1234 replicas 3 --type MetadataNumberValue
    """

    async def _add(client: VCDClient):
        task = await client.metadata.add(href, key, value, typed_value, visibility, is_system=is_system)
        if not no_wait:
            await task.wait()
        return task

    task = _run(ctx, _add)
    if no_wait:
        console.print(f"[green]✓[/green] Task accepted: {task.href}")
    else:
        console.print(f"[green]✓[/green] Metadata {key} added")


@metadata.command("merge")
@click.argument("href")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--no-wait", is_flag=True, help="Return once the task is accepted")
@click.pass_context
def metadata_merge(ctx: click.Context, href: str, file: Path, no_wait: bool) -> None:
    """Merge metadata entries from a JSON file.

    The file maps each key to ``{"value", "type", "domain", "visibility"}``;
    only ``value`` is required.

    Example:
        vcd-metadata metadata merge https://vcd.example.com/api/vApp/vm-1234 metadata.json
    """
    with open(file) as f:
        data = json.load(f)

    entries = {
        key: MetadataValue.of(
            str(item["value"]),
            item.get("type", MetadataTypedValueKind.STRING),
            domain=item.get("domain", MetadataDomain.GENERAL),
            visibility=item.get("visibility", MetadataVisibility.READWRITE),
        )
        for key, item in data.items()
    }

    async def _merge(client: VCDClient):
        task = await client.metadata.merge(href, entries)
        if not no_wait:
            await task.wait()
        return task

    task = _run(ctx, _merge)
    if no_wait:
        console.print(f"[green]✓[/green] Task accepted: {task.href}")
    else:
        console.print(f"[green]✓[/green] Merged {len(entries)} entries")


@metadata.command("delete")
@click.argument("href")
@click.argument("key")
@click.option("--system", "is_system", is_flag=True, help="Delete from the SYSTEM domain")
@click.option("--no-wait", is_flag=True, help="Return once the task is accepted")
@click.pass_context
def metadata_delete(ctx: click.Context, href: str, key: str, is_system: bool, no_wait: bool) -> None:
    """Delete a metadata entry.

    Example:
        vcd-metadata metadata delete https://vcd.example.com/api/vApp/vm-1234 env
    """

    async def _delete(client: VCDClient):
        task = await client.metadata.delete(href, key, is_system=is_system)
        if not no_wait:
            await task.wait()
        return task

    task = _run(ctx, _delete)
    if no_wait:
        console.print(f"[green]✓[/green] Task accepted: {task.href}")
    else:
        console.print(f"[green]✓[/green] Metadata {key} deleted")
