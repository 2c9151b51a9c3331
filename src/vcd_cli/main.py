"""vcd-metadata CLI main entry point."""

from __future__ import annotations

import logging

import click

from vcd_cli.commands import config as config_cmd
from vcd_cli.commands import metadata as metadata_cmd
from vcd_cli.config import ConfigManager


@click.group()
@click.version_option(version="0.1.0", prog_name="vcd-metadata")
@click.option("--debug", is_flag=True, help="Log HTTP requests and task polling")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """vCloud Director metadata command-line interface.

    Read, add, merge and delete metadata on any vCloud Director entity by href.
    """
    logging.basicConfig(level=logging.DEBUG if debug else logging.WARNING)
    ctx.ensure_object(dict)
    if "config_manager" not in ctx.obj:
        ctx.obj["config_manager"] = ConfigManager()


cli.add_command(config_cmd.config)
cli.add_command(metadata_cmd.metadata)


if __name__ == "__main__":
    cli()
