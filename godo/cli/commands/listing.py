"""
Native Click implementation of the godo-list command.

Usage: godo-list [partial]
"""

from __future__ import annotations

from pathlib import Path

import click

from ...core.exceptions import GodoException
from ...services.packages import list_commands
from ...utils.goenv import default_package_roots
from ..context import GodoContext


@click.command("godo-list")
@click.argument("partial", required=False, default="")
def list_cmd(partial: str) -> None:
    """List command packages matching a partial package spec.

    Prints one package spec per line, for use in shell completion.

    \b
    Examples:

        godo-list ./              # Commands below the current directory

        godo-list github.com/me/  # Commands under that import path
    """
    try:
        gctx = GodoContext.create()
    except GodoException as e:
        raise click.ClickException(str(e)) from e

    roots = [Path(r).expanduser() for r in gctx.settings.resolve.roots]
    if not roots:
        roots = default_package_roots(gctx.environ)

    for spec in list_commands(partial, roots, gctx.cwd):
        click.echo(spec)
