"""
Click-based CLI for godo.

The main `godo` command receives its argument vector untouched, "--"
included, and hands it to the launch pipeline. `godo-list` and
`godo-config` are ordinary click commands.

Usage:
    from godo.cli import cli
    cli()  # Builds and runs the package named on the command line
"""

from __future__ import annotations

import os
import signal

import click

from ..core.bootstrap import bootstrap
from ..core.container import try_resolve
from ..core.exceptions import GodoException
from ..core.interfaces.presenter import IPresenter
from ..core.models.launch import LaunchOutcome
from ..services.launch import USAGE, LaunchCoordinator, is_help_request
from .context import GodoContext

# Version is loaded from package metadata
try:
    from importlib.metadata import version

    __version__ = version("godo-cli")
except Exception:
    __version__ = "0.1.0"


class RawArgsCommand(click.Command):
    """A click command that performs no option parsing at all.

    Every argument, including "--" and anything that looks like an
    option, is left in ctx.args in its original order.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        ctx.args = list(args)
        return []


@click.command("godo", cls=RawArgsCommand, add_help_option=False)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """godo - build a Go command package and run it

    \b
    Usage:
        godo [build-flags...] [--] <package> [args...]
    """
    args = list(ctx.args)
    if is_help_request(args):
        click.echo(USAGE, err=True, nl=False)
        ctx.exit(0)

    try:
        gctx = GodoContext.create()
        bootstrap(gctx.settings)
        coordinator = LaunchCoordinator.from_settings(gctx.settings, gctx.cwd, gctx.environ)
        outcome = coordinator.run(args)
    except GodoException as e:
        _presenter().print_error(str(e))
        ctx.exit(e.exit_code)

    _exit_like(ctx, outcome)


def _presenter() -> IPresenter:
    from ..presenters.console import ConsolePresenter

    return try_resolve(IPresenter) or ConsolePresenter()  # type: ignore[type-abstract]


def _exit_like(ctx: click.Context, outcome: LaunchOutcome) -> None:
    """Terminate the way the spawned child did."""
    sig = getattr(outcome, "signal", None)
    if sig:
        signal.signal(sig, signal.SIG_DFL)
        os.kill(os.getpid(), sig)
    ctx.exit(getattr(outcome, "exit_code", None) or 0)


__all__ = [
    "GodoContext",
    "RawArgsCommand",
    "__version__",
    "cli",
]
