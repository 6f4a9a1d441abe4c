"""
Entry points for the godo command-line tools.

godo builds the Go command package named on its command line and then
replaces itself with the freshly built executable, passing along the
remaining arguments and the environment.

This module provides the main() entry point that delegates to the Click CLI,
plus the entry points of the auxiliary godo-list and godo-config commands.
"""


def main():
    """Main entry point for the godo CLI."""
    from .cli import cli

    cli(prog_name="godo")


def list_main():
    """Entry point for godo-list."""
    from .cli.commands import list_cmd

    list_cmd(prog_name="godo-list")


def config_main():
    """Entry point for godo-config."""
    from .cli.commands import config

    config(prog_name="godo-config")


if __name__ == "__main__":
    main()
