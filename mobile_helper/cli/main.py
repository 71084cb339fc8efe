"""
mobile-helper CLI - Command line interface for managing Android devices, AVDs and system images.
"""

import asyncio
import logging
import os
import sys
from functools import wraps
from typing import List, Optional, Tuple

import click
from rich.markup import escape

from mobile_helper import __version__
from mobile_helper.android import AndroidSubcommand, parse_options
from mobile_helper.android.help import get_subcommand_help
from mobile_helper.cli.logs import configure_logging
from mobile_helper.console import console

logger = logging.getLogger("mobile_helper")


def coro(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


@coro
async def run_android(subcommand: str, args: List[str]) -> bool:
    """Run one `android <subcommand>` invocation and report whether it succeeded."""
    options = parse_options(subcommand, args)
    logger.debug(f"Parsed options for {subcommand}: {options}")

    return await AndroidSubcommand(subcommand, options, root_dir=os.getcwd()).run()


@click.group()
@click.option(
    "--debug", is_flag=True, help="Enable verbose debug logging", default=False
)
@click.version_option(__version__, prog_name="mobile-helper")
def cli(debug: bool):
    """mobile-helper - Set up and manage Android devices for mobile testing."""
    configure_logging(debug)


@cli.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_extra_args": True,
        "help_option_names": [],
    }
)
@click.argument("subcommand", required=False)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def android(subcommand: Optional[str], args: Tuple[str, ...]):
    """Connect, disconnect, install and uninstall Android devices, apps and images."""
    if not subcommand or subcommand.startswith("-"):
        console.print(get_subcommand_help())
        return

    succeeded = run_android(subcommand, list(args))
    logger.debug(f"android {subcommand} finished (success: {succeeded})")


def main():
    try:
        cli(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except (KeyboardInterrupt, click.exceptions.Abort):
        console.print("\n[yellow]Aborted.[/]")
        sys.exit(1)
    except Exception as e:
        console.print(f"[bold red]Error:[/] {escape(str(e))}")
        logger.debug("Unhandled error", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
