"""
Help output for the `android` subcommands.
"""

from typing import List

from mobile_helper.android.constants import AVAILABLE_SUBCOMMANDS, HELP_FLAG, Flag
from mobile_helper.console import console

CLI_NAME = "mobile-helper"


def _flag_label(flag: Flag) -> str:
    aliases = [f"-{alias}" if len(alias) == 1 else f"--{alias}" for alias in flag.alias]
    return ", ".join([f"--{flag.name}", *aliases])


def _print_rows(rows: List[tuple], indent: int) -> None:
    if not rows:
        return
    longest = max(len(label) for label, _ in rows)
    for label, description in rows:
        padding = "." * max(longest - len(label) + 2, 0)
        console.print(f"{' ' * indent}{label} [grey50]{padding} {description}[/]")


def get_subcommand_help() -> str:
    """Build the list of subcommands shown for `android` without a valid subcommand."""
    longest = max(len(name) for name in AVAILABLE_SUBCOMMANDS)
    lines = [f"Usage: [cyan]{CLI_NAME} android <subcommand> \\[options][/]", "", "[yellow]Subcommands:[/]"]
    for name, subcommand in AVAILABLE_SUBCOMMANDS.items():
        padding = "." * (longest - len(name) + 2)
        lines.append(f"    {name} [grey50]{padding} {subcommand.description}[/]")
    lines.append("")
    lines.append(f"Run [cyan]{CLI_NAME} android <subcommand> --help[/] for the options of a subcommand.")
    return "\n".join(lines)


def show_help(subcommand: str) -> None:
    """Print usage, main options and flags of a subcommand."""
    subcmd = AVAILABLE_SUBCOMMANDS[subcommand]

    console.print(f"Usage: [cyan]{CLI_NAME} android {subcommand} \\[options][/]")
    console.print()
    console.print(f"{subcmd.description}.")
    console.print()
    console.print("[yellow]Options:[/]")

    if subcmd.options:
        _print_rows([(f"--{option.name}", option.description) for option in subcmd.options], 4)
        for option in subcmd.options:
            if option.flags:
                console.print()
                console.print(f"    [yellow]Flags for --{option.name}:[/]")
                _print_rows([(_flag_label(flag), flag.description) for flag in option.flags], 6)
        console.print()

    rows = [(_flag_label(flag), flag.description) for flag in subcmd.flags]
    rows.append((_flag_label(HELP_FLAG), HELP_FLAG.description))
    if subcmd.options:
        console.print("[yellow]Other flags:[/]")
    _print_rows(rows, 4)
    console.print()
