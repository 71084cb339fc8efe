"""
Turning raw subcommand flags into a validated main option and its flags.

A subcommand has a set of mutually exclusive main options (`--avd`, `--app`,
...). Each main option may declare valued flags (`--path`, `-s`) that modify
it. `verify_options` checks that at most one main option is present and that
every other flag belongs to it; when no main option is given the flow falls
back to asking the user interactively.
"""

import logging
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

from mobile_helper.android.constants import AVAILABLE_SUBCOMMANDS, HELP_FLAG, Flag
from mobile_helper.android.help import show_help
from mobile_helper.console import console

logger = logging.getLogger("mobile_helper.android")

OptionValue = Union[bool, str]
Options = Dict[str, OptionValue]


class VerifiedOptions(BaseModel):
    """Result of a successful verification.

    `main_option` is None when the user did not pick an action and should be
    prompted for one. `flags` are keyed by their canonical names.
    """

    main_option: Optional[str] = None
    flags: Dict[str, OptionValue] = Field(default_factory=dict)


def _flag_names(flags: List[Flag]) -> Dict[str, str]:
    """Map every name and alias of `flags` to the canonical flag name."""
    names = {}
    for flag in flags:
        names[flag.name] = flag.name
        for alias in flag.alias:
            names[alias] = flag.name
    return names


def parse_options(subcommand: str, args: List[str]) -> Options:
    """Build the options mapping from the tokens following the subcommand.

    Main options and `--help` are boolean. Any other flag takes the next
    token as its value unless that token is itself a flag, in which case it
    is set to True. Stray positional tokens are kept under their own name
    with a True value so verification reports them as unknown.

    Args:
        subcommand: Name of the subcommand the tokens belong to
        args: Raw command-line tokens

    Returns:
        Mapping of flag name to its value
    """
    subcmd = AVAILABLE_SUBCOMMANDS.get(subcommand)
    boolean_flags = set(_flag_names([HELP_FLAG]))
    if subcmd is not None:
        boolean_flags.update(subcmd.option_names)

    options: Options = {}
    index = 0
    while index < len(args):
        token = args[index]
        index += 1

        if token == "--":
            continue

        if not token.startswith("-") or token == "-":
            options[token] = True
            continue

        name = token.lstrip("-")
        if "=" in name:
            name, value = name.split("=", 1)
            options[name] = value
            continue

        if name in boolean_flags:
            options[name] = True
        elif index < len(args) and not args[index].startswith("-"):
            options[name] = args[index]
            index += 1
        else:
            options[name] = True

    return options


def _report_unknown(subcommand: str, unknown: List[str]) -> None:
    console.print(f"[red]Unknown option(s) passed:[/] {', '.join(unknown)}")
    show_help(subcommand)


def _fold_flags(
    subcommand: str, allowed: Dict[str, str], names: List[str], options: Options
) -> Optional[Dict[str, OptionValue]]:
    """Key the passed flags by canonical name, rejecting a flag given twice under its aliases."""
    flags: Dict[str, OptionValue] = {}
    spellings: Dict[str, List[str]] = {}
    for name in names:
        canonical = allowed[name]
        spellings.setdefault(canonical, []).append(name)
        flags[canonical] = options[name]

    conflicting = [", ".join(s) for s in spellings.values() if len(s) > 1]
    if conflicting:
        console.print(f"[red]Conflicting options passed:[/] {'; '.join(conflicting)}")
        show_help(subcommand)
        return None

    return flags


def verify_options(subcommand: str, options: Options) -> Optional[VerifiedOptions]:
    """Validate the options passed to a subcommand.

    Args:
        subcommand: Name of a known subcommand
        options: Mapping of flag name to value, as built by parse_options()

    Returns:
        The chosen main option and its flags, or None (after printing why and
        the subcommand help) if the combination is invalid
    """
    subcmd = AVAILABLE_SUBCOMMANDS[subcommand]
    options_passed = [
        name for name, value in options.items() if value is not False and value is not None
    ]

    main_options_passed = [name for name in options_passed if name in subcmd.option_names]
    valued_options_passed = [name for name in options_passed if name not in subcmd.option_names]
    logger.debug(f"{subcommand}: main options {main_options_passed}, flags {valued_options_passed}")

    if len(main_options_passed) > 1:
        console.print(f"[red]Too many options passed:[/] {', '.join(main_options_passed)}")
        show_help(subcommand)
        return None

    if not main_options_passed:
        allowed = _flag_names(subcmd.flags)
        unknown = [name for name in valued_options_passed if name not in allowed]
        if unknown:
            _report_unknown(subcommand, unknown)
            return None

        flags = _fold_flags(subcommand, allowed, valued_options_passed, options)
        if flags is None:
            return None
        return VerifiedOptions(flags=flags)

    main_option = main_options_passed[0]
    allowed = _flag_names(subcmd.get_option(main_option).flags)

    unknown = [name for name in valued_options_passed if name not in allowed]
    if unknown:
        _report_unknown(subcommand, unknown)
        return None

    flags = _fold_flags(subcommand, allowed, valued_options_passed, options)
    if flags is None:
        return None
    return VerifiedOptions(main_option=main_option, flags=flags)
