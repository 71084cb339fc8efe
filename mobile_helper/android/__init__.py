"""
Android Package - `android` subcommands and their device flows.
"""

from mobile_helper.android.options import VerifiedOptions, parse_options, verify_options
from mobile_helper.android.subcommand import AndroidSubcommand

__all__ = [
    'AndroidSubcommand',
    'VerifiedOptions',
    'parse_options',
    'verify_options',
]
