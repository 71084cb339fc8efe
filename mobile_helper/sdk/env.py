"""
Resolving the Android SDK root from the environment and `.env` files.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

from mobile_helper.console import console

logger = logging.getLogger("mobile_helper.sdk")


def load_env_from_dotenv(root_dir: str) -> bool:
    """Load `<root_dir>/.env` without overriding the global environment.

    Returns:
        True if ANDROID_HOME was already set globally before loading
    """
    android_home_in_global_env = "ANDROID_HOME" in os.environ
    dotenv_path = os.path.join(root_dir, ".env")
    if os.path.isfile(dotenv_path):
        load_dotenv(dotenv_path, override=False)
        logger.debug(f"Loaded environment from {dotenv_path}")
    return android_home_in_global_env


def get_sdk_root_from_env(root_dir: str, android_home_in_global_env: bool) -> Optional[str]:
    """Read ANDROID_HOME and check it points at an existing directory.

    Args:
        root_dir: Directory relative ANDROID_HOME values are resolved against
        android_home_in_global_env: Whether the value came from the shell
            rather than the `.env` file, used for the error message

    Returns:
        Absolute SDK root, or None (after printing why) when unusable
    """
    source = "global environment" if android_home_in_global_env else ".env file"
    sdk_root = os.environ.get("ANDROID_HOME", "").strip()

    if not sdk_root:
        console.print("[red]ANDROID_HOME environment variable is NOT set![/]")
        console.print(
            f"Set [cyan]ANDROID_HOME[/] globally or in [cyan]{os.path.join(root_dir, '.env')}[/] "
            "to the location of your Android SDK.\n"
        )
        return None

    sdk_root = os.path.abspath(os.path.join(root_dir, os.path.expanduser(sdk_root)))
    if not os.path.isdir(sdk_root):
        console.print(
            f"[red]ANDROID_HOME is set to a directory that does not exist:[/] {sdk_root} "
            f"[grey50](read from {source})[/]\n"
        )
        return None

    logger.debug(f"Using Android SDK at {sdk_root} (from {source})")
    return sdk_root
