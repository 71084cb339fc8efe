"""
Locating Android SDK command-line binaries.
"""

import logging
import os
import platform as _platform
import shutil
from typing import Dict, Optional

logger = logging.getLogger("mobile_helper.sdk")

SDK_BINARY_LOCATIONS: Dict[str, str] = {
    "sdkmanager": os.path.join("cmdline-tools", "latest", "bin"),
    "avdmanager": os.path.join("cmdline-tools", "latest", "bin"),
    "adb": "platform-tools",
    "emulator": "emulator",
}

# Windows ships the cmdline-tools as batch scripts
_WINDOWS_EXTENSIONS: Dict[str, str] = {
    "sdkmanager": ".bat",
    "avdmanager": ".bat",
    "adb": ".exe",
    "emulator": ".exe",
}

MISSING_REQUIREMENTS_HINT = (
    "Install the Android SDK command-line tools and platform-tools under "
    "[magenta]ANDROID_HOME[/], or put them on your PATH."
)


def get_platform_name() -> str:
    """Return "windows", "mac" or "linux"."""
    system = _platform.system()
    if system == "Windows":
        return "windows"
    if system == "Darwin":
        return "mac"
    return "linux"


def get_binary_name_for_os(platform: str, binary: str) -> str:
    if platform == "windows":
        return binary + _WINDOWS_EXTENSIONS.get(binary, "")
    return binary


def get_binary_location(sdk_root: str, platform: str, binary: str) -> Optional[str]:
    """Find an SDK binary, preferring the copy inside the SDK root.

    Args:
        sdk_root: Android SDK root directory
        platform: Platform name as returned by get_platform_name()
        binary: One of the keys of SDK_BINARY_LOCATIONS

    Returns:
        Absolute path to the binary, or None if it is neither in the SDK nor on PATH
    """
    if binary not in SDK_BINARY_LOCATIONS:
        raise ValueError(f"Unknown SDK binary: {binary}")

    binary_name = get_binary_name_for_os(platform, binary)
    sdk_path = os.path.join(sdk_root, SDK_BINARY_LOCATIONS[binary], binary_name)
    if os.path.isfile(sdk_path):
        logger.debug(f"{binary} found at {sdk_path}")
        return sdk_path

    path_binary = shutil.which(binary_name)
    if path_binary:
        logger.debug(f"{binary} found on PATH at {path_binary}")
        return path_binary

    logger.debug(f"{binary} not found in {sdk_root} or on PATH")
    return None
