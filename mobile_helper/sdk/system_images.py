"""
Parsing system images out of `sdkmanager --list` output.

`sdkmanager --list` prints a table per section::

    Installed packages:
      Path                                        | Version | Description | Location
      -------                                     | ------- | -------     | -------
      system-images;android-30;google_apis;x86_64 | 10      | Google APIs | system-images/...

    Available Packages:
      Path                                         | Version | Description
      system-images;android-34;google_apis;arm64-v8a | 14    | Google APIs ARM 64 v8a

Only the first column (the package path) is used. A system image path has the
form ``system-images;<api level>;<type>;<architecture>``.
"""

import logging
import re
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from mobile_helper.console import console
from mobile_helper.sdk.runner import exec_binary_sync

logger = logging.getLogger("mobile_helper.sdk")

SYSTEM_IMAGE_PREFIX = "system-images;"
AVAILABLE_PACKAGES_HEADER = "Available Packages:"


class ApiLevelName(BaseModel):
    version: str
    name: str


API_LEVEL_NAMES: Dict[str, ApiLevelName] = {
    level: ApiLevelName(version=version, name=name)
    for level, version, name in [
        ("android-10", "2.3.3-2.3.7", "Gingerbread"),
        ("android-11", "3.0", "Honeycomb"),
        ("android-12", "3.1", "Honeycomb"),
        ("android-13", "3.2", "Honeycomb"),
        ("android-14", "4.0.1-4.0.2", "Ice Cream Sandwich"),
        ("android-15", "4.0.3-4.0.4", "Ice Cream Sandwich"),
        ("android-16", "4.1.x", "Jelly Bean"),
        ("android-17", "4.2.x", "Jelly Bean"),
        ("android-18", "4.3.x", "Jelly Bean"),
        ("android-19", "4.4-4.4.4", "KitKat"),
        ("android-20", "4.4W", "KitKat Wear"),
        ("android-21", "5.0", "Lollipop"),
        ("android-22", "5.1", "Lollipop"),
        ("android-23", "6.0", "Marshmallow"),
        ("android-24", "7.0", "Nougat"),
        ("android-25", "7.1", "Nougat"),
        ("android-26", "8.0", "Oreo"),
        ("android-27", "8.1", "Oreo"),
        ("android-28", "9.0", "Pie"),
        ("android-29", "10", "Android 10"),
        ("android-30", "11", "Android 11"),
        ("android-31", "12", "Android 12"),
        ("android-32", "12L", "Android 12L"),
        ("android-33", "13", "Android 13"),
        ("android-34", "14", "Android 14"),
        ("android-35", "15", "Android 15"),
    ]
}


class SystemImageType(BaseModel):
    """One image type (e.g. google_apis) of an API level and its architectures."""

    type: str
    archs: List[str] = Field(default_factory=list)


def _api_level_sort_key(api_level: str):
    # android-9 before android-10; preview levels like android-TiramisuPrivacySandbox last
    match = re.search(r"(\d+)", api_level)
    return (0, int(match.group(1)), api_level) if match else (1, 0, api_level)


def _image_path(line: str) -> str:
    return line.split("|")[0].strip()


def _image_sort_key(image: str):
    parts = image.split(";")
    return (_api_level_sort_key(parts[1] if len(parts) > 1 else ""), image)


def parse_system_image_catalogue(stdout: str) -> Dict[str, List[SystemImageType]]:
    """Group every system image mentioned in `sdkmanager --list` output.

    Args:
        stdout: Raw `sdkmanager --list` output

    Returns:
        Mapping of API level to its image types, each listing its architectures
    """
    image_names = {
        _image_path(line) for line in stdout.splitlines() if SYSTEM_IMAGE_PREFIX in line
    }

    catalogue: Dict[str, List[SystemImageType]] = {}
    for image in sorted(image_names, key=_image_sort_key):
        parts = image.split(";")
        if len(parts) < 4 or parts[0] != "system-images":
            logger.debug(f"Skipping malformed system image entry: {image!r}")
            continue

        api_level, image_type, arch = parts[1], parts[2], parts[3]
        types = catalogue.setdefault(api_level, [])

        existing = next((t for t in types if t.type == image_type), None)
        if existing is None:
            types.append(SystemImageType(type=image_type, archs=[arch]))
        elif arch not in existing.archs:
            existing.archs.append(arch)

    return catalogue


def parse_installed_system_images(stdout: str) -> List[str]:
    """Collect the system images listed before the "Available Packages:" section."""
    installed = []
    for line in stdout.splitlines():
        if AVAILABLE_PACKAGES_HEADER in line:
            break
        if "system-images" in line:
            installed.append(_image_path(line))

    return installed


def api_level_label(api_level: str) -> str:
    """Label an API level with its release name, e.g. "android-30 - Android 11 (v11)"."""
    names = API_LEVEL_NAMES.get(api_level)
    if names:
        return f"{api_level} - {names.name} (v{names.version})"
    return api_level


def system_image_name(api_level: str, image_type: str, arch: str) -> str:
    return f"{SYSTEM_IMAGE_PREFIX}{api_level};{image_type};{arch}"


def get_installed_system_images(sdkmanager_location: str) -> Optional[List[str]]:
    """Run `sdkmanager --list` and return the installed system images.

    Returns:
        The installed images, or None (after printing why) when sdkmanager fails
    """
    stdout = exec_binary_sync(sdkmanager_location, ["--list"])
    if stdout is None:
        console.print("[red]Failed to fetch system images![/] Please try again.")
        return None

    installed = parse_installed_system_images(stdout)
    logger.debug(f"Installed system images: {installed}")
    return installed


def get_available_system_images(sdkmanager_location: str) -> Optional[Dict[str, List[SystemImageType]]]:
    """Run `sdkmanager --list` and build the system image catalogue.

    Returns:
        The catalogue, or None (after printing why) when sdkmanager fails
    """
    stdout = exec_binary_sync(sdkmanager_location, ["--list"])
    if stdout is None:
        console.print("[red]Failed to fetch system images![/] Please try again.")
        return None

    catalogue = parse_system_image_catalogue(stdout)
    logger.debug(f"System images available for {len(catalogue)} API level(s)")
    return catalogue
