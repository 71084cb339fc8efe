"""
`android install` - APKs, AVDs and system images.
"""

import logging
import os
from typing import List, Optional

from rich.markup import escape

from mobile_helper.adb import DeviceManager
from mobile_helper.android import prompts
from mobile_helper.android.common import list_avds, locate_binary, select_device, split_lines
from mobile_helper.android.constants import DEVICE_TYPE_KEYWORDS
from mobile_helper.android.options import VerifiedOptions
from mobile_helper.console import console
from mobile_helper.sdk.runner import exec_binary_sync
from mobile_helper.sdk.system_images import (
    api_level_label,
    get_available_system_images,
    get_installed_system_images,
    system_image_name,
)

logger = logging.getLogger("mobile_helper.android")


def resolve_apk_path(path: str) -> str:
    """Expand `~` and resolve relative paths against the home directory."""
    return os.path.abspath(os.path.join(os.path.expanduser("~"), os.path.expanduser(path)))


def filter_device_profiles(profiles: List[str], device_type: str) -> List[str]:
    """Keep the `avdmanager list devices -c` ids matching a device type.

    "Others" keeps everything that matches none of the known types.
    """
    keywords = DEVICE_TYPE_KEYWORDS[device_type]
    if keywords:
        return [p for p in profiles if any(k in p.lower() for k in keywords)]

    known = [k for words in DEVICE_TYPE_KEYWORDS.values() for k in words]
    return [p for p in profiles if not any(k in p.lower() for k in known)]


async def install_app(options: VerifiedOptions, sdk_root: str, platform: str) -> bool:
    """Install an APK on a running device."""
    try:
        adb_location = locate_binary(sdk_root, platform, "adb")
        if not adb_location:
            return False

        devices = await DeviceManager(adb_location).list_devices()
        if not devices:
            console.print("[red]No device found running.[/] Please connect a device to install the APK.")
            console.print("Use [cyan]mobile-helper android connect[/] to connect to a device.\n")
            return False

        device_id = options.flags.get("deviceId")
        serial = select_device(
            devices, device_id if isinstance(device_id, str) else None, "install the APK"
        )

        path = options.flags.get("path")
        if not isinstance(path, str) or not path:
            path = prompts.ask("Enter the path to the APK file")
            console.print()

        apk_path = resolve_apk_path(path)
        if not os.path.isfile(apk_path):
            console.print("[red]APK file not found![/] Please provide a valid path to the APK file.\n")
            return False

        console.print("Installing APK...")
        device = next(d for d in devices if d.serial == serial)
        installation_status = await device.install_app(apk_path)

        if "Success" in installation_status:
            console.print("[green]APK installed successfully![/]\n")
            return True

        console.print("[red]Failed to install APK![/]")
        console.print(escape(installation_status))
        return False

    except Exception as e:
        console.print("[red]Error occurred while installing APK.[/]")
        console.print(f"[red]{escape(str(e))}[/]")
        logger.debug("APK installation failed", exc_info=True)
        return False


def _select_device_profile(avdmanager_location: str) -> Optional[str]:
    device_type = prompts.select(
        "Select the device type for AVD:", list(DEVICE_TYPE_KEYWORDS)
    )
    console.print()

    stdout = exec_binary_sync(avdmanager_location, ["list", "devices", "-c"])
    profiles = filter_device_profiles(split_lines(stdout or ""), device_type)
    if not profiles:
        console.print("[red]No devices found![/] Please try again.")
        return None

    profile = prompts.select("Select the device profile for AVD:", profiles)
    console.print()
    return profile


async def create_avd(sdk_root: str, platform: str) -> bool:
    """Create an AVD from an installed system image and a device profile."""
    try:
        avdmanager_location = locate_binary(sdk_root, platform, "avdmanager")
        if not avdmanager_location:
            return False

        sdkmanager_location = locate_binary(sdk_root, platform, "sdkmanager")
        if not sdkmanager_location:
            return False

        installed_avds = list_avds(avdmanager_location)
        if installed_avds is None:
            console.print("[yellow]Failed to fetch installed AVDs.[/] Please try again.")
            return False

        avd_name = ""
        while not avd_name:
            avd_name = prompts.ask("Enter a name for the AVD")
        console.print()

        if avd_name in installed_avds:
            console.print("[yellow]AVD with the same name already exists![/]\n")
            if not prompts.confirm("Do you want to overwrite the existing AVD?"):
                return False
            console.print()

        installed_system_images = get_installed_system_images(sdkmanager_location)
        if installed_system_images is None:
            return False
        if not installed_system_images:
            console.print("[yellow]No installed system images were found![/]")
            console.print(
                "Use [cyan]mobile-helper android install --system-image[/] to install one first."
            )
            return False

        system_image = prompts.select(
            "Select the system image to use for AVD:", installed_system_images
        )
        console.print()

        device_profile = _select_device_profile(avdmanager_location)
        if device_profile is None:
            return False

        console.print(f"Creating [cyan]{avd_name}[/]...")
        # avdmanager asks whether to create a custom hardware profile
        exec_binary_sync(
            avdmanager_location,
            [
                "create", "avd",
                "--name", avd_name,
                "--package", system_image,
                "--device", device_profile,
                "--force",
            ],
            input="no\n",
        )

        installed_avds_after_create = list_avds(avdmanager_location)
        if installed_avds_after_create is None:
            console.print(
                "[yellow]Failed to confirm AVD creation![/] Please try launching the AVD using "
                "[cyan]mobile-helper android connect --avd[/] to confirm.\n"
            )
            return False

        if avd_name not in installed_avds_after_create:
            console.print("[red]Failed to create AVD![/] Please try again.")
            return False

        console.print("[green]AVD created successfully![/]")
        return True

    except Exception as e:
        console.print("[red]Error occurred while creating AVD.[/]")
        console.print(f"[red]{escape(str(e))}[/]")
        logger.debug("AVD creation failed", exc_info=True)
        return False


async def install_system_image(sdk_root: str, platform: str) -> bool:
    """Download a system image picked by API level, type and architecture."""
    try:
        sdkmanager_location = locate_binary(sdk_root, platform, "sdkmanager")
        if not sdkmanager_location:
            return False

        catalogue = get_available_system_images(sdkmanager_location)
        if catalogue is None:
            return False
        if not catalogue:
            console.print("[red]No system images are available for download![/]")
            return False

        labels = {api_level_label(api_level): api_level for api_level in catalogue}
        api_level = labels[
            prompts.select("Select the Android version for system image:", list(labels))
        ]
        console.print()

        image_types = catalogue[api_level]
        image_type = prompts.select(
            f"Select the system image type for {api_level}:",
            [image.type for image in image_types],
        )
        console.print()

        archs = next(image.archs for image in image_types if image.type == image_type)
        arch = prompts.select("Select the architecture for the system image:", archs)

        full_name = system_image_name(api_level, image_type, arch)
        console.print()
        console.print(f"Downloading [cyan]{full_name}[/]...\n")

        with console.status(f"Downloading {full_name}..."):
            downloading = exec_binary_sync(sdkmanager_location, [full_name])

        if downloading is None:
            console.print("[red]Failed to download system image![/] Please try again.")
            return False

        installed_images = get_installed_system_images(sdkmanager_location)
        if installed_images is None:
            return False

        if full_name not in installed_images:
            console.print("[red]Failed to download system image![/]")
            console.print(
                "If sdkmanager asked to accept a licence, run [cyan]sdkmanager --licenses[/] "
                "and try again."
            )
            return False

        console.print("[green]System image downloaded successfully![/]")
        return True

    except Exception as e:
        console.print("[red]Error occurred while installing system image.[/]")
        console.print(f"[red]{escape(str(e))}[/]")
        logger.debug("System image installation failed", exc_info=True)
        return False


def _options_prompt() -> str:
    choice = prompts.select("Select the item you want to install:", ["APK", "System Image", "AVD"])
    console.print()
    return {"APK": "app", "System Image": "system-image", "AVD": "avd"}[choice]


async def install(options: VerifiedOptions, sdk_root: str, platform: str) -> bool:
    main_option = options.main_option or _options_prompt()

    if main_option == "avd":
        return await create_avd(sdk_root, platform)
    if main_option == "app":
        return await install_app(options, sdk_root, platform)
    if main_option == "system-image":
        return await install_system_image(sdk_root, platform)

    return False
