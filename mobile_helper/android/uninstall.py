"""
`android uninstall` - APKs, AVDs and system images.
"""

import logging

from rich.markup import escape

from mobile_helper.adb import DeviceManager
from mobile_helper.android import prompts
from mobile_helper.android.common import list_avds, locate_binary, select_device
from mobile_helper.android.options import VerifiedOptions
from mobile_helper.console import console
from mobile_helper.sdk.runner import exec_binary_async, exec_binary_sync
from mobile_helper.sdk.system_images import get_installed_system_images

logger = logging.getLogger("mobile_helper.android")


async def uninstall_app(options: VerifiedOptions, sdk_root: str, platform: str) -> bool:
    """Find a package by name on a running device and uninstall it."""
    try:
        adb_location = locate_binary(sdk_root, platform, "adb")
        if not adb_location:
            return False

        devices = await DeviceManager(adb_location).list_devices()
        if not devices:
            console.print("[red]No device found running.[/] Please connect a device to uninstall an APK.")
            console.print("Use [cyan]mobile-helper android connect[/] to connect to a device.\n")
            return False

        device_id = options.flags.get("deviceId")
        serial = select_device(
            devices, device_id if isinstance(device_id, str) else None, "uninstall the APK from"
        )
        device = next(d for d in devices if d.serial == serial)

        app_name = prompts.ask("Enter the name of the APK to uninstall")
        console.print()

        packages = await device.list_packages(app_name)
        if not packages:
            console.print("[red]APK not found![/] Please try again.")
            return False

        package_name = packages[0]
        if len(packages) > 1:
            package_name = prompts.select("Select the package you want to uninstall:", packages)
            console.print()

        if not prompts.confirm(f"Are you sure you want to uninstall [cyan]{package_name}[/]?"):
            console.print("Uninstallation cancelled.")
            return False
        console.print()

        console.print(f"Uninstalling [cyan]{package_name}[/]...\n")
        status = await device.uninstall_app(package_name)

        if "Success" in status:
            console.print("[green]APK uninstalled successfully![/]\n")
            return True

        console.print("[red]Failed to uninstall APK![/]")
        console.print(escape(status))
        return False

    except Exception as e:
        console.print("[red]Error occurred while uninstalling APK.[/]")
        console.print(f"[red]{escape(str(e))}[/]")
        logger.debug("APK uninstallation failed", exc_info=True)
        return False


async def delete_avd(sdk_root: str, platform: str) -> bool:
    """Delete an AVD picked from the installed ones."""
    try:
        avdmanager_location = locate_binary(sdk_root, platform, "avdmanager")
        if not avdmanager_location:
            return False

        installed_avds = list_avds(avdmanager_location)
        if installed_avds is None:
            console.print("[yellow]Failed to fetch installed AVDs.[/] Please try again.\n")
            console.print("Alternatively, to see the list of installed AVDs, run the following command:")
            console.print("[cyan]  avdmanager list avd[/]\n")
            return False
        if not installed_avds:
            console.print("[yellow]No AVDs found![/]")
            return False

        avd_name = prompts.select("Select the AVD to delete:", installed_avds)

        console.print()
        console.print(f"Deleting [cyan]{avd_name}[/]...\n")

        delete_status = await exec_binary_async(
            avdmanager_location, ["delete", "avd", "--name", avd_name]
        )

        if "deleted" in delete_status:
            console.print("[green]AVD deleted successfully![/]\n")
            return True

        console.print("[red]Something went wrong while deleting AVD.[/]")
        console.print("Please run [cyan]avdmanager list avd[/] to check if the AVD was deleted.")
        console.print("If the AVD is still present, please try deleting the AVD again.\n")
        console.print("Error message:")
        console.print(escape(delete_status))
        console.print()
        return False

    except Exception as e:
        console.print("[red]Error occurred while deleting AVD.[/]")
        console.print(f"[red]{escape(str(e))}[/]")
        logger.debug("AVD deletion failed", exc_info=True)
        return False


async def delete_system_image(sdk_root: str, platform: str) -> bool:
    """Uninstall an installed system image and check it is gone."""
    try:
        sdkmanager_location = locate_binary(sdk_root, platform, "sdkmanager")
        if not sdkmanager_location:
            return False

        installed_images = get_installed_system_images(sdkmanager_location)
        if installed_images is None:
            return False
        if not installed_images:
            console.print("[yellow]No installed system images were found![/]")
            return False

        system_image = prompts.select("Select the system image to uninstall:", installed_images)

        console.print()
        console.print(f"Uninstalling [cyan]{system_image}[/]...\n")

        if exec_binary_sync(sdkmanager_location, ["--uninstall", system_image]) is None:
            console.print("[red]Failed to uninstall system image![/] Please try again.")
            return False

        remaining_images = get_installed_system_images(sdkmanager_location)
        if remaining_images is None:
            console.print(
                "[yellow]Could not confirm the uninstallation![/] Run [cyan]sdkmanager --list[/] "
                "to check if the system image is still installed."
            )
            return False

        if system_image in remaining_images:
            console.print("[red]Failed to uninstall system image![/] Please try again.")
            return False

        console.print("[green]System image uninstalled successfully![/]")
        return True

    except Exception as e:
        console.print("[red]Error occurred while uninstalling system image.[/]")
        console.print(f"[red]{escape(str(e))}[/]")
        logger.debug("System image uninstallation failed", exc_info=True)
        return False


def _options_prompt() -> str:
    choice = prompts.select("Select the item you want to uninstall:", ["AVD", "System Image", "App"])
    console.print()
    return {"AVD": "avd", "System Image": "system-image", "App": "app"}[choice]


async def uninstall(options: VerifiedOptions, sdk_root: str, platform: str) -> bool:
    main_option = options.main_option or _options_prompt()

    if main_option == "avd":
        return await delete_avd(sdk_root, platform)
    if main_option == "app":
        return await uninstall_app(options, sdk_root, platform)
    if main_option == "system-image":
        return await delete_system_image(sdk_root, platform)

    return False
