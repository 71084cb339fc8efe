"""
`android disconnect` - drop a wireless device or shut down an emulator.
"""

import logging

from rich.markup import escape

from mobile_helper.adb import DeviceManager
from mobile_helper.android.common import locate_binary, select_device
from mobile_helper.android.options import VerifiedOptions
from mobile_helper.console import console

logger = logging.getLogger("mobile_helper.android")


async def disconnect(options: VerifiedOptions, sdk_root: str, platform: str) -> bool:
    try:
        adb_location = locate_binary(sdk_root, platform, "adb")
        if not adb_location:
            return False

        device_manager = DeviceManager(adb_location)
        devices = await device_manager.list_devices()
        if not devices:
            console.print("[yellow]No device found running.[/]")
            return True

        device_id = options.flags.get("deviceId")
        serial = select_device(
            devices,
            device_id if isinstance(device_id, str) else None,
            "disconnect",
            always_prompt=True,
        )

        if "emulator" in serial:
            console.print(f"Shutting down [cyan]{serial}[/]...")
        else:
            console.print(f"Disconnecting [cyan]{serial}[/]...")

        if await device_manager.disconnect(serial):
            console.print(f"[green]Successfully disconnected {serial}![/]\n")
            return True

        console.print(f"[red]Failed to disconnect {serial}.[/]")
        if "emulator" not in serial:
            console.print(
                "[grey50]Only devices connected over Wi-Fi can be disconnected; "
                "unplug the USB cable for wired devices.[/]\n"
            )
        return False

    except Exception as e:
        console.print("[red]Error occurred while disconnecting the device.[/]")
        console.print(f"[red]{escape(str(e))}[/]")
        logger.debug("Disconnect failed", exc_info=True)
        return False
