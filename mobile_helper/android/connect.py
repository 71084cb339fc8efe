"""
`android connect` - pair real devices over Wi-Fi, launch AVDs, list devices.
"""

import logging

from rich.markup import escape

from mobile_helper.adb import DeviceManager
from mobile_helper.android import prompts
from mobile_helper.android.common import list_avds, locate_binary, print_devices
from mobile_helper.android.options import VerifiedOptions
from mobile_helper.console import console
from mobile_helper.sdk.emulator import launch_avd

logger = logging.getLogger("mobile_helper.android")

WIRELESS_INSTRUCTIONS = """\
[bold]Follow the below steps to connect to your device wirelessly:[/]

  1. Connect your device to the same network as your computer.
     [grey50]You may connect your device to your computer's hotspot[/]

  2. Enable developer options on your device by going to:
     [cyan]Settings > About phone > Build number[/]
     and tapping the [bold]Build number[/] 7 times until you see the message: [bold]You are now a developer![/]
     [grey50]For more info, see: https://developer.android.com/studio/debug/dev-options#enable[/]

  3. Enable [bold]Wireless debugging[/] on your device by going to:
     [cyan]Settings > Developer options > Wireless debugging[/]
     or, search for [bold]wireless debugging[/] on your device's Settings app.

  4. Find the IP address and port number of your device on the Wireless debugging screen
     [grey50]IP address and port number are separated by ':' in the format <ip_address>:<port>[/]
     [grey50]where IP address comes before ':' and port number comes after ':'[/]
"""

PAIRING_INSTRUCTIONS = """\
  5. Now, find your device's pairing code and pairing port number by going to:
     [cyan]Wireless debugging > Pair device with pairing code[/]
     Here, you will find a pairing code and an IP address and port combination [grey50](in the format <ip_address>:<port>)[/]
     The port number associated with the IP address is the required pairing port number.
"""


async def connect_wireless_adb(sdk_root: str, platform: str) -> bool:
    """Pair and connect a real device using wireless debugging."""
    try:
        adb_location = locate_binary(sdk_root, platform, "adb")
        if not adb_location:
            return False

        console.print(
            "\n[yellow]Note: Wireless debugging connection is only supported in Android 11 and above.[/]\n"
        )
        console.print(WIRELESS_INSTRUCTIONS)

        device_ip = prompts.ask("Enter the IP address of your device")
        port = prompts.ask("Enter the port number")

        console.print()
        console.print(PAIRING_INSTRUCTIONS)

        pairing_code = prompts.ask("Enter the pairing code displayed on your device")
        pairing_port = prompts.ask("Enter the pairing port number displayed on your device")

        console.print()
        console.print("Pairing with your device...")

        device_manager = DeviceManager(adb_location)
        if not await device_manager.pair(device_ip, pairing_port, pairing_code):
            console.print("\n[red]Pairing failed![/] Please try again.\n")
            return False

        console.print("[green]Pairing successful![/]\n")
        console.print("Connecting to your device...")

        error = await device_manager.connect(device_ip, port)
        if error:
            console.print(f"  [red]✖ Failed to connect: {escape(error)}[/] Please try again.\n")
            return False

        console.print("[green]Connected successfully![/]\n")
        return True

    except Exception as e:
        console.print("[red]Error occurred while connecting to device wirelessly.[/]")
        console.print(f"[red]{escape(str(e))}[/]")
        logger.debug("Wireless connection failed", exc_info=True)
        return False


async def connect_avd(sdk_root: str, platform: str) -> bool:
    """Let the user pick an installed AVD and launch it."""
    try:
        avdmanager_location = locate_binary(sdk_root, platform, "avdmanager")
        if not avdmanager_location:
            return False

        available_avds = list_avds(avdmanager_location)
        if not available_avds:
            console.print(
                "[red]No AVDs found![/] Use [cyan]mobile-helper android install --avd[/] to create one."
            )
            return False

        avd_name = prompts.select("Select the AVD to connect:", available_avds)

        console.print()
        console.print(f"Connecting to {avd_name}...")
        return await launch_avd(sdk_root, platform, avd_name)

    except Exception as e:
        console.print("[red]Error occurred while launching AVD.[/]")
        console.print(f"[red]{escape(str(e))}[/]")
        logger.debug("AVD launch failed", exc_info=True)
        return False


async def list_running_devices(sdk_root: str, platform: str) -> bool:
    """Print the attached devices and emulators with their state."""
    try:
        adb_location = locate_binary(sdk_root, platform, "adb")
        if not adb_location:
            return False

        devices = await DeviceManager(adb_location).list_devices()
        if not devices:
            console.print("No device connected.")
            return True

        print_devices(devices)
        return True

    except Exception as e:
        console.print("[red]Error occurred while listing devices.[/]")
        console.print(f"[red]{escape(str(e))}[/]")
        logger.debug("Listing devices failed", exc_info=True)
        return False


async def default_connect_flow(sdk_root: str, platform: str) -> bool:
    await list_running_devices(sdk_root, platform)
    console.print()

    connect_option = prompts.select(
        "Select the type of device to connect:", ["Real Device", "AVD"]
    )
    console.print()

    if connect_option == "Real Device":
        return await connect_wireless_adb(sdk_root, platform)
    return await connect_avd(sdk_root, platform)


async def connect(options: VerifiedOptions, sdk_root: str, platform: str) -> bool:
    if options.main_option == "wireless":
        return await connect_wireless_adb(sdk_root, platform)
    if options.main_option == "avd":
        return await connect_avd(sdk_root, platform)
    if options.main_option == "list":
        return await list_running_devices(sdk_root, platform)

    return await default_connect_flow(sdk_root, platform)
