"""
Helpers shared by the device flows.
"""

from typing import List, Optional

from mobile_helper.adb import Device
from mobile_helper.android import prompts
from mobile_helper.console import console
from mobile_helper.sdk.binaries import MISSING_REQUIREMENTS_HINT, get_binary_location
from mobile_helper.sdk.runner import exec_binary_sync


def show_missing_binary_help(binary: str) -> None:
    console.print(f"[red]{binary} not found![/] {MISSING_REQUIREMENTS_HINT}")


def locate_binary(sdk_root: str, platform: str, binary: str) -> Optional[str]:
    """Find an SDK binary, printing the remediation message when it is missing."""
    location = get_binary_location(sdk_root, platform, binary)
    if not location:
        show_missing_binary_help(binary)
    return location


def split_lines(stdout: str) -> List[str]:
    return [line.strip() for line in stdout.splitlines() if line.strip()]


def list_avds(avdmanager_location: str) -> Optional[List[str]]:
    """Names of the installed AVDs, or None if avdmanager failed."""
    stdout = exec_binary_sync(avdmanager_location, ["list", "avd", "-c"])
    if stdout is None:
        return None
    return split_lines(stdout)


def select_device(
    devices: List[Device],
    device_id: Optional[str],
    purpose: str,
    always_prompt: bool = False,
) -> str:
    """Pick the device a flow operates on.

    A single attached device is used as is unless `always_prompt` is set.
    Otherwise a valid `device_id` is used, or the user is asked to pick one.

    Args:
        devices: Attached devices, at least one
        device_id: Id passed on the command line, if any
        purpose: End of the prompt, e.g. "install the APK"
        always_prompt: Ask even when only one device is attached

    Returns:
        Serial of the selected device
    """
    if len(devices) == 1 and not always_prompt:
        if device_id and device_id != devices[0].serial:
            console.print(
                f"[yellow]Invalid device Id passed![/] Using the only running device "
                f"[cyan]{devices[0].serial}[/].\n"
            )
        return devices[0].serial

    serials = [device.serial for device in devices]
    if device_id:
        if device_id in serials:
            return device_id
        console.print("[yellow]Invalid device Id passed![/] Please select a valid running device.\n")

    serial = prompts.select(f"Select the device to {purpose}:", serials)
    console.print()
    return serial


def print_devices(devices: List[Device]) -> None:
    """Print serials padded to a common width followed by their state."""
    console.print("[bold]Connected Devices:[/]")

    padded_length = max(len(device.serial) for device in devices) + 2
    for device in devices:
        console.print(f"{device.serial.ljust(padded_length)}{device.state}")
