"""
Launching an AVD and waiting for it to boot.
"""

import asyncio
import logging
import os
import subprocess
import time
from typing import Optional, Set

from mobile_helper.adb import DeviceManager
from mobile_helper.console import console
from mobile_helper.sdk.binaries import MISSING_REQUIREMENTS_HINT, get_binary_location

logger = logging.getLogger("mobile_helper.sdk")

DEFAULT_BOOT_TIMEOUT = 180.0
POLL_INTERVAL = 2.0


def get_boot_timeout() -> float:
    value = os.environ.get("MOBILE_HELPER_BOOT_TIMEOUT")
    if not value:
        return DEFAULT_BOOT_TIMEOUT
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring invalid MOBILE_HELPER_BOOT_TIMEOUT={value!r}")
        return DEFAULT_BOOT_TIMEOUT


def _spawn_emulator(emulator_location: str, avd_name: str) -> subprocess.Popen:
    # The emulator keeps running after this process exits
    return subprocess.Popen(
        [emulator_location, f"@{avd_name}"],
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        stdin=subprocess.DEVNULL,
        start_new_session=True,
    )


async def wait_for_boot(
    device_manager: DeviceManager,
    known_serials: Set[str],
    timeout: float,
    process: Optional[subprocess.Popen] = None,
) -> Optional[str]:
    """Wait for a new emulator to come online and finish booting.

    Args:
        device_manager: Manager used to poll adb
        known_serials: Emulator serials that were running before the launch
        timeout: Seconds to wait before giving up
        process: Emulator process, checked for an early exit

    Returns:
        Serial of the booted emulator, or None on timeout or emulator exit
    """
    deadline = time.monotonic() + timeout

    while time.monotonic() < deadline:
        if process is not None and process.poll() is not None:
            logger.debug(f"Emulator exited early with code {process.returncode}")
            return None

        for device in await device_manager.list_devices():
            if not device.is_emulator or device.serial in known_serials:
                continue
            if device.state != "device":
                continue

            boot_completed = await device_manager.adb.get_property(
                device.serial, "sys.boot_completed"
            )
            if boot_completed == "1":
                return device.serial

        await asyncio.sleep(POLL_INTERVAL)

    return None


async def launch_avd(sdk_root: str, platform: str, avd_name: str) -> bool:
    """Start an AVD with the SDK emulator and wait until it has booted.

    Args:
        sdk_root: Android SDK root
        platform: Platform name
        avd_name: Name of the AVD to launch

    Returns:
        True once the emulator reports sys.boot_completed
    """
    emulator_location = get_binary_location(sdk_root, platform, "emulator")
    if not emulator_location:
        console.print(f"[red]emulator not found![/] {MISSING_REQUIREMENTS_HINT}")
        return False

    adb_location = get_binary_location(sdk_root, platform, "adb")
    if not adb_location:
        console.print(f"[red]adb not found![/] {MISSING_REQUIREMENTS_HINT}")
        return False

    device_manager = DeviceManager(adb_location)
    known_serials = {
        device.serial for device in await device_manager.list_devices() if device.is_emulator
    }

    process = _spawn_emulator(emulator_location, avd_name)
    logger.debug(f"Emulator started with PID {process.pid}")

    timeout = get_boot_timeout()
    with console.status(f"Waiting for {avd_name} to boot..."):
        serial = await wait_for_boot(device_manager, known_serials, timeout, process)

    if serial is None:
        console.print(
            f"[red]{avd_name} did not finish booting within {int(timeout)} seconds.[/] "
            "Please check the emulator window and try again."
        )
        return False

    console.print(f"[green]{avd_name} launched successfully as {serial}![/]\n")
    return True
