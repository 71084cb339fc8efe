"""
Device Manager - Enumerates and connects Android devices.
"""

import logging
from typing import List, Optional
from mobile_helper.adb.wrapper import ADBWrapper
from mobile_helper.adb.device import Device

logger = logging.getLogger("mobile_helper.adb")


class DeviceManager:
    """Manages Android device connections."""

    def __init__(self, adb_path: Optional[str] = None):
        """Initialize device manager.

        Args:
            adb_path: Path to ADB binary
        """
        self._adb = ADBWrapper(adb_path)

    @property
    def adb(self) -> ADBWrapper:
        return self._adb

    async def list_devices(self) -> List[Device]:
        """List attached devices, offline ones included.

        Returns:
            Freshly enumerated devices
        """
        devices_info = await self._adb.get_devices()
        logger.debug(f"Found {len(devices_info)} device(s): {devices_info}")

        return [
            Device(info["serial"], info["state"], self._adb) for info in devices_info
        ]

    async def get_device(self, serial: str) -> Optional[Device]:
        """Get a specific device.

        Args:
            serial: Device serial number

        Returns:
            Device instance if attached, None otherwise
        """
        for device in await self.list_devices():
            if device.serial == serial:
                return device

        return None

    async def pair(self, host: str, port: str, code: str) -> bool:
        """Pair with a device over wireless debugging.

        Returns:
            True if adb reported a successful pairing
        """
        output = await self._adb.pair(host, port, code)
        logger.debug(f"adb pair: {output}")
        return "successfully paired" in output.lower()

    async def connect(self, host: str, port: str) -> Optional[str]:
        """Connect to a device over TCP/IP.

        Args:
            host: Device IP address
            port: Device port

        Returns:
            None on success, otherwise the adb output explaining the failure
        """
        output = await self._adb.connect(host, port)
        logger.debug(f"adb connect: {output}")

        lowered = output.lower()
        failed = any(word in lowered for word in ("failed", "cannot", "unable"))
        if "connected" in lowered and not failed:
            return None
        return output or "no output from adb"

    async def disconnect(self, serial: str) -> bool:
        """Disconnect from a device, killing it when it is an emulator.

        Args:
            serial: Device serial number

        Returns:
            True if disconnected successfully
        """
        device = Device(serial, "unknown", self._adb)
        output = await device.disconnect()
        logger.debug(f"disconnect {serial}: {output}")

        lowered = output.lower()
        return "disconnected" in lowered or "killing emulator" in lowered
