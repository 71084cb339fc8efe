"""
Device - High-level representation of an attached Android device.
"""

from typing import List
from mobile_helper.adb.wrapper import ADBWrapper


class Device:
    """High-level representation of an Android device or emulator."""

    def __init__(self, serial: str, state: str, adb: ADBWrapper):
        """Initialize device.

        Args:
            serial: Device serial number (udid)
            state: State reported by adb ("device", "offline", ...)
            adb: ADB wrapper instance
        """
        self._serial = serial
        self._state = state
        self._adb = adb

    @property
    def serial(self) -> str:
        """Get device serial number."""
        return self._serial

    @property
    def state(self) -> str:
        """Get the state adb reported for this device."""
        return self._state

    @property
    def is_emulator(self) -> bool:
        return "emulator" in self._serial

    def __repr__(self) -> str:
        return f"Device(serial={self._serial!r}, state={self._state!r})"

    async def install_app(self, apk_path: str) -> str:
        """Install an APK and return the raw adb output."""
        return await self._adb.install_app(self._serial, apk_path)

    async def uninstall_app(self, package: str) -> str:
        """Uninstall a package and return the raw adb output."""
        return await self._adb.uninstall_app(self._serial, package)

    async def list_packages(self, name_filter: str = "") -> List[str]:
        """List installed packages whose name contains `name_filter`."""
        return await self._adb.list_packages(self._serial, name_filter)

    async def disconnect(self) -> str:
        """Kill the device if it is an emulator, otherwise drop its TCP/IP link.

        Returns:
            Raw output of the adb command
        """
        if self.is_emulator:
            return await self._adb.kill_emulator(self._serial)
        return await self._adb.disconnect(self._serial)
