"""
ADB Wrapper - Lightweight async wrapper around the adb binary.
"""

import asyncio
import logging
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger("mobile_helper.adb")


class ADBWrapper:
    """Lightweight wrapper around ADB for device management."""

    def __init__(self, adb_path: Optional[str] = None):
        """Initialize ADB wrapper.

        Args:
            adb_path: Path to ADB binary (defaults to 'adb' in PATH)
        """
        self.adb_path = adb_path or "adb"

    async def _run_command(
        self,
        args: List[str],
        timeout: Optional[float] = None,
        check: bool = True
    ) -> Tuple[str, str]:
        """Run an ADB command.

        Args:
            args: Command arguments
            timeout: Command timeout in seconds
            check: Whether to check return code

        Returns:
            Tuple of (stdout, stderr)
        """
        cmd = [self.adb_path, *args]
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )

            if timeout is not None:
                stdout_bytes, stderr_bytes = await asyncio.wait_for(
                    process.communicate(), timeout
                )
            else:
                stdout_bytes, stderr_bytes = await process.communicate()

            stdout = stdout_bytes.decode("utf-8", errors="replace").strip()
            stderr = stderr_bytes.decode("utf-8", errors="replace").strip()

            if check and process.returncode != 0:
                raise RuntimeError(f"ADB command failed: {stderr or stdout}")

            return stdout, stderr

        except asyncio.TimeoutError:
            raise TimeoutError(f"ADB command timed out: {' '.join(cmd)}")
        except FileNotFoundError:
            raise FileNotFoundError(f"ADB not found at {self.adb_path}")

    async def _run_device_command(
        self,
        serial: str,
        args: List[str],
        timeout: Optional[float] = None,
        check: bool = True
    ) -> Tuple[str, str]:
        """Run an ADB command for a specific device."""
        return await self._run_command(["-s", serial, *args], timeout, check)

    async def get_devices(self) -> List[Dict[str, str]]:
        """Get list of attached devices, offline ones included.

        Returns:
            List of device info dictionaries with 'serial' and 'state' keys
        """
        stdout, _ = await self._run_command(["devices", "-l"])

        devices = []
        for line in stdout.splitlines():
            line = line.strip()
            # Skip the header and daemon start-up chatter
            if not line or line.startswith("List of devices") or line.startswith("*"):
                continue

            parts = line.split()
            serial = parts[0]
            state = parts[1] if len(parts) > 1 else "unknown"

            devices.append({
                "serial": serial,
                "state": state
            })

        return devices

    async def pair(self, host: str, port: str, code: str) -> str:
        """Pair with a device that has wireless debugging enabled.

        Args:
            host: Device IP address
            port: Pairing port shown on the device
            code: Pairing code shown on the device

        Returns:
            Raw output of `adb pair`
        """
        stdout, stderr = await self._run_command(
            ["pair", f"{host}:{port}", code], timeout=30.0, check=False
        )
        return stdout or stderr

    async def connect(self, host: str, port: str = "5555") -> str:
        """Connect to a device over TCP/IP.

        Args:
            host: Device IP address
            port: Device port

        Returns:
            Raw output of `adb connect`
        """
        stdout, stderr = await self._run_command(
            ["connect", f"{host}:{port}"], timeout=10.0, check=False
        )
        return stdout or stderr

    async def disconnect(self, serial: str) -> str:
        """Disconnect a device connected over TCP/IP.

        Args:
            serial: Device serial number

        Returns:
            Raw output of `adb disconnect`
        """
        stdout, stderr = await self._run_command(["disconnect", serial], check=False)
        return stdout or stderr

    async def kill_emulator(self, serial: str) -> str:
        """Shut down a running emulator through its console."""
        stdout, stderr = await self._run_device_command(
            serial, ["emu", "kill"], check=False
        )
        return stdout or stderr

    async def get_property(self, serial: str, name: str) -> str:
        """Read a single system property, empty string when unavailable."""
        stdout, _ = await self._run_device_command(
            serial, ["shell", "getprop", name], check=False
        )
        return stdout.strip()

    async def install_app(self, serial: str, apk_path: str) -> str:
        """Install an APK on the device.

        Args:
            serial: Device serial number
            apk_path: Path to the APK file

        Returns:
            Combined output of `adb install`
        """
        stdout, stderr = await self._run_device_command(
            serial, ["install", apk_path], timeout=120.0, check=False
        )
        return "\n".join(part for part in (stdout, stderr) if part)

    async def uninstall_app(self, serial: str, package: str) -> str:
        """Uninstall a package from the device.

        Returns:
            Combined output of `adb uninstall`
        """
        stdout, stderr = await self._run_device_command(
            serial, ["uninstall", package], timeout=60.0, check=False
        )
        return "\n".join(part for part in (stdout, stderr) if part)

    async def list_packages(self, serial: str, name_filter: str = "") -> List[str]:
        """List installed package names, optionally filtered by substring.

        Args:
            serial: Device serial number
            name_filter: Substring passed on to `pm list packages`

        Returns:
            Package names
        """
        args = ["shell", "pm", "list", "packages"]
        if name_filter:
            args.append(name_filter)

        stdout, _ = await self._run_device_command(serial, args, check=False)

        packages = []
        for line in stdout.splitlines():
            if "package:" in line:
                packages.append(line.split(":", 1)[1].strip())

        return packages
