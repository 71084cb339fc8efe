"""
ADB Package - Android Debug Bridge functionality.
"""

from mobile_helper.adb.device import Device
from mobile_helper.adb.manager import DeviceManager
from mobile_helper.adb.wrapper import ADBWrapper

__all__ = [
    'Device',
    'DeviceManager',
    'ADBWrapper',
]
