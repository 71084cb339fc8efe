"""
mobile-helper - Set up and manage Android devices, AVDs and system images for mobile testing.
"""

__version__ = "0.1.0"

from mobile_helper.adb import ADBWrapper, Device, DeviceManager
from mobile_helper.android import AndroidSubcommand, VerifiedOptions, parse_options, verify_options

__all__ = [
    "ADBWrapper",
    "AndroidSubcommand",
    "Device",
    "DeviceManager",
    "VerifiedOptions",
    "parse_options",
    "verify_options",
]
