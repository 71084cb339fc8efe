"""
SDK Package - Android SDK command-line tools.
"""

from mobile_helper.sdk.binaries import get_binary_location, get_platform_name
from mobile_helper.sdk.env import get_sdk_root_from_env, load_env_from_dotenv
from mobile_helper.sdk.runner import exec_binary_async, exec_binary_sync

__all__ = [
    'get_binary_location',
    'get_platform_name',
    'get_sdk_root_from_env',
    'load_env_from_dotenv',
    'exec_binary_async',
    'exec_binary_sync',
]
