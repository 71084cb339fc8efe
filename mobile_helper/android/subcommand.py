"""
Routing `android <subcommand>` invocations to the device flows.
"""

import logging
import os
from typing import Awaitable, Callable, Dict, Optional

from mobile_helper.android.connect import connect
from mobile_helper.android.constants import AVAILABLE_SUBCOMMANDS
from mobile_helper.android.disconnect import disconnect
from mobile_helper.android.help import get_subcommand_help, show_help
from mobile_helper.android.install import install
from mobile_helper.android.options import Options, VerifiedOptions, verify_options
from mobile_helper.android.uninstall import uninstall
from mobile_helper.console import console
from mobile_helper.sdk.binaries import get_platform_name
from mobile_helper.sdk.env import get_sdk_root_from_env, load_env_from_dotenv

logger = logging.getLogger("mobile_helper.android")

Flow = Callable[[VerifiedOptions, str, str], Awaitable[bool]]

SUBCOMMAND_FLOWS: Dict[str, Flow] = {
    "connect": connect,
    "disconnect": disconnect,
    "install": install,
    "uninstall": uninstall,
}


class AndroidSubcommand:
    """One `android <subcommand>` invocation."""

    def __init__(self, subcommand: str, options: Options, root_dir: Optional[str] = None):
        self.subcommand = subcommand
        self.options = options
        self.root_dir = root_dir or os.getcwd()
        self.platform = get_platform_name()
        self.sdk_root = ""
        self.android_home_in_global_env = False

    async def run(self) -> bool:
        if self.subcommand not in AVAILABLE_SUBCOMMANDS:
            console.print(f"[red]Unknown subcommand passed:[/] {self.subcommand}\n")
            console.print(get_subcommand_help())
            return False

        if self.options.get("help") or self.options.get("h"):
            show_help(self.subcommand)
            return True

        verified = verify_options(self.subcommand, self.options)
        if verified is None:
            return False

        self.android_home_in_global_env = load_env_from_dotenv(self.root_dir)
        sdk_root = get_sdk_root_from_env(self.root_dir, self.android_home_in_global_env)
        if not sdk_root:
            return False
        self.sdk_root = sdk_root

        return await self.execute_sdk_script(verified)

    async def execute_sdk_script(self, verified: VerifiedOptions) -> bool:
        logger.debug(
            f"Running {self.subcommand} (option: {verified.main_option}, flags: {verified.flags})"
        )
        flow = SUBCOMMAND_FLOWS[self.subcommand]
        return await flow(verified, self.sdk_root, self.platform)
