"""
Running SDK binaries and capturing their plain-text output.
"""

import asyncio
import logging
import os
import subprocess
from typing import List, Optional

logger = logging.getLogger("mobile_helper.sdk")


def _binary_env() -> dict:
    env = os.environ.copy()
    if "ANDROID_HOME" in env:
        env.setdefault("ANDROID_SDK_ROOT", env["ANDROID_HOME"])
    return env


def exec_binary_sync(
    binary_location: str,
    args: List[str],
    input: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Optional[str]:
    """Run a binary and return its stdout.

    Args:
        binary_location: Absolute path to the binary
        args: Command arguments
        input: Text written to the process' stdin; without it stdin is empty
        timeout: Command timeout in seconds

    Returns:
        The command's stdout, or None if it could not be run or exited non-zero
    """
    cmd = [binary_location, *args]
    logger.debug(f"Running: {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            input=input,
            # captured prompts get EOF instead of waiting on the terminal
            stdin=subprocess.DEVNULL if input is None else None,
            timeout=timeout,
            env=_binary_env(),
        )
    except subprocess.TimeoutExpired:
        logger.error(f"Timed out running {' '.join(cmd)}")
        return None
    except OSError as e:
        logger.error(f"Failed to run {' '.join(cmd)}: {e}")
        return None

    if result.returncode != 0:
        logger.error(f"Failed to run {' '.join(cmd)}")
        logger.debug(result.stderr.strip())
        return None

    return result.stdout


async def exec_binary_async(
    binary_location: str,
    args: List[str],
    timeout: Optional[float] = None,
) -> str:
    """Run a binary without blocking the event loop.

    Args:
        binary_location: Absolute path to the binary
        args: Command arguments
        timeout: Command timeout in seconds

    Returns:
        The command's stdout

    Raises:
        RuntimeError: If the command exits non-zero
        TimeoutError: If the command does not finish within `timeout`
    """
    cmd = [binary_location, *args]
    logger.debug(f"Running: {' '.join(cmd)}")

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        env=_binary_env(),
    )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        raise TimeoutError(f"Command timed out: {' '.join(cmd)}")

    stdout = stdout_bytes.decode("utf-8", errors="replace")
    stderr = stderr_bytes.decode("utf-8", errors="replace")

    if process.returncode != 0:
        raise RuntimeError(f"Failed to run {' '.join(cmd)}: {stderr.strip() or stdout.strip()}")

    return stdout
