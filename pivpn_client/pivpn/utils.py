"""Utility functions for PiVPN management."""

import asyncio
import subprocess
from typing import List, Optional, Tuple

from .exceptions import PiVPNCommandError, PiVPNTimeoutError
from ..logging_utility import logger


def _decode(data: Optional[bytes]) -> str:
    return (data or b"").decode("utf-8", errors="replace")


async def _kill(process: asyncio.subprocess.Process) -> None:
    """Kill a child and reap it so no zombie is left behind."""
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
    await process.wait()


async def run_command(
        cmd: List[str],
        check: bool = True,
        timeout: Optional[float] = None,
        input_data: Optional[bytes] = None,
) -> Tuple[str, str]:
    """
    Run an external command without a shell and return its output.

    Args:
        cmd: Command as list of strings
        check: Whether to raise exception on non-zero exit
        timeout: Seconds to wait before killing the command, None waits forever
        input_data: Bytes written to the command's stdin

    Returns:
        Tuple of (stdout, stderr)
    """
    cmd_str = " ".join(cmd)
    logger.info(f"Running command: {cmd_str}")

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=subprocess.PIPE if input_data is not None else subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as e:
        logger.error(f"Could not start command {cmd_str}: {e}")
        raise PiVPNCommandError(f"Could not start command: {cmd_str}\n{e}", cmd=cmd) from e

    try:
        raw_stdout, raw_stderr = await asyncio.wait_for(
            process.communicate(input_data), timeout=timeout
        )
    except asyncio.TimeoutError:
        await _kill(process)
        logger.error(f"Command timed out after {timeout}s: {cmd_str}")
        raise PiVPNTimeoutError(f"Command timed out after {timeout}s: {cmd_str}", cmd=cmd)
    except asyncio.CancelledError:
        await _kill(process)
        logger.warning(f"Command cancelled: {cmd_str}")
        raise

    stdout, stderr = _decode(raw_stdout), _decode(raw_stderr)

    if check and process.returncode != 0:
        logger.error(f"Command failed with exit code {process.returncode}: {cmd_str}\n{stderr}")
        raise PiVPNCommandError(
            f"Command failed: {cmd_str}\n{stderr}",
            cmd=cmd,
            returncode=process.returncode,
            stdout=stdout,
            stderr=stderr,
        )

    return stdout, stderr
