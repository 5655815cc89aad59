"""
Shell command runner used by the platform enumerators.

Every OS query goes through exec_command so the enumerators can be
tested with canned output instead of real processes.
"""

import asyncio
import logging
from typing import Optional

from ..config import load_settings

logger = logging.getLogger(__name__)


class ExecutionError(Exception):
    """A shell command could not be spawned or exited non-zero."""

    def __init__(
        self,
        command: str,
        returncode: Optional[int] = None,
        stderr: str = "",
        message: Optional[str] = None,
    ):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        if message is None:
            message = f"Command failed: {command}"
            if returncode is not None:
                message += f" (exit code {returncode})"
            if stderr:
                message += f": {stderr.strip()}"
        super().__init__(message)


class CommandTimeoutError(ExecutionError):
    """A shell command did not finish within its time bound."""

    def __init__(self, command: str, timeout: float):
        self.timeout = timeout
        super().__init__(command, message=f"Command timed out after {timeout}s: {command}")


async def exec_command(
    command: str,
    timeout: Optional[float] = None,
    encoding: str = "utf-8",
) -> str:
    """
    Run a command through the OS shell and return its stdout.

    Args:
        command: Shell command line
        timeout: Seconds to wait before killing the process
            (defaults to the configured command timeout)
        encoding: Encoding used to decode stdout and stderr

    Returns:
        Decoded standard output

    Raises:
        ExecutionError: If the process cannot be spawned or exits non-zero
        CommandTimeoutError: If the timeout elapses
    """
    if timeout is None:
        timeout = load_settings().command_timeout

    logger.debug(f"Running: {command}")

    try:
        process = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise ExecutionError(command, stderr=str(e)) from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        raise CommandTimeoutError(command, timeout)
    finally:
        # Reap the child on timeout and on caller cancellation
        if process.returncode is None:
            process.kill()
            await process.wait()

    if process.returncode != 0:
        raise ExecutionError(
            command,
            returncode=process.returncode,
            stderr=stderr.decode(encoding, errors="replace"),
        )

    return stdout.decode(encoding, errors="replace")
