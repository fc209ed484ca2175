import asyncio
import shlex
from pathlib import Path
from typing import Sequence

from sanic.log import logger

from intellibuild.exceptions import (
    CommandFailedError,
    CommandNotFoundError,
    CommandTimeoutError,
)


async def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    timeout: float | None = None,
) -> None:
    """
    Run an external command, passing its output through to our own streams.

    Args:
        args: Command and arguments, executed without a shell
        cwd: Working directory for the command
        timeout: Seconds to wait before the command is killed, None waits forever

    Raises:
        CommandNotFoundError: The executable could not be started
        CommandFailedError: The command exited with a non-zero status
        CommandTimeoutError: The command did not finish within ``timeout``
    """
    logger.info("Running %s (cwd: %s)", shlex.join(args), cwd or ".")

    try:
        # stdout/stderr are inherited from the service process
        proc = await asyncio.create_subprocess_exec(*args, cwd=cwd)
    except OSError as e:
        raise CommandNotFoundError(args, f"{args[0]}: {e.strerror or e}") from e

    try:
        returncode = await asyncio.wait_for(proc.wait(), timeout)
    except asyncio.TimeoutError:
        logger.error("%s timed out after %s seconds, killing", args[0], timeout)
        raise CommandTimeoutError(args, timeout)
    finally:
        if proc.returncode is None:
            proc.kill()
            await proc.wait()

    if returncode != 0:
        logger.debug("%s exited with status %d", args[0], returncode)
        raise CommandFailedError(args, returncode)
