"""Asynchronous execution of external commands."""

from __future__ import annotations

import asyncio
import time

from winpkg.core.errors import CommandError
from winpkg.core.logging import get_logger

log = get_logger(__name__)


async def _spawn(*cmd: str, capture: bool) -> asyncio.subprocess.Process:
    pipe = asyncio.subprocess.PIPE if capture else None
    try:
        return await asyncio.create_subprocess_exec(*cmd, stdout=pipe, stderr=pipe)
    except OSError as e:
        log.error("command_spawn_failed", command=" ".join(cmd), error=str(e))
        raise CommandError(
            f"Could not run {cmd[0] if cmd else 'command'}",
            command=" ".join(cmd),
            error=str(e),
        ) from e


async def run_capture(*cmd: str) -> tuple[str, str, int]:
    """Run a command to completion and capture its output.

    There is no timeout: a command that never exits blocks the caller.

    Args:
        *cmd: Command and its arguments to run.

    Returns:
        A tuple of (stdout, stderr, returncode).

    Raises:
        CommandError: If the command cannot be started.
    """
    if not cmd:
        raise CommandError("No command given")

    start = time.perf_counter()
    log.debug("command_start", command=" ".join(cmd))

    process = await _spawn(*cmd, capture=True)
    out, err = await process.communicate()

    duration_ms = int((time.perf_counter() - start) * 1000)
    log.info(
        "command_complete",
        command=" ".join(cmd),
        returncode=process.returncode,
        duration_ms=duration_ms
    )

    return (
        out.decode(errors="replace").strip(),
        err.decode(errors="replace").strip(),
        process.returncode,
    )


async def run_checked(*cmd: str) -> str:
    """Run a command and fail unless it exits with status zero.

    Returns:
        The command's stdout.

    Raises:
        CommandError: If the command cannot be started or exits non-zero.
    """
    out, err, code = await run_capture(*cmd)

    if code != 0:
        log.error(
            "command_failed",
            command=" ".join(cmd),
            error=err or out,
            returncode=code
        )
        raise CommandError(command=" ".join(cmd), returncode=code, error=err or out)

    return out


async def run_passthrough(*cmd: str) -> int:
    """Run a command with the terminal's stdin/stdout/stderr.

    Raises:
        CommandError: If the command cannot be started or exits non-zero.
    """
    if not cmd:
        raise CommandError("No command given")

    start = time.perf_counter()
    process = await _spawn(*cmd, capture=False)
    code = await process.wait()
    duration_ms = int((time.perf_counter() - start) * 1000)
    log.info("passthrough_complete", command=" ".join(cmd), returncode=code, duration_ms=duration_ms)

    if code != 0:
        raise CommandError(command=" ".join(cmd), returncode=code)

    return code
