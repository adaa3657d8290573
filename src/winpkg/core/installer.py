"""Hand-off of install and uninstall requests to external tools."""

from __future__ import annotations

import asyncio
import os
import shlex
import time
from typing import Awaitable, Callable, List

from winpkg.core.errors import CommandError, InstallationError, UninstallationError
from winpkg.core.logging import get_logger
from winpkg.core.models import InstallMode, Package
from winpkg.core.shell import run_checked

log = get_logger(__name__)

Runner = Callable[..., Awaitable[str]]


def split_command(command: str) -> List[str]:
    """Split a shell-style command line into arguments."""
    return shlex.split(command, posix=os.name != "nt")


def install_command(package: Package, mode: InstallMode) -> List[str]:
    """Build the command line that installs `package` in `mode`."""
    if mode is InstallMode.PYTHON:
        return ["pip", "install", package.name]
    if mode is InstallMode.NUGET:
        return ["nuget", "install", package.name]
    if mode is InstallMode.GITHUB:
        return ["git", "clone", package.installation]
    return split_command(package.install_cmd)


def uninstall_command(name: str, mode: InstallMode) -> List[str]:
    """Build the command line that removes `name` in `mode`."""
    if mode is InstallMode.PYTHON:
        return ["pip", "uninstall", "-y", name]
    if mode is InstallMode.NUGET:
        return ["nuget", "uninstall", name]
    return ["msiexec", "/x", name, "/quiet"]


class Installer:
    """Runs installer commands and reports success or failure.

    Command output is not interpreted; only the exit status matters.
    """

    def __init__(self, runner: Runner = run_checked) -> None:
        self.runner = runner

    def _run(self, cmd: List[str]) -> None:
        asyncio.run(self.runner(*cmd))

    def install(self, package: Package, mode: InstallMode = InstallMode.DEFAULT) -> None:
        """Install `package` with the external tool for `mode`.

        Raises:
            InstallationError: If the tool cannot be run or fails.
        """
        try:
            cmd = install_command(package, mode)
        except ValueError as e:
            raise InstallationError(
                package.name, version=package.version, command=package.install_cmd, error=str(e)
            ) from e

        start = time.perf_counter()
        log.info(
            "install_start",
            package=package.name,
            version=package.version,
            mode=mode.name.lower(),
            command=" ".join(cmd),
        )

        try:
            if not cmd:
                raise CommandError("No install command", command=package.install_cmd)
            self._run(cmd)
        except CommandError as e:
            log.error("install_failed", package=package.name, error=str(e))
            raise InstallationError(
                package.name,
                version=package.version,
                command=e.context.get("command") or " ".join(cmd),
                returncode=e.context.get("returncode"),
                error=e.context.get("error") or e.message,
            ) from e

        duration_ms = int((time.perf_counter() - start) * 1000)
        log.info("install_complete", package=package.name, version=package.version, duration_ms=duration_ms)

    def uninstall(self, name: str, mode: InstallMode = InstallMode.DEFAULT) -> None:
        """Remove `name` with the external tool for `mode`.

        Raises:
            UninstallationError: If the tool cannot be run or fails.
        """
        cmd = uninstall_command(name, mode)
        start = time.perf_counter()
        log.info("uninstall_start", package=name, mode=mode.name.lower(), command=" ".join(cmd))

        try:
            self._run(cmd)
        except CommandError as e:
            log.error("uninstall_failed", package=name, error=str(e))
            raise UninstallationError(
                name,
                command=" ".join(cmd),
                returncode=e.context.get("returncode"),
                error=e.context.get("error") or e.message,
            ) from e

        duration_ms = int((time.perf_counter() - start) * 1000)
        log.info("uninstall_complete", package=name, duration_ms=duration_ms)
