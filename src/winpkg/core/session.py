"""The session: one catalog, one installed set, and the installer."""

from __future__ import annotations

import asyncio
import time
from pathlib import Path
from typing import List, Tuple

from winpkg.core import codec
from winpkg.core.catalog import Catalog
from winpkg.core.config import Winpkg
from winpkg.core.errors import AlreadyInstalledError, CommandError, WinpkgError
from winpkg.core.installer import Installer, Runner, split_command
from winpkg.core.logging import get_logger
from winpkg.core.models import InstallMode, Package, UpdateResult
from winpkg.core.shell import run_passthrough
from winpkg.core.tracker import InstalledSet

log = get_logger(__name__)


class Session:
    """Owns the state every shell command works against.

    Each session starts from its own catalog and installed set, so two
    sessions never share state.
    """

    def __init__(
        self,
        catalog: Catalog | None = None,
        installed: InstalledSet | None = None,
        installer: Installer | None = None,
        passthrough: Runner = run_passthrough,
    ) -> None:
        self.catalog = catalog if catalog is not None else Catalog()
        self.installed = installed if installed is not None else InstalledSet()
        self.installer = installer if installer is not None else Installer()
        self.passthrough = passthrough

    def install(self, name: str, version: str = "", flag: str = "") -> Package:
        """Resolve `name` in the catalog, install it and record it.

        Args:
            name: Package name.
            version: Exact version, or "" for the first catalog match.
            flag: Installer flag such as "-python"; see InstallMode.

        Returns:
            The descriptor that was installed.

        Raises:
            PackageNotFoundError: If the catalog has no match.
            AlreadyInstalledError: If any version of `name` is installed.
            InstallationError: If the installer fails; nothing is recorded.
        """
        package = self.catalog.find(name, version)

        if self.installed.is_installed(name):
            raise AlreadyInstalledError(
                name,
                installed_version=self.installed.current_version(name),
                requested_version=package.version,
            )

        self.installer.install(package, InstallMode.from_flag(flag))
        self.installed.mark_installed(name, package.version)
        return package

    def uninstall(self, name: str, flag: str = "") -> str:
        """Uninstall `name` and drop its record.

        Returns:
            The version that was removed.

        Raises:
            NotInstalledError: If `name` is not installed.
            UninstallationError: If the uninstaller fails; the record stays.
        """
        version = self.installed.current_version(name)
        self.installer.uninstall(name, InstallMode.from_flag(flag))
        self.installed.mark_uninstalled(name)
        return version

    def list_installed(self) -> List[Tuple[str, str]]:
        return self.installed.items()

    def search(self, substring: str) -> List[Package]:
        return self.catalog.search(substring)

    def update(self, name: str) -> UpdateResult:
        """Move `name` to the version of its first catalog entry.

        The update is two steps, uninstall then install, with no rollback.
        If the install step fails the package is left uninstalled and the
        InstallationError propagates.

        Raises:
            NotInstalledError: If `name` is not installed.
            PackageNotFoundError: If the catalog has no entry for `name`.
            UninstallationError: If removing the old version fails.
            InstallationError: If installing the new version fails.
        """
        current = self.installed.current_version(name)
        latest = self.catalog.find(name)

        if latest.version == current:
            log.info("update_not_needed", package=name, version=current)
            return UpdateResult(name=name, previous_version=current, version=current)

        start = time.perf_counter()
        log.info("update_start", package=name, current=current, target=latest.version)

        self.uninstall(name)
        try:
            self.install(name, latest.version)
        except WinpkgError:
            log.warning("update_left_uninstalled", package=name, previous_version=current)
            raise

        duration_ms = int((time.perf_counter() - start) * 1000)
        log.info("update_complete", package=name, version=latest.version, duration_ms=duration_ms)
        return UpdateResult(name=name, previous_version=current, version=latest.version)

    def publish(self, path: Path | str) -> Package:
        """Read a descriptor file and append it to the catalog.

        Raises:
            DescriptorReadError: If the file cannot be read.
        """
        package = codec.read_descriptor(path)
        self.catalog.publish(package)
        return package

    def create(self, package: Package, path: Path | str | None = None) -> Path:
        """Add a newly authored package and save its descriptor file.

        Returns:
            The path the descriptor was written to.

        Raises:
            DescriptorWriteError: If the file cannot be written. The
                package stays in the catalog.
        """
        self.catalog.publish(package)
        target = Path(path) if path is not None else Path.cwd() / Winpkg.descriptor_file
        return codec.write_descriptor(package, target)

    def use(self, command: str) -> None:
        """Run a raw command with the terminal attached.

        Raises:
            CommandError: If the command cannot be run or fails.
        """
        try:
            args = split_command(command)
        except ValueError as e:
            raise CommandError("Could not parse command", command=command, error=str(e)) from e

        log.info("use_command", command=command)
        asyncio.run(self.passthrough(*args))
