"""Tracking of which package versions are installed."""

from __future__ import annotations

from typing import Dict, List, Tuple

from winpkg.core.errors import AlreadyInstalledError, NotInstalledError
from winpkg.core.logging import get_logger

log = get_logger(__name__)


class InstalledSet:
    """Mapping of installed package name to installed version.

    Holds at most one version per name. A second install of a tracked
    name is rejected whatever version it asks for.
    """

    def __init__(self) -> None:
        self._installed: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._installed)

    def __contains__(self, name: object) -> bool:
        return name in self._installed

    def is_installed(self, name: str) -> bool:
        return name in self._installed

    def mark_installed(self, name: str, version: str) -> None:
        """Record `name` as installed at `version`.

        Raises:
            AlreadyInstalledError: If `name` already has a record.
        """
        if name in self._installed:
            raise AlreadyInstalledError(
                name,
                installed_version=self._installed[name],
                requested_version=version,
            )

        self._installed[name] = version
        log.info("package_marked_installed", package=name, version=version)

    def mark_uninstalled(self, name: str) -> None:
        """Drop the record for `name`.

        Raises:
            NotInstalledError: If `name` has no record.
        """
        if name not in self._installed:
            raise NotInstalledError(name)

        version = self._installed.pop(name)
        log.info("package_marked_uninstalled", package=name, version=version)

    def current_version(self, name: str) -> str:
        """Return the installed version of `name`.

        Raises:
            NotInstalledError: If `name` has no record.
        """
        try:
            return self._installed[name]
        except KeyError:
            raise NotInstalledError(name) from None

    def items(self) -> List[Tuple[str, str]]:
        """Installed (name, version) pairs in install order."""
        return list(self._installed.items())
