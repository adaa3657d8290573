"""Data models for catalog packages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class InstallMode(Enum):
    """How a package is handed to the external installer."""

    DEFAULT = ""
    PYTHON = "-python"
    NUGET = "-nuget"
    GITHUB = "-github"

    @classmethod
    def from_flag(cls, flag: str | None) -> InstallMode:
        """Map a command-line flag to a mode; unknown flags mean DEFAULT."""
        for mode in cls:
            if mode.value and mode.value == flag:
                return mode
        return cls.DEFAULT


@dataclass
class Package:
    """Describes one package at one version.

    `installation` is a local path or a remote URL, interpreted by the
    install mode. `install_cmd` is the command run for DEFAULT installs.
    """

    name: str = ""
    version: str = ""
    installation: str = ""
    description: str = ""
    install_cmd: str = ""
    section: str = ""


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of an update request."""

    name: str
    previous_version: str
    version: str

    @property
    def updated(self) -> bool:
        return self.previous_version != self.version
