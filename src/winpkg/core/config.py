"""Configuration module for the winpkg environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DESCRIPTOR_FILE = "winpkg.infoi"


@dataclass
class WinpkgENV:
    """Configuration for the winpkg environment."""
    home: Path
    log_dir: Path
    log_level: str
    descriptor_file: str = DESCRIPTOR_FILE


def discover_env() -> WinpkgENV:
    """Discover the winpkg environment from environment variables."""
    home = Path(os.environ.get("WINPKG_HOME") or Path.home() / ".winpkg")
    level = os.environ.get("WINPKG_LOG_LEVEL", "INFO").upper()

    return WinpkgENV(home=home, log_dir=home / "logs", log_level=level)

Winpkg = discover_env()
