"""Tests for installer command construction and failure mapping."""

import pytest

from winpkg.core.errors import InstallationError, SystemError, UninstallationError
from winpkg.core.installer import Installer, install_command, uninstall_command
from winpkg.core.models import InstallMode, Package

PKG = Package(
    name="pkgB",
    version="0.3",
    installation="https://github.com/org/pkgB",
    install_cmd='setup-b.exe /D "Program Files"',
)


@pytest.mark.parametrize(
    "flag, mode",
    [
        ("-python", InstallMode.PYTHON),
        ("-nuget", InstallMode.NUGET),
        ("-github", InstallMode.GITHUB),
        ("", InstallMode.DEFAULT),
        ("-unknown", InstallMode.DEFAULT),
        (None, InstallMode.DEFAULT),
    ],
)
def test_mode_from_flag(flag, mode):
    """Flags map to modes; anything unknown falls back to DEFAULT."""
    assert InstallMode.from_flag(flag) is mode


def test_install_commands():
    """Each mode hands off the expected command line."""
    assert install_command(PKG, InstallMode.PYTHON) == ["pip", "install", "pkgB"]
    assert install_command(PKG, InstallMode.NUGET) == ["nuget", "install", "pkgB"]
    assert install_command(PKG, InstallMode.GITHUB) == ["git", "clone", "https://github.com/org/pkgB"]
    assert install_command(PKG, InstallMode.DEFAULT)[0] == "setup-b.exe"


def test_uninstall_commands():
    """Uninstall uses the tool for the mode, msiexec otherwise."""
    assert uninstall_command("pkgB", InstallMode.PYTHON) == ["pip", "uninstall", "-y", "pkgB"]
    assert uninstall_command("pkgB", InstallMode.NUGET) == ["nuget", "uninstall", "pkgB"]
    assert uninstall_command("pkgB", InstallMode.GITHUB) == ["msiexec", "/x", "pkgB", "/quiet"]
    assert uninstall_command("pkgB", InstallMode.DEFAULT) == ["msiexec", "/x", "pkgB", "/quiet"]


def test_install_runs_one_command(runner):
    """A GitHub install clones exactly once."""
    Installer(runner=runner).install(PKG, InstallMode.GITHUB)

    assert runner.calls == [["git", "clone", "https://github.com/org/pkgB"]]


def test_install_failure_maps_to_installation_error(runner):
    """A failing tool becomes InstallationError with command context."""
    runner.fail_on.add("pip")

    with pytest.raises(InstallationError) as exc_info:
        Installer(runner=runner).install(PKG, InstallMode.PYTHON)

    err = exc_info.value
    assert isinstance(err, SystemError)
    assert err.context["package"] == "pkgB"
    assert err.context["command"] == "pip install pkgB"
    assert err.context["returncode"] == 1
    assert err.context["error"] == "boom"


def test_install_without_command(runner):
    """A DEFAULT install with no install command fails without running anything."""
    with pytest.raises(InstallationError):
        Installer(runner=runner).install(Package(name="x", version="1"))

    assert runner.calls == []


def test_install_with_unparseable_command(runner):
    """Unbalanced quotes are reported as an installation failure."""
    with pytest.raises(InstallationError):
        Installer(runner=runner).install(Package(name="x", install_cmd='setup "oops'))

    assert runner.calls == []


def test_uninstall_failure_maps_to_uninstallation_error(runner):
    """A failing uninstaller becomes UninstallationError."""
    runner.fail_on.add("msiexec")

    with pytest.raises(UninstallationError) as exc_info:
        Installer(runner=runner).uninstall("pkgB")

    assert exc_info.value.context["command"] == "msiexec /x pkgB /quiet"
