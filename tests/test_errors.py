"""Tests for error context and CLI message formatting."""

from winpkg.core.errors import (
    AlreadyInstalledError,
    InstallationError,
    NotInstalledError,
    PackageNotFoundError,
    SystemError,
    UserError,
    WinpkgError,
    format_error_message,
    suggest_search,
)


def test_str_includes_context():
    """String form appends context as key=value pairs."""
    err = WinpkgError("Something failed", context={"package": "foo"})

    assert str(err) == "Something failed [package=foo]"
    assert str(WinpkgError("plain")) == "plain"


def test_with_context_merges():
    """with_context adds keys and returns the same instance."""
    err = NotInstalledError("foo")

    assert err.with_context(operation="update") is err
    assert err.context == {"package": "foo", "operation": "update"}


def test_error_categories():
    """Error kinds sort into user and system errors."""
    assert isinstance(PackageNotFoundError(package="a"), UserError)
    assert isinstance(AlreadyInstalledError("a"), UserError)
    assert isinstance(NotInstalledError("a"), UserError)
    assert isinstance(InstallationError("a"), SystemError)


def test_not_found_message():
    """Default message names package and version."""
    err = PackageNotFoundError(package="pkgA", version="3.0")

    assert err.message == "Package 'pkgA' version 3.0 not found"
    assert format_error_message(err) == "❌ Package Not Found: pkgA"


def test_already_installed_template():
    """Templates are filled from the structured context."""
    err = AlreadyInstalledError("pkgA", installed_version="1.0", requested_version="2.0")

    message = format_error_message(err)

    assert "pkgA (1.0)" in message
    assert "update pkgA" in message


def test_installation_template():
    """Installer failures show command, exit code and error text."""
    err = InstallationError("pkgA", command="pip install pkgA", returncode=2, error="no network")

    message = format_error_message(err)

    assert "pip install pkgA" in message
    assert "Exit Code: 2" in message
    assert "no network" in message


def test_format_falls_back_on_missing_keys():
    """A template whose keys are absent falls back to the plain message."""
    err = AlreadyInstalledError("pkgA")

    assert format_error_message(err) == "❌ Package already installed: pkgA"


def test_suggest_search():
    """Suggestions mention the search command."""
    assert "search pkgA" in suggest_search("pkgA")
