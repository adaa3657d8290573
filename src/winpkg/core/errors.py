"""Module defining custom exceptions for the winpkg application."""

from __future__ import annotations

from typing import Any, Self

# Exit Codes
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1
EXIT_SYSTEM_ERROR = 2


class WinpkgError(Exception):
    """Base exception class with context propagation.

    All exceptions in winpkg should inherit from this class.
    Context is a dictionary that accumulates relevant information
    as the exception propagates up the call stack.

    Example:
        raise WinpkgError("An error occurred", context={"package": "foo"})

        # Or with context propagation
        try:
            ...
        except WinpkgError as e:
            raise e.with_context(operation="update")
    """
    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def with_context(self, **new_context: Any) -> Self:
        """Merge additional context into the exception and return it.

        Args:
            **new_context: Additional context to add to the exception.

        Returns:
            The same exception instance with merged context.
        """
        self.context.update(new_context)
        return self

    def __str__(self) -> str:
        """String representation of the exception including context."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{context_str}]"
        return self.message


class UserError(WinpkgError):
    """Errors caused by user actions or inputs.

    These errors indicate that the user asked for something the catalog or
    the installed set cannot satisfy, and should not be repeated without
    correction.
    """
    pass


class SystemError(WinpkgError):
    """Errors due to system-level issues.

    External tools failing, missing executables, and unreadable or
    unwritable files. The shell reports them and keeps running.
    """
    pass


## Specific Exceptions ##

class PackageNotFoundError(UserError):
    """No catalog entry matches the requested name (and version)."""
    def __init__(
        self,
        message: str | None = None,
        package: str | None = None,
        version: str | None = None,
        context: dict[str, Any] | None = None
    ) -> None:
        """Initialise PackageNotFoundError with detailed context.

        Args:
            message: Optional custom error message.
            package: The name of the package that was not found.
            version: The requested version, if one was given.
            context: Additional context information.
        """
        ctx = context or {}
        if package:
            ctx["package"] = package
        if version:
            ctx["version"] = version

        if message is None:
            version_str = f" version {version}" if version else ""
            message = f"Package '{package or 'unknown'}'{version_str} not found"

        super().__init__(message, context=ctx)
        self.package = package or ""
        self.version = version or ""


class AlreadyInstalledError(UserError):
    """Install requested for a name that already has an installed version."""
    def __init__(
        self,
        package: str,
        installed_version: str | None = None,
        requested_version: str | None = None,
        context: dict[str, Any] | None = None
    ) -> None:
        ctx = context or {}
        ctx["package"] = package
        if installed_version is not None:
            ctx["installed_version"] = installed_version
        if requested_version:
            ctx["requested_version"] = requested_version

        super().__init__(f"Package already installed: {package}", context=ctx)
        self.package = package
        self.installed_version = installed_version
        self.requested_version = requested_version


class NotInstalledError(UserError):
    """Uninstall, update or version query on a name that is not installed."""
    def __init__(self, package: str, context: dict[str, Any] | None = None) -> None:
        ctx = context or {}
        ctx["package"] = package

        super().__init__(f"Package not installed: {package}", context=ctx)
        self.package = package


class CommandError(SystemError):
    """An external command could not be started or exited non-zero."""
    def __init__(
        self,
        message: str | None = None,
        command: str | None = None,
        returncode: int | None = None,
        error: str | None = None,
        context: dict[str, Any] | None = None
    ) -> None:
        """Initialise CommandError with detailed context.

        Args:
            message: Optional custom error message.
            command: The command line that was executed.
            returncode: The exit code returned by the command.
            error: The error output from the command.
            context: Additional context information.
        """
        ctx = context or {}
        if command:
            ctx["command"] = command
        if returncode is not None:
            ctx["returncode"] = returncode
        if error:
            ctx["error"] = error

        if message is None:
            message = f"Command failed with exit code {returncode if returncode is not None else 'unknown'}"

        super().__init__(message, context=ctx)
        self.command = command
        self.returncode = returncode


class InstallationError(SystemError):
    """The external installer reported failure; nothing was recorded."""
    def __init__(
        self,
        package: str,
        version: str | None = None,
        command: str | None = None,
        returncode: int | None = None,
        error: str | None = None,
        context: dict[str, Any] | None = None
    ) -> None:
        ctx = context or {}
        ctx["package"] = package
        if version:
            ctx["version"] = version
        if command:
            ctx["command"] = command
        if returncode is not None:
            ctx["returncode"] = returncode
        ctx["error"] = error or ""

        super().__init__(f"Error during installation of {package}", context=ctx)
        self.package = package
        self.version = version


class UninstallationError(SystemError):
    """The external uninstaller reported failure; the record is kept."""
    def __init__(
        self,
        package: str,
        command: str | None = None,
        returncode: int | None = None,
        error: str | None = None,
        context: dict[str, Any] | None = None
    ) -> None:
        ctx = context or {}
        ctx["package"] = package
        if command:
            ctx["command"] = command
        if returncode is not None:
            ctx["returncode"] = returncode
        ctx["error"] = error or ""

        super().__init__(f"Error during uninstallation of {package}", context=ctx)
        self.package = package


class DescriptorError(UserError):
    """A descriptor is missing fields (strict decoding only)."""
    def __init__(
        self,
        missing: list[str],
        context: dict[str, Any] | None = None
    ) -> None:
        ctx = context or {}
        ctx["missing"] = ", ".join(missing)

        super().__init__("Descriptor is incomplete", context=ctx)
        self.missing = missing


class DescriptorReadError(SystemError):
    """A descriptor file could not be read."""
    def __init__(self, path: str, error: str | None = None) -> None:
        super().__init__(
            "Error reading file", context={"path": path, "error": error or ""}
        )
        self.path = path


class DescriptorWriteError(SystemError):
    """A descriptor file could not be written."""
    def __init__(self, path: str, error: str | None = None) -> None:
        super().__init__(
            "Error saving descriptor file", context={"path": path, "error": error or ""}
        )
        self.path = path


# CLI Error Message Templates

ERROR_TEMPLATES = {
    PackageNotFoundError: (
        "❌ Package Not Found: {package}"
    ),
    AlreadyInstalledError: (
        "❌ Package already installed: {package} ({installed_version})\n"
        "   Use 'update {package}' or 'uninstall {package}' first"
    ),
    NotInstalledError: (
        "❌ Package not installed: {package}"
    ),
    InstallationError: (
        "⚠️ Error during installation of {package}: {command}\n"
        "   Exit Code: {returncode}\n"
        "   Error: {error}"
    ),
    UninstallationError: (
        "⚠️ Error during uninstallation of {package}: {command}\n"
        "   Exit Code: {returncode}\n"
        "   Error: {error}"
    ),
    CommandError: (
        "⚠️ Error during command execution: {command}\n"
        "   Exit Code: {returncode}"
    ),
    DescriptorError: (
        "❌ Descriptor is incomplete, missing: {missing}"
    ),
    DescriptorReadError: (
        "⚠️ Error reading file: {path}\n"
        "   {error}"
    ),
    DescriptorWriteError: (
        "⚠️ Error saving descriptor file: {path}\n"
        "   {error}"
    ),
    UserError: (
        "❌ {message}"
    ),
    SystemError: (
        "⚠️ System error: {message}\n"
        "   Please check your system configuration and try again"
    ),
    WinpkgError: (
        "❌ {message}"
    ),
}

def format_error_message(error: WinpkgError) -> str:
    """Formats an error message for CLI display based on the error type.

    Args:
        error: The WinpkgError instance to format.

    Returns:
        A formatted string message for CLI display.
    """
    template = ERROR_TEMPLATES.get(type(error), ERROR_TEMPLATES[WinpkgError])
    try:
        return template.format(message=error.message, **error.context)
    except KeyError:
        return f"❌ {error.message}"

def suggest_search(package_name: str) -> str:
    """Suggest a search command for a missing package.

    Args:
        package_name: The name of the missing package.

    Returns:
        Formatted search suggestion string.
    """
    return (
        f"\n💡 Suggestions:\n"
        f"   • Try 'search {package_name}'\n"
        "   • Check for spelling and try again\n"
        "   • Publish a descriptor with 'publish <file>'\n"
    )
