"""The interactive winpkg shell."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List

from rich.console import Console
from rich.prompt import Confirm, Prompt

from winpkg.cli.renderers import console as default_console
from winpkg.cli.renderers import installed_table, search_table
from winpkg.core.errors import (
    EXIT_SYSTEM_ERROR,
    EXIT_USER_ERROR,
    PackageNotFoundError,
    SystemError,
    WinpkgError,
    format_error_message,
    suggest_search,
)
from winpkg.core.logging import get_logger
from winpkg.core.models import Package
from winpkg.core.session import Session

log = get_logger(__name__)

PROMPT = "winpkg> "

HELP = """\
Commands:
  install <name> [version] [flag]   install a package (-python, -nuget, -github)
  uninstall <name> [flag]           uninstall a package (-python, -nuget)
  list                              show installed packages
  search <text>                     search the catalog by name
  update <name>                     move a package to its catalog version
  use <command>                     run a command
  publish <file>                    add a descriptor file to the catalog
  exit                              leave the shell"""

USAGE = {
    "install": "Please provide a package name.",
    "uninstall": "Please provide a package name.",
    "search": "Please provide a package name to search.",
    "update": "Please provide a package name to update.",
    "use": "Please provide a command to use.",
    "publish": "Please provide a winpkg.infoi file.",
}


def handle_error(error: Exception, out: Console = default_console) -> int:
    """Report an error and return the matching exit code.

    Args:
        error: The exception to report.
        out: Console to print to.

    Returns:
        An integer exit code.
    """
    if isinstance(error, WinpkgError):
        log.error(
            "cli_error",
            error_type=type(error).__name__,
            message=error.message,
            context=error.context,
        )
        out.print(format_error_message(error), style="bold red", markup=False)

        if isinstance(error, PackageNotFoundError):
            out.print(suggest_search(error.package), style="dim", markup=False)

        if isinstance(error, SystemError):
            return EXIT_SYSTEM_ERROR
        return EXIT_USER_ERROR

    log.error("unexpected_error", error=str(error), exc_info=True)
    out.print(f"⚠️ Unexpected error occurred: {error}", style="bold red", markup=False)
    return EXIT_SYSTEM_ERROR


def prompt_package(out: Console) -> Package:
    """Ask for each descriptor field in turn."""
    out.print("Enter the package details:")
    return Package(
        name=Prompt.ask("Name", console=out),
        version=Prompt.ask("Version", console=out),
        installation=Prompt.ask("Installation File", console=out, default=""),
        description=Prompt.ask("Description", console=out, default=""),
        install_cmd=Prompt.ask("Install Command", console=out, default=""),
        section=Prompt.ask("Section", console=out, default=""),
    )


class Shell:
    """Reads commands line by line and runs them against a session.

    Errors from a command are reported and the loop carries on; only the
    end of input stops it.
    """

    def __init__(
        self,
        session: Session,
        console: Console = default_console,
        read_line: Callable[[], str] | None = None,
    ) -> None:
        self.session = session
        self.console = console
        self.read_line = read_line or (lambda: self.console.input(PROMPT))
        self.commands: Dict[str, Callable[[List[str]], None]] = {
            "install": self.do_install,
            "uninstall": self.do_uninstall,
            "list": self.do_list,
            "search": self.do_search,
            "update": self.do_update,
            "use": self.do_use,
            "publish": self.do_publish,
            "help": self.do_help,
        }

    def run(self, offer_create: bool = True) -> None:
        """Run the read-dispatch loop until `exit` or end of input."""
        if offer_create and len(self.session.catalog) == 0:
            self.offer_create()

        while True:
            try:
                line = self.read_line()
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                break
            if not self.dispatch(line):
                break

        log.info("shell_exit")

    def offer_create(self, path: Path | None = None) -> None:
        """Offer to author a package when the catalog is empty."""
        if not Confirm.ask(
            "No packages found. Would you like to create a new package?", console=self.console
        ):
            return

        try:
            target = self.session.create(prompt_package(self.console), path)
        except Exception as e:
            handle_error(e, self.console)
            return
        self.console.print("Package created successfully!")
        self.console.print(f"Package information saved to {target}.", markup=False)

    def dispatch(self, line: str) -> bool:
        """Run one command line.

        Returns:
            False when the shell should stop, True otherwise.
        """
        args = line.split()
        if not args:
            return True

        command, rest = args[0], args[1:]
        if command in ("exit", "quit"):
            return False

        handler = self.commands.get(command)
        if handler is None:
            self.console.print("Unknown command.")
            return True

        if command in USAGE and not rest:
            self.console.print(USAGE[command])
            return True

        log.debug("shell_command", command=command, args=rest)
        try:
            handler(rest)
        except Exception as e:
            handle_error(e, self.console)

        return True

    def do_install(self, args: List[str]) -> None:
        name, version, flag = args[0], "", ""
        for arg in args[1:]:
            if arg.startswith("-"):
                flag = flag or arg
            elif not version:
                version = arg

        package = self.session.install(name, version, flag)
        self.console.print(
            f"Package {package.name} ({package.version}) installed successfully.", markup=False
        )

    def do_uninstall(self, args: List[str]) -> None:
        name = args[0]
        flag = args[1] if len(args) > 1 else ""
        self.session.uninstall(name, flag)
        self.console.print(f"Package {name} uninstalled successfully.", markup=False)

    def do_list(self, args: List[str]) -> None:
        items = self.session.list_installed()
        if not items:
            self.console.print("No packages installed.")
            return
        self.console.print(installed_table(items))

    def do_search(self, args: List[str]) -> None:
        query = args[0]
        found = self.session.search(query)
        if not found:
            self.console.print(f"No packages found for {query}", markup=False)
            return
        self.console.print(search_table(found))

    def do_update(self, args: List[str]) -> None:
        name = args[0]
        result = self.session.update(name)
        if not result.updated:
            self.console.print(f"Already using the latest version of {name}", markup=False)
            return
        self.console.print(
            f"Package {name} updated from {result.previous_version} to {result.version}.",
            markup=False,
        )

    def do_use(self, args: List[str]) -> None:
        self.session.use(" ".join(args))

    def do_publish(self, args: List[str]) -> None:
        package = self.session.publish(args[0])
        self.console.print(
            f"Published Package: {package.name} version {package.version}", markup=False
        )

    def do_help(self, args: List[str]) -> None:
        self.console.print(HELP, markup=False)
