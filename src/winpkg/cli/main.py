"""CLI entry point for the winpkg shell."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import typer

from winpkg.cli.renderers import console, package_details
from winpkg.cli.repl import Shell, handle_error, prompt_package
from winpkg.core import codec
from winpkg.core.config import Winpkg
from winpkg.core.logging import configure_logging, get_logger
from winpkg.core.session import Session

log = get_logger(__name__)

app = typer.Typer(help="winpkg: an interactive package catalog shell.")


@app.callback()
def main(
    log_level: str = typer.Option(
        Winpkg.log_level, "--log-level", "-l", help="DEBUG | INFO | WARNING | ERROR"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Also log to stderr"),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(level=log_level, enable_console=verbose, force=True)


@app.command()
def shell(
    seed: Optional[List[Path]] = typer.Option(
        None, "--seed", "-s", help="Descriptor file to publish before the shell starts"
    ),
    create: bool = typer.Option(
        True, "--create/--no-create", help="Offer to author a package when the catalog is empty"
    ),
) -> None:
    """Start the interactive shell.

    Args:
        seed: Descriptor files published in the given order.
        create: Whether to offer package authoring on an empty catalog.
    """
    session = Session()
    try:
        for path in seed or []:
            session.publish(path)
    except Exception as e:
        sys.exit(handle_error(e))

    log.info("shell_start", catalog_size=len(session.catalog))
    Shell(session).run(offer_create=create)


@app.command()
def new(
    output: Path = typer.Option(
        Path(Winpkg.descriptor_file), "--output", "-o", help="Where to write the descriptor"
    ),
) -> None:
    """Author a package descriptor interactively.

    Args:
        output: Path of the descriptor file to write.
    """
    try:
        package = prompt_package(console)
        codec.write_descriptor(package, output)
        console.print(f"Package information saved to {output}.", markup=False)
    except Exception as e:
        sys.exit(handle_error(e))


@app.command()
def show(
    path: Path,
    strict: bool = typer.Option(False, "--strict", help="Fail when a field is missing"),
) -> None:
    """Decode a descriptor file and display its fields.

    Args:
        path: The descriptor file.
        strict: Require all six fields.
    """
    try:
        package = codec.read_descriptor(path, strict=strict)
        console.print(package_details(package))
    except Exception as e:
        sys.exit(handle_error(e))


if __name__ == "__main__":
    app()
