"""Renderers for displaying catalog and installed-set data with Rich."""

from typing import Iterable, Tuple

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from winpkg.core.models import Package

console = Console()


def search_table(pkgs: Iterable[Package]) -> Table:
    """Create a table of catalog entries, in catalog order.

    Args:
        pkgs: The descriptors to display.

    Returns:
        A Rich Table with one row per descriptor.
    """
    table = Table(title="Search Results", box=box.MINIMAL_HEAVY_HEAD)
    table.add_column("Name", style="bold")
    table.add_column("Version")
    table.add_column("Section", style="dim")
    table.add_column("Description")

    for p in pkgs:
        table.add_row(Text(p.name), Text(p.version), Text(p.section), Text(p.description))

    return table


def installed_table(items: Iterable[Tuple[str, str]]) -> Table:
    """Create a table of installed packages.

    Args:
        items: (name, version) pairs.

    Returns:
        A Rich Table with one row per installed package.
    """
    table = Table(title="Installed Packages", box=box.MINIMAL_HEAVY_HEAD)
    table.add_column("Name", style="bold")
    table.add_column("Version")

    for name, version in items:
        table.add_row(Text(name), Text(version))

    return table


def package_details(pkg: Package) -> Table:
    """Display every field of a descriptor.

    Args:
        pkg: The descriptor to display.

    Returns:
        A two-column Rich Table.
    """
    t = Table(box=box.MINIMAL_HEAVY_HEAD)
    t.add_column("Field", style="bold")
    t.add_column("Value")
    t.add_row("Name", Text(pkg.name))
    t.add_row("Version", Text(pkg.version))
    t.add_row("Installation", Text(pkg.installation))
    t.add_row("Description", Text(pkg.description))
    t.add_row("Install", Text(pkg.install_cmd))
    t.add_row("Section", Text(pkg.section))

    return t
