"""The catalog of known package descriptors."""

from __future__ import annotations

from typing import Iterable, Iterator, List

from winpkg.core.errors import PackageNotFoundError
from winpkg.core.logging import get_logger
from winpkg.core.models import Package

log = get_logger(__name__)


class Catalog:
    """Ordered collection of package descriptors.

    Entries are only ever appended. Several entries may share a name, and
    even a (name, version) pair; lookups resolve to the first match in
    insertion order and never rank versions.
    """

    def __init__(self, packages: Iterable[Package] | None = None) -> None:
        self._packages: List[Package] = list(packages or [])

    def __len__(self) -> int:
        return len(self._packages)

    def __iter__(self) -> Iterator[Package]:
        return iter(self._packages)

    def find(self, name: str, version: str = "") -> Package:
        """Resolve a descriptor by name and optional exact version.

        Args:
            name: Package name, compared for equality.
            version: Exact version to match, or "" for the first entry
                with the given name.

        Returns:
            The first matching descriptor.

        Raises:
            PackageNotFoundError: If no entry matches.
        """
        for pkg in self._packages:
            if pkg.name == name and (not version or pkg.version == version):
                log.debug("catalog_resolved", package=name, version=pkg.version)
                return pkg

        log.info("catalog_miss", package=name, version=version or None)
        raise PackageNotFoundError(package=name, version=version)

    def search(self, substring: str) -> List[Package]:
        """Return every descriptor whose name contains `substring`.

        Matching is case-sensitive and results keep catalog order.
        """
        found = [pkg for pkg in self._packages if substring in pkg.name]
        log.debug("catalog_search", query=substring, count=len(found))
        return found

    def publish(self, package: Package) -> None:
        """Append a descriptor to the end of the catalog."""
        self._packages.append(package)
        log.info(
            "catalog_published",
            package=package.name,
            version=package.version,
            size=len(self._packages),
        )
