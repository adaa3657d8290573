"""Tests for catalog lookup, search and publishing."""

import pytest

from winpkg.core.catalog import Catalog
from winpkg.core.errors import PackageNotFoundError, UserError
from winpkg.core.models import Package


def test_find_without_version_returns_first_match(catalog):
    """Empty version resolves to the first entry, not the highest version."""
    pkg = catalog.find("pkgA")

    assert pkg.version == "1.0"
    assert catalog.find("pkgA", "") is pkg


def test_find_exact_version(catalog):
    """A non-empty version must match exactly."""
    assert catalog.find("pkgA", "2.0").install_cmd == "setup-a2.exe"


def test_find_does_not_rank_versions():
    """Insertion order wins even when a later entry looks newer."""
    catalog = Catalog([Package(name="tool", version="10.0"), Package(name="tool", version="9.0")])
    catalog.publish(Package(name="tool", version="11.0"))

    assert catalog.find("tool").version == "10.0"


def test_find_unknown_name(catalog):
    """Missing names raise PackageNotFoundError with context."""
    with pytest.raises(PackageNotFoundError) as exc_info:
        catalog.find("missing")

    assert isinstance(exc_info.value, UserError)
    assert exc_info.value.package == "missing"
    assert exc_info.value.context == {"package": "missing"}


def test_find_unknown_version(catalog):
    """A known name with an unknown version is still not found."""
    with pytest.raises(PackageNotFoundError, match="version 3.0"):
        catalog.find("pkgA", "3.0")


def test_find_name_is_exact(catalog):
    """find compares whole names, unlike search."""
    with pytest.raises(PackageNotFoundError):
        catalog.find("pkg")


def test_search_substring_in_catalog_order(catalog):
    """Search returns every entry containing the substring, in order."""
    found = catalog.search("pkg")

    assert [(p.name, p.version) for p in found] == [("pkgA", "1.0"), ("pkgA", "2.0"), ("pkgB", "0.3")]


def test_search_is_case_sensitive(catalog):
    """Substring matching respects case."""
    assert catalog.search("PKG") == []
    assert [p.name for p in catalog.search("B")] == ["pkgB"]


def test_search_no_match_is_empty(catalog):
    """No match is an empty result, not an error."""
    assert catalog.search("zzz") == []


def test_search_is_idempotent(catalog):
    """Repeated searches without mutation give identical results."""
    assert catalog.search("pkgA") == catalog.search("pkgA")


def test_publish_appends_duplicates():
    """Publishing never deduplicates, even identical descriptors."""
    catalog = Catalog()
    pkg = Package(name="dup", version="1.0")

    catalog.publish(pkg)
    catalog.publish(Package(name="dup", version="1.0"))

    assert len(catalog) == 2
    assert list(catalog)[0] is pkg


def test_publish_accepts_empty_descriptor():
    """No validation happens on publish."""
    catalog = Catalog()
    catalog.publish(Package())

    assert len(catalog) == 1
    assert catalog.search("") == [Package()]
