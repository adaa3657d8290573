"""Shared fixtures for winpkg tests."""

import os
import tempfile

# Keep log files out of the real home directory; must run before winpkg imports.
os.environ.setdefault("WINPKG_HOME", tempfile.mkdtemp(prefix="winpkg-test-"))

import pytest  # noqa: E402

from winpkg.core.catalog import Catalog  # noqa: E402
from winpkg.core.errors import CommandError  # noqa: E402
from winpkg.core.installer import Installer  # noqa: E402
from winpkg.core.models import Package  # noqa: E402
from winpkg.core.session import Session  # noqa: E402


class FakeRunner:
    """Records commands instead of running them; fails on request."""

    def __init__(self):
        self.calls = []
        self.fail_on = set()

    async def __call__(self, *cmd):
        self.calls.append(list(cmd))
        if cmd and cmd[0] in self.fail_on:
            raise CommandError(command=" ".join(cmd), returncode=1, error="boom")
        return ""


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def catalog():
    return Catalog(
        [
            Package(name="pkgA", version="1.0", install_cmd="setup-a.exe /S", section="tools"),
            Package(name="pkgA", version="2.0", install_cmd="setup-a2.exe", section="tools"),
            Package(
                name="pkgB",
                version="0.3",
                installation="https://github.com/org/pkgB",
                install_cmd="setup-b.exe",
                description="The B package",
            ),
        ]
    )


@pytest.fixture
def session(catalog, runner):
    return Session(catalog=catalog, installer=Installer(runner=runner), passthrough=runner)
