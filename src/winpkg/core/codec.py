"""Reading and writing the six-line package descriptor format.

A descriptor looks like::

    *Name*: example
    *Version*: 1.0
    *Installation*: https://example.org/example.msi
    *Description*: An example package
    *Install*: example-setup.exe
    *Section*: tools
"""

from __future__ import annotations

from pathlib import Path

from winpkg.core.errors import DescriptorError, DescriptorReadError, DescriptorWriteError
from winpkg.core.logging import get_logger
from winpkg.core.models import Package

log = get_logger(__name__)

# (label, Package attribute) in the order fields are written.
FIELDS = (
    ("Name", "name"),
    ("Version", "version"),
    ("Installation", "installation"),
    ("Description", "description"),
    ("Install", "install_cmd"),
    ("Section", "section"),
)

# Order in which lines are matched while decoding.
_DECODE_ORDER = ("Name", "Installation", "Description", "Install", "Section", "Version")
_ATTRS = dict(FIELDS)


def _marker(label: str) -> str:
    return f"*{label}*:"


def encode(package: Package) -> str:
    """Render a package as descriptor text, one newline-terminated line per field."""
    return "".join(
        f"{_marker(label)} {getattr(package, attr)}\n" for label, attr in FIELDS
    )


def decode(text: str, strict: bool = False) -> Package:
    """Parse descriptor text into a package.

    Decoding is best-effort: unknown lines are skipped and missing fields
    stay empty. With `strict` set, missing fields raise instead.

    Args:
        text: Descriptor text.
        strict: Require all six fields to be present.

    Returns:
        The decoded package.

    Raises:
        DescriptorError: In strict mode, when any field is missing.
    """
    package = Package()
    seen: set[str] = set()

    for line in text.split("\n"):
        line = line.strip()
        for label in _DECODE_ORDER:
            marker = _marker(label)
            if line.startswith(marker):
                if line == marker:
                    value = ""
                else:
                    value = line.removeprefix(marker + " ")
                setattr(package, _ATTRS[label], value)
                seen.add(label)
                break

    if strict:
        missing = [label for label, _ in FIELDS if label not in seen]
        if missing:
            raise DescriptorError(missing)

    if len(seen) < len(FIELDS):
        log.debug("descriptor_partial", package=package.name, fields=sorted(seen))

    return package


def read_descriptor(path: Path | str, strict: bool = False) -> Package:
    """Read and decode a descriptor file.

    Raises:
        DescriptorReadError: If the file cannot be read.
        DescriptorError: In strict mode, when any field is missing.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError, ValueError) as e:
        log.error("descriptor_read_failed", path=str(path), error=str(e))
        raise DescriptorReadError(str(path), error=str(e)) from e

    try:
        return decode(text, strict=strict)
    except DescriptorError as e:
        raise e.with_context(path=str(path))


def write_descriptor(package: Package, path: Path | str) -> Path:
    """Encode a package and write it to `path`.

    Raises:
        DescriptorWriteError: If the file cannot be written.
    """
    path = Path(path)
    try:
        path.write_text(encode(package), encoding="utf-8")
    except (OSError, ValueError) as e:
        log.error("descriptor_write_failed", path=str(path), error=str(e))
        raise DescriptorWriteError(str(path), error=str(e)) from e

    log.info("descriptor_written", package=package.name, path=str(path))
    return path
