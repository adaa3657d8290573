"""winpkg: an interactive shell for a local package catalog."""

__version__ = "0.1.0"
