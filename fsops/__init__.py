"""Filesystem operations, file status, directory iteration and path utilities."""

__version__ = "0.1.0"
__all__ = ["errors", "status", "directory", "operations", "paths"]