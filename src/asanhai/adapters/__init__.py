"""Adapters - I/O implementations of ports."""

from .file_state import FileStateStore, StorageError

__all__ = [
    "FileStateStore",
    "StorageError",
]
