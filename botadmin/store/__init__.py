"""Flat-file persistence: JSON arrays and product text files."""

from botadmin.store.flat_file import FlatFileStore, LoadResult

__all__ = [
    "FlatFileStore",
    "LoadResult",
]
