"""Flat-file store: whole-file JSON arrays and per-product text files under one data directory.

Every JSON file holds a single array. Writes go to a temp file in the same
directory and are swapped in with os.replace, so a crash never leaves a
half-written file behind. One asyncio.Lock per filename serializes
read-modify-write sequences inside the process.
"""

import asyncio
import json
import os
import tempfile
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, AsyncIterator

from botadmin.config import PRODUCT_SUFFIX
from botadmin.utils.logger import get_logger

logger = get_logger("botadmin.store.flat_file")


@dataclass
class LoadResult:
    """Items read from a JSON array file. error is set when the file existed but could not be decoded."""

    items: list[Any] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _atomic_write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


class FlatFileStore:
    """JSON arrays in data_dir, product texts in products_dir."""

    def __init__(self, data_dir: str | Path, products_dir: str | Path | None = None):
        self._data_dir = Path(data_dir)
        self._products_dir = Path(products_dir) if products_dir else self._data_dir / "produk"
        self._locks: dict[str, asyncio.Lock] = {}

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def products_dir(self) -> Path:
        return self._products_dir

    def ensure_dirs(self) -> None:
        """Create data and products directories. Errors propagate: the console cannot run without them."""
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._products_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(
            "store.ensure_dirs",
            data_dir=str(self._data_dir),
            products_dir=str(self._products_dir),
        )

    def _lock_for(self, name: str) -> asyncio.Lock:
        lock = self._locks.get(name)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[name] = lock
        return lock

    @asynccontextmanager
    async def locked(self, name: str) -> AsyncIterator[None]:
        """Hold the exclusive writer lock for one file."""
        async with self._lock_for(name):
            yield

    # --- JSON arrays ---

    def path_for(self, name: str) -> Path:
        return self._data_dir / name

    def load_array(self, name: str) -> LoadResult:
        """Read a JSON array. Missing file -> empty. Undecodable or non-array -> empty with error (logged)."""
        path = self.path_for(name)
        if not path.exists():
            logger.debug("store.file_missing", path=str(path))
            return LoadResult()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("store.decode_error", path=str(path), error=str(e))
            return LoadResult(error=f"invalid JSON: {e}")
        if not isinstance(data, list):
            logger.warning("store.decode_error", path=str(path), error="not_an_array", found=type(data).__name__)
            return LoadResult(error=f"expected a JSON array, found {type(data).__name__}")
        return LoadResult(items=data)

    def save_array(self, name: str, items: list[Any]) -> None:
        """Overwrite the file with items (indent=2)."""
        path = self.path_for(name)
        _atomic_write_text(path, json.dumps(items, indent=2, ensure_ascii=False))
        logger.info("store.saved", path=str(path), count=len(items))

    # --- Product texts ---

    def _product_path(self, name: str) -> Path:
        return self._products_dir / f"{name}{PRODUCT_SUFFIX}"

    def list_names(self) -> list[str]:
        """Product names: *.txt files in the products directory without the suffix."""
        if not self._products_dir.is_dir():
            return []
        return sorted(
            p.name[: -len(PRODUCT_SUFFIX)]
            for p in self._products_dir.iterdir()
            if p.is_file() and p.name.endswith(PRODUCT_SUFFIX)
        )

    def load_text(self, name: str) -> str:
        """Product content, or "" when the file is missing or unreadable."""
        path = self._product_path(name)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ""
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("store.text_read_error", path=str(path), error=str(e))
            return ""

    def save_text(self, name: str, content: str) -> Path:
        path = self._product_path(name)
        _atomic_write_text(path, content)
        logger.info("store.text_saved", path=str(path), chars=len(content))
        return path

    def delete_text(self, name: str) -> bool:
        """Remove a product file. Returns False if it did not exist."""
        path = self._product_path(name)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.debug("store.text_missing", path=str(path))
            return False
        logger.info("store.text_deleted", path=str(path))
        return True
