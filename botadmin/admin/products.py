"""Product descriptions: one text file per product, saved under the lowercased product name."""

from __future__ import annotations

from pathlib import PurePath

from botadmin.errors import ValidationFailure
from botadmin.models import Product
from botadmin.store import FlatFileStore
from botadmin.utils.logger import get_logger

logger = get_logger("botadmin.admin.products")


def _bare_name(name: str | None) -> str:
    key = (name or "").strip()
    # The name becomes a file name; anything that is not a bare name would escape the products directory.
    if key and (PurePath(key).name != key or key.startswith(".")):
        raise ValidationFailure(f"Invalid product name: {name!r}")
    return key


class ProductCatalog:
    def __init__(self, store: FlatFileStore):
        self._store = store

    def names(self) -> list[str]:
        return self._store.list_names()

    def list(self) -> list[Product]:
        # read by the stem exactly as listed, hand-written files may carry upper case
        return [Product(name=n, content=self._store.load_text(n)) for n in self.names()]

    async def save(self, name: str | None, content: str | None) -> Product:
        """Create or overwrite a product. Both name and content are required."""
        if not name or not content:
            raise ValidationFailure("Nama produk & konten wajib diisi!")
        key = _bare_name(name).lower()
        if not key:
            raise ValidationFailure("Nama produk & konten wajib diisi!")
        async with self._store.locked(f"produk/{key}"):
            self._store.save_text(key, content)
        logger.info("product.saved", product=key)
        return Product(name=key, content=content)

    async def delete(self, name: str | None) -> bool:
        """Delete a product file by its listed name, falling back to the lowercased name.

        A missing file is not an error.
        """
        key = _bare_name(name)
        if not key:
            raise ValidationFailure("Nama produk wajib diisi!")
        async with self._store.locked(f"produk/{key.lower()}"):
            existed = self._store.delete_text(key)
            if not existed and key != key.lower():
                existed = self._store.delete_text(key.lower())
        logger.info("product.deleted", product=key, existed=existed)
        return existed
