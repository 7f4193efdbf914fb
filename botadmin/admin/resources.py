"""Resource controllers: list/save/delete/mark over one JSON array file each.

A record reference ("ref") is either a record id or "#<position>". A bare
number is read as a position only when no record in the file carries an id,
so an integer id can never be confused with a row number. Unknown refs raise
RecordNotFound and nothing is written.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from botadmin.config import (
    BLACKLIST_FILE,
    BUYERS_FILE,
    CLAIM_LOG_FILE,
    CLAIMS_REPLACE_FILE,
    CLAIMS_RESET_FILE,
    FAQ_FILE,
    PROMO_FILE,
    SOP_FILE,
)
from botadmin.admin.products import ProductCatalog
from botadmin.errors import MalformedStoredData, RecordNotFound
from botadmin.models import BuyerSummary, new_record_id
from botadmin.store import FlatFileStore, LoadResult
from botadmin.utils.logger import get_logger

logger = get_logger("botadmin.admin.resources")

ID_FIELD = "id"
POSITION_PREFIX = "#"
STATUS_RESOLVED = "RESOLVED"


def _record_id(item: Any) -> str | None:
    if not isinstance(item, dict) or item.get(ID_FIELD) is None:
        return None
    record_id = str(item[ID_FIELD]).strip()
    return record_id or None


def record_ref(item: Any, position: int) -> str:
    """The ref a list page posts back for item: its id, or "#<position>" when it has none."""
    record_id = _record_id(item)
    return record_id if record_id is not None else f"{POSITION_PREFIX}{position}"


class ArrayResource:
    """One JSON array file. mark_field/mark_value define the one-way transition for claim-style resources."""

    def __init__(
        self,
        store: FlatFileStore,
        name: str,
        filename: str,
        mark_field: str | None = None,
        mark_value: Any = None,
    ):
        self._store = store
        self.name = name
        self.filename = filename
        self._mark_field = mark_field
        self._mark_value = mark_value

    def load(self) -> LoadResult:
        return self._store.load_array(self.filename)

    def list(self) -> list[Any]:
        return self.load().items

    def _load_for_update(self) -> list[Any]:
        result = self.load()
        if not result.ok:
            raise MalformedStoredData(self.filename, result.error or "unreadable")
        return result.items

    def locate(self, items: list[Any], ref: Any) -> int:
        """Position of the record named by ref ("#<n>", an id, or a bare index in id-less files)."""
        key = str(ref).strip() if ref is not None else ""
        if not key:
            raise RecordNotFound(self.name, key)
        if key.startswith(POSITION_PREFIX):
            return self._position(items, key[len(POSITION_PREFIX):], key)
        for pos, item in enumerate(items):
            if _record_id(item) == key:
                return pos
        if not any(_record_id(item) is not None for item in items):
            return self._position(items, key, key)
        raise RecordNotFound(self.name, key)

    def _position(self, items: list[Any], digits: str, key: str) -> int:
        # ascii only: "²".isdigit() is True but int() rejects it
        if digits.isascii() and digits.isdecimal():
            pos = int(digits)
            if pos < len(items):
                return pos
        raise RecordNotFound(self.name, key)

    async def save(self, ref: Any, item: BaseModel | dict[str, Any]) -> dict[str, Any]:
        """Append when ref is empty, otherwise overwrite the referenced record keeping its id."""
        fields = item.model_dump() if isinstance(item, BaseModel) else dict(item)
        fields.pop(ID_FIELD, None)
        # file I/O below is synchronous and runs while the per-file lock is held
        async with self._store.locked(self.filename):
            items = self._load_for_update()
            if ref is None or str(ref).strip() == "":
                record = {ID_FIELD: new_record_id(), **fields}
                items.append(record)
                pos = len(items) - 1
            else:
                pos = self.locate(items, ref)
                previous = items[pos]
                record_id = previous.get(ID_FIELD) if isinstance(previous, dict) else None
                record = {ID_FIELD: new_record_id() if record_id is None else record_id, **fields}
                items[pos] = record
            self._store.save_array(self.filename, items)
        logger.info("resource.saved", resource=self.name, position=pos, record_id=record[ID_FIELD])
        return record

    async def delete(self, ref: Any) -> Any:
        """Remove the referenced record; the others keep their relative order."""
        async with self._store.locked(self.filename):
            items = self._load_for_update()
            pos = self.locate(items, ref)
            removed = items.pop(pos)
            self._store.save_array(self.filename, items)
        logger.info("resource.deleted", resource=self.name, position=pos)
        return removed

    async def mark(self, ref: Any) -> dict[str, Any]:
        """Apply the one-way transition (e.g. status=RESOLVED). Re-marking is a no-op overwrite."""
        if self._mark_field is None:
            raise TypeError(f"{self.name} has no mark transition")
        async with self._store.locked(self.filename):
            items = self._load_for_update()
            pos = self.locate(items, ref)
            record = items[pos]
            if not isinstance(record, dict):
                raise RecordNotFound(self.name, str(ref))
            record[self._mark_field] = self._mark_value
            self._store.save_array(self.filename, items)
        logger.info(
            "resource.marked",
            resource=self.name,
            position=pos,
            field=self._mark_field,
            value=self._mark_value,
        )
        return record


def summarize_buyers(buyers: list[Any]) -> list[BuyerSummary]:
    """Project buyer records to {user, total=len(data), statistik}."""
    summaries = []
    for buyer in buyers:
        if not isinstance(buyer, dict):
            continue
        data = buyer.get("data")
        statistik = buyer.get("statistik")
        summaries.append(
            BuyerSummary(
                user=buyer.get("user"),
                total=len(data) if isinstance(data, list) else 0,
                statistik=statistik if isinstance(statistik, dict) else {},
            )
        )
    return summaries


@dataclass
class Resources:
    """All controllers backed by one store."""

    store: FlatFileStore
    products: ProductCatalog
    faq: ArrayResource
    sop: ArrayResource
    promo: ArrayResource
    blacklist: ArrayResource
    claim: ArrayResource
    claims_replace: ArrayResource
    claims_reset: ArrayResource
    buyers: ArrayResource


def build_resources(store: FlatFileStore) -> Resources:
    return Resources(
        store=store,
        products=ProductCatalog(store),
        faq=ArrayResource(store, "faq", FAQ_FILE),
        sop=ArrayResource(store, "sop", SOP_FILE),
        promo=ArrayResource(store, "promo", PROMO_FILE),
        blacklist=ArrayResource(store, "blacklist", BLACKLIST_FILE),
        claim=ArrayResource(store, "claim", CLAIM_LOG_FILE, mark_field="status", mark_value=STATUS_RESOLVED),
        claims_replace=ArrayResource(
            store, "claims_replace", CLAIMS_REPLACE_FILE, mark_field="status", mark_value=STATUS_RESOLVED
        ),
        claims_reset=ArrayResource(store, "claims_reset", CLAIMS_RESET_FILE, mark_field="done", mark_value=True),
        buyers=ArrayResource(store, "buyers", BUYERS_FILE),
    )
