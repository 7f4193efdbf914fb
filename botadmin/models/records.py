"""Pydantic models for stored records and derived views."""

from datetime import datetime, timezone
from typing import Any, Literal
from uuid import uuid4

from pydantic import BaseModel, Field


def new_record_id() -> str:
    return uuid4().hex


def utc_now_iso() -> str:
    """ISO-8601 UTC timestamp with a trailing Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class FaqItem(BaseModel):
    """Question/answer pair shown by the bot."""

    question: str = ""
    answer: str = ""


class SopItem(BaseModel):
    """Scripted reply: any trigger phrase yields the response."""

    trigger: list[str] = Field(default_factory=list)
    response: list[str] = Field(default_factory=list)

    @classmethod
    def from_form(cls, trigger: str, response: str) -> "SopItem":
        return cls(trigger=(trigger or "").split(","), response=[response or ""])


class PromoItem(BaseModel):
    """Promo banner text and whether the bot should show it."""

    banner: str = ""
    active: bool = False


class BlacklistItem(BaseModel):
    """Blocked user. date is stamped at creation and never changed."""

    user: str = ""
    reason: str = ""
    date: str = Field(default_factory=utc_now_iso)


class BuyerSummary(BaseModel):
    """Per-buyer projection of buyers.json for the buyers page."""

    user: Any = None
    total: int = 0
    statistik: dict[str, Any] = Field(default_factory=dict)


class DashboardStats(BaseModel):
    """Record counts shown on the dashboard."""

    produk: int = 0
    promo: int = 0
    faq: int = 0
    sop: int = 0
    claim: int = 0


class Toast(BaseModel):
    """One-shot status message shown on the next rendered page."""

    type: Literal["success", "danger"] = "success"
    msg: str


class Product(BaseModel):
    """Product description file: name is the lowercased file stem."""

    name: str
    content: str = ""
