"""Pydantic models for the admin console."""

from botadmin.models.records import (
    BlacklistItem,
    BuyerSummary,
    DashboardStats,
    FaqItem,
    Product,
    PromoItem,
    SopItem,
    Toast,
    new_record_id,
    utc_now_iso,
)

__all__ = [
    "BlacklistItem",
    "BuyerSummary",
    "DashboardStats",
    "FaqItem",
    "Product",
    "PromoItem",
    "SopItem",
    "Toast",
    "new_record_id",
    "utc_now_iso",
]
