"""Dashboard counts."""

from typing import Any

from botadmin.models import DashboardStats


def _count(value: Any) -> int:
    return len(value) if isinstance(value, list) else 0


def dashboard_stats(produk: Any, promo: Any, faq: Any, sop: Any, claim: Any) -> DashboardStats:
    """Lengths of the loaded collections; anything that is not a list counts as 0."""
    return DashboardStats(
        produk=_count(produk),
        promo=_count(promo),
        faq=_count(faq),
        sop=_count(sop),
        claim=_count(claim),
    )


def collect_stats(resources) -> DashboardStats:
    return dashboard_stats(
        resources.products.names(),
        resources.promo.list(),
        resources.faq.list(),
        resources.sop.list(),
        resources.claim.list(),
    )
