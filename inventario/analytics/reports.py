"""Generación de un reporte consolidado de inventario."""
from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Any, Sequence

from .alerts import generate_alerts
from .kpis import calculate_inventory_kpis, classify_abc
from .models import (
    CoverageRanking,
    InventoryMovement,
    InventoryReport,
    MovementRanking,
    Product,
    ProductAnalytics,
    Recommendation,
    ReportMetadata,
    ReportRankings,
    RoiRanking,
    Sale,
)
from .policy import DEFAULT_POLICY, AnalyticsPolicy
from .product_analyzer import analyze_products
from .timing import resolve_reference_time


def _product_fields(analytics: ProductAnalytics) -> dict[str, Any]:
    return {
        "product_id": analytics.id,
        "product_name": analytics.name,
        "category": analytics.category,
        "stock": analytics.stock,
    }


def _build_rankings(
    analytics: Sequence[ProductAnalytics], top_n: int
) -> ReportRankings:
    top_roi = [
        RoiRanking(
            **_product_fields(item), roi=item.roi, rotation_rate=item.rotation_rate
        )
        for item in sorted(analytics, key=lambda item: item.roi, reverse=True)[:top_n]
    ]
    slowest_movers = [
        MovementRanking(
            **_product_fields(item), days_without_movement=item.days_without_movement
        )
        for item in sorted(
            (item for item in analytics if item.stock > 0),
            key=lambda item: item.days_without_movement,
            reverse=True,
        )[:top_n]
    ]
    lowest_coverage = [
        CoverageRanking(
            **_product_fields(item),
            stock_coverage=item.stock_coverage,
            reorder_point=item.reorder_point,
        )
        for item in sorted(analytics, key=lambda item: item.stock_coverage)[:top_n]
    ]
    return ReportRankings(
        top_roi=top_roi, slowest_movers=slowest_movers, lowest_coverage=lowest_coverage
    )


def generate_inventory_report(
    products: Sequence[Product],
    movements: Sequence[InventoryMovement],
    sales: Sequence[Sale],
    *,
    as_of: datetime | None = None,
    policy: AnalyticsPolicy = DEFAULT_POLICY,
    top_n: int = 5,
) -> InventoryReport:
    """Genera un reporte integral con KPIs, diagnóstico por producto y alertas.

    Sólo compone las operaciones del motor; todos los valores se recalculan en
    cada llamada con la misma fecha de referencia.
    """

    now = resolve_reference_time(as_of)
    kpis = calculate_inventory_kpis(products, movements, sales, policy=policy)
    analytics = analyze_products(products, movements, sales, as_of=now, policy=policy)
    alerts = generate_alerts(products, as_of=now, policy=policy)

    counts = Counter(item.recommendation for item in analytics)

    return InventoryReport(
        generated_at=now,
        kpis=kpis,
        products=analytics,
        alerts=alerts,
        abc_classes=dict(classify_abc(products)),
        recommendation_counts={
            recommendation.value: counts.get(recommendation, 0)
            for recommendation in Recommendation
        },
        rankings=_build_rankings(analytics, top_n),
        metadata=ReportMetadata(top_n=top_n, sentinel_days=policy.sentinel_days),
    )


__all__ = ["generate_inventory_report"]
