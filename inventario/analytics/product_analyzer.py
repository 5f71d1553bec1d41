"""Diagnóstico individual de productos: rotación, márgenes, cobertura y reorden."""
from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime
from typing import Sequence

from .models import InventoryMovement, Product, ProductAnalytics, Sale
from .policy import DEFAULT_POLICY, AnalyticsPolicy, resolve_product_settings
from .recommendations import RecommendationContext, recommend
from .reorder_points import (
    calculate_economic_order_quantity,
    calculate_reorder_point,
    calculate_safety_stock,
)
from .sales_velocity import (
    calculate_average_daily_sales,
    calculate_rotation_rate,
    calculate_stock_coverage,
    round_half_up,
    total_units_sold,
)
from .timing import latest_movement, resolve_reference_time, whole_days_between

logger = logging.getLogger(__name__)


def calculate_profit_margin(selling_price: float, cost_price: float) -> float:
    """Margen porcentual sobre el precio de venta; 0 si el precio es cero."""

    if selling_price == 0:
        return 0.0
    return ((selling_price - cost_price) / selling_price) * 100


def analyze_product(
    product: Product,
    movements: Sequence[InventoryMovement],
    sales: Sequence[Sale],
    *,
    as_of: datetime | None = None,
    policy: AnalyticsPolicy = DEFAULT_POLICY,
) -> ProductAnalytics:
    """Genera las métricas extendidas de un producto.

    ``movements`` y ``sales`` pueden contener registros de otros productos;
    sólo se consideran los que referencian a ``product.id``.
    """

    now = resolve_reference_time(as_of)
    settings = resolve_product_settings(product, policy)
    product_movements = [m for m in movements if m.product_id == product.id]
    product_sales = [s for s in sales if s.product_id == product.id]

    units_sold = total_units_sold(product_sales)
    rotation_rate = calculate_rotation_rate(units_sold, product.stock)

    last_movement = latest_movement(product_movements)
    if last_movement is None:
        days_without_movement = policy.sentinel_days
    else:
        days_without_movement = whole_days_between(last_movement.movement_date, now)

    profit_margin = calculate_profit_margin(settings.selling_price, settings.cost_price)

    average_daily_sales = calculate_average_daily_sales(
        product_sales, window_days=policy.sales_window_days
    )
    coverage = calculate_stock_coverage(
        product.stock, average_daily_sales, sentinel=policy.sentinel_days
    )

    reorder_point = calculate_reorder_point(
        daily_demand=average_daily_sales,
        lead_time_days=policy.lead_time_days,
        safety_stock=settings.safety_stock,
    )
    eoq = calculate_economic_order_quantity(
        annual_demand=units_sold * policy.annualisation_factor,
        ordering_cost=settings.ordering_cost,
        holding_cost_per_unit=settings.holding_cost,
    )
    safety_stock = calculate_safety_stock(
        service_level=policy.target_service_level,
        lead_time_days=policy.lead_time_days,
        demand_variance=policy.demand_variance,
    )

    outcome = recommend(
        RecommendationContext(
            stock=product.stock,
            settings=settings,
            days_without_movement=days_without_movement,
            profit_margin=profit_margin,
            policy=policy,
        )
    )

    return ProductAnalytics.model_validate(
        {
            **product.model_dump(),
            "rotation_rate": round_half_up(rotation_rate, 2),
            "days_without_movement": days_without_movement,
            "reorder_point": reorder_point,
            "eoq": eoq,
            "safety_stock_calculated": safety_stock,
            "stock_coverage": int(round_half_up(coverage)),
            "profit_margin": round_half_up(profit_margin, 2),
            "roi": round_half_up(profit_margin * rotation_rate, 2),
            "recommendation": outcome.recommendation,
            "alert_level": outcome.alert_level,
        }
    )


def analyze_products(
    products: Sequence[Product],
    movements: Sequence[InventoryMovement],
    sales: Sequence[Sale],
    *,
    as_of: datetime | None = None,
    policy: AnalyticsPolicy = DEFAULT_POLICY,
) -> list[ProductAnalytics]:
    """Analiza un lote de productos agrupando movimientos y ventas una sola vez."""

    now = resolve_reference_time(as_of)
    movements_by_product: dict[str, list[InventoryMovement]] = defaultdict(list)
    sales_by_product: dict[str, list[Sale]] = defaultdict(list)
    for movement in movements:
        movements_by_product[movement.product_id].append(movement)
    for sale in sales:
        sales_by_product[sale.product_id].append(sale)

    results = [
        analyze_product(
            product,
            movements_by_product.get(product.id, ()),
            sales_by_product.get(product.id, ()),
            as_of=now,
            policy=policy,
        )
        for product in products
    ]
    logger.debug("Analizados %d productos", len(results))
    return results


__all__ = ["analyze_product", "analyze_products", "calculate_profit_margin"]
