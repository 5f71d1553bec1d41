"""Motor de KPIs, diagnóstico por producto y alertas de inventario."""
from __future__ import annotations

from .alerts import generate_alerts, sort_alerts_by_priority
from .kpis import (
    calculate_abc_distribution,
    calculate_inventory_kpis,
    calculate_stock_value,
    classify_abc,
)
from .loaders import (
    InventoryDataset,
    load_dataset,
    load_movements,
    load_products,
    load_sales,
)
from .models import (
    ABCDistribution,
    Alert,
    AlertLevel,
    AlertPriority,
    AlertType,
    InventoryMovement,
    InventoryReport,
    KPISnapshot,
    Product,
    ProductAnalytics,
    Recommendation,
    Sale,
)
from .policy import DEFAULT_POLICY, AnalyticsPolicy, resolve_product_settings
from .product_analyzer import analyze_product, analyze_products
from .reorder_points import (
    calculate_economic_order_quantity,
    calculate_reorder_point,
    calculate_safety_stock,
)
from .reports import generate_inventory_report

__all__ = [
    "ABCDistribution",
    "Alert",
    "AlertLevel",
    "AlertPriority",
    "AlertType",
    "AnalyticsPolicy",
    "DEFAULT_POLICY",
    "InventoryDataset",
    "InventoryMovement",
    "InventoryReport",
    "KPISnapshot",
    "Product",
    "ProductAnalytics",
    "Recommendation",
    "Sale",
    "analyze_product",
    "analyze_products",
    "calculate_abc_distribution",
    "calculate_economic_order_quantity",
    "calculate_inventory_kpis",
    "calculate_reorder_point",
    "calculate_safety_stock",
    "calculate_stock_value",
    "classify_abc",
    "generate_alerts",
    "generate_inventory_report",
    "load_dataset",
    "load_movements",
    "load_products",
    "load_sales",
    "resolve_product_settings",
    "sort_alerts_by_priority",
]
