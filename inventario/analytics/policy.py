"""Constantes de negocio y resolución de valores efectivos por producto."""
from __future__ import annotations

from dataclasses import dataclass

from .models import Product


@dataclass(frozen=True)
class AnalyticsPolicy:
    """Parámetros fijos que usan los cálculos de inventario.

    Los valores por defecto son las reglas fijas del tablero de inventario.
    ``service_level`` e ``inventory_accuracy`` son marcadores: no se calculan a
    partir de pedidos cumplidos ni de conteos cíclicos.
    """

    default_min_stock: int = 10
    default_safety_stock: int = 5
    default_ordering_cost: float = 50.0
    default_holding_cost: float = 5.0
    lead_time_days: float = 7.0
    sales_window_days: int = 30
    annualisation_factor: int = 12
    target_service_level: float = 95.0
    demand_variance: float = 2.0
    critical_stock_ratio: float = 0.5
    excess_stock_ratio: float = 1.2
    stale_after_days: int = 180
    liquidation_margin: float = 20.0
    expiry_window_days: int = 30
    sentinel_days: int = 999
    service_level: float = 95.0
    inventory_accuracy: float = 98.5


DEFAULT_POLICY = AnalyticsPolicy()


@dataclass(frozen=True)
class EffectiveProductSettings:
    """Valores usados en el cálculo, ya resueltos contra los defaults."""

    min_stock: int
    max_stock: int | None
    safety_stock: int
    ordering_cost: float
    holding_cost: float
    selling_price: float
    cost_price: float
    critical_threshold: float
    excess_threshold: float | None


def resolve_product_settings(
    product: Product, policy: AnalyticsPolicy = DEFAULT_POLICY
) -> EffectiveProductSettings:
    """Resuelve una sola vez los valores opcionales de un producto.

    Un mínimo o stock de seguridad en cero se trata como no configurado; los
    costos sólo toman el valor por defecto cuando faltan.
    """

    min_stock = product.min_stock or policy.default_min_stock
    max_stock = product.max_stock or None
    selling_price = float(product.price)
    cost_price = (
        float(product.cost_price) if product.cost_price is not None else selling_price
    )
    ordering_cost = (
        float(product.ordering_cost)
        if product.ordering_cost is not None
        else policy.default_ordering_cost
    )
    holding_cost = (
        float(product.storage_cost)
        if product.storage_cost is not None
        else policy.default_holding_cost
    )

    return EffectiveProductSettings(
        min_stock=min_stock,
        max_stock=max_stock,
        safety_stock=product.safety_stock or policy.default_safety_stock,
        ordering_cost=ordering_cost,
        holding_cost=holding_cost,
        selling_price=selling_price,
        cost_price=cost_price,
        critical_threshold=min_stock * policy.critical_stock_ratio,
        excess_threshold=(
            max_stock * policy.excess_stock_ratio if max_stock is not None else None
        ),
    )


def is_low_stock(stock: int, settings: EffectiveProductSettings) -> bool:
    return stock <= settings.min_stock


def is_critical_stock(stock: int, settings: EffectiveProductSettings) -> bool:
    return stock <= settings.critical_threshold


def is_excess_stock(stock: int, settings: EffectiveProductSettings) -> bool:
    return settings.excess_threshold is not None and stock >= settings.excess_threshold


__all__ = [
    "AnalyticsPolicy",
    "DEFAULT_POLICY",
    "EffectiveProductSettings",
    "is_critical_stock",
    "is_excess_stock",
    "is_low_stock",
    "resolve_product_settings",
]
