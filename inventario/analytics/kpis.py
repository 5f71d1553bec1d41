"""KPIs de portafolio y clasificación ABC."""
from __future__ import annotations

import logging
from typing import Sequence

from .models import ABCDistribution, InventoryMovement, KPISnapshot, Product, Sale
from .policy import (
    DEFAULT_POLICY,
    AnalyticsPolicy,
    is_excess_stock,
    is_low_stock,
    resolve_product_settings,
)
from .sales_velocity import (
    calculate_days_of_inventory,
    calculate_inventory_turnover,
    round_half_up,
)

logger = logging.getLogger(__name__)

CLASS_A_LIMIT = 80.0
CLASS_B_LIMIT = 95.0

# (turnover mínimo exclusivo, índice); heurística fija del tablero.
LIQUIDITY_BUCKETS: tuple[tuple[float, int], ...] = ((2.0, 85), (1.0, 65))
DEFAULT_LIQUIDITY_INDEX = 45


def stock_value(product: Product) -> float:
    return product.stock * float(product.price)


def calculate_stock_value(products: Sequence[Product]) -> float:
    """Valor total del inventario: suma de stock por precio."""

    return sum(stock_value(product) for product in products)


def classify_abc(products: Sequence[Product]) -> list[tuple[str, str]]:
    """Clasifica productos en A/B/C según el valor acumulado del inventario.

    Los productos se ordenan de mayor a menor valor; se asigna A mientras el
    valor acumulado no supere el 80 % del total, B hasta el 95 % y C para el
    resto. Con un portafolio de valor cero todos quedan en C.

    Returns:
        Pares ``(product_id, clase)`` en orden descendente de valor.
    """

    ranked = sorted(products, key=stock_value, reverse=True)
    total_value = sum(stock_value(product) for product in ranked)
    if total_value <= 0:
        return [(product.id, "C") for product in ranked]

    classes: list[tuple[str, str]] = []
    cumulative = 0.0
    for product in ranked:
        cumulative += stock_value(product)
        share = (cumulative / total_value) * 100
        if share <= CLASS_A_LIMIT:
            label = "A"
        elif share <= CLASS_B_LIMIT:
            label = "B"
        else:
            label = "C"
        classes.append((product.id, label))
    return classes


def calculate_abc_distribution(products: Sequence[Product]) -> ABCDistribution:
    """Porcentaje de la cantidad de productos que cae en cada clase.

    Las bandas se calculan sobre valor pero se reporta la proporción de
    productos, no de valor.
    """

    if not products or calculate_stock_value(products) <= 0:
        return ABCDistribution()

    counts = {"A": 0, "B": 0, "C": 0}
    for _, label in classify_abc(products):
        counts[label] += 1
    total = len(products)
    return ABCDistribution(
        **{
            label: int(round_half_up((count / total) * 100))
            for label, count in counts.items()
        }
    )


def liquidity_index(turnover: float) -> int:
    for floor, index in LIQUIDITY_BUCKETS:
        if turnover > floor:
            return index
    return DEFAULT_LIQUIDITY_INDEX


def calculate_inventory_kpis(
    products: Sequence[Product],
    movements: Sequence[InventoryMovement],
    sales: Sequence[Sale],
    *,
    policy: AnalyticsPolicy = DEFAULT_POLICY,
) -> KPISnapshot:
    """Calcula el resumen de KPIs del inventario completo.

    ``movements`` forma parte del contrato de entrada pero no interviene en
    ninguno de los indicadores actuales. Sin productos se devuelve un resumen
    en cero, incluidos los valores de referencia.
    """

    if not products:
        logger.debug("Sin productos: se devuelve un resumen de KPIs vacío")
        return KPISnapshot()

    settings = [resolve_product_settings(product, policy) for product in products]
    total_value = calculate_stock_value(products)

    low_stock = sum(
        1 for product, resolved in zip(products, settings)
        if is_low_stock(product.stock, resolved)
    )
    out_of_stock = sum(1 for product in products if product.stock == 0)
    excess_stock = sum(
        1 for product, resolved in zip(products, settings)
        if is_excess_stock(product.stock, resolved)
    )

    total_sales_amount = sum(float(sale.total_amount) for sale in sales)
    turnover = calculate_inventory_turnover(total_sales_amount, total_value)
    days_of_inventory = calculate_days_of_inventory(turnover)

    logger.debug(
        "KPIs calculados para %d productos, %d movimientos y %d ventas",
        len(products),
        len(movements),
        len(sales),
    )

    return KPISnapshot(
        total_stock_value=total_value,
        total_products=len(products),
        low_stock_products=low_stock,
        out_of_stock_products=out_of_stock,
        excess_stock_products=excess_stock,
        inventory_turnover=round_half_up(turnover, 2),
        service_level=policy.service_level,
        days_of_inventory=int(round_half_up(days_of_inventory)),
        abc_distribution=calculate_abc_distribution(products),
        liquidity_index=liquidity_index(turnover),
        inventory_accuracy=policy.inventory_accuracy,
    )


__all__ = [
    "calculate_abc_distribution",
    "calculate_inventory_kpis",
    "calculate_stock_value",
    "classify_abc",
    "liquidity_index",
    "stock_value",
]
