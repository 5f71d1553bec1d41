"""Cálculo de métricas de velocidad de ventas y rotación de inventario."""
from __future__ import annotations

import math
from decimal import ROUND_HALF_DOWN, ROUND_HALF_UP, Decimal, localcontext
from typing import Iterable

from .models import Sale


def round_half_up(value: float, digits: int = 0) -> float:
    """Redondea con la regla comercial: los empates van hacia +infinito.

    ``-2.5`` queda en ``-2`` y ``2.5`` en ``3``. Valores no finitos se devuelven
    sin cambios.
    """

    if not math.isfinite(value):
        return value
    number = Decimal(repr(value))
    rounding = ROUND_HALF_DOWN if number < 0 else ROUND_HALF_UP
    with localcontext() as context:
        # La precisión por defecto (28 dígitos) no alcanza para magnitudes grandes.
        context.prec = max(context.prec, number.adjusted() + digits + 2)
        return float(number.quantize(Decimal(1).scaleb(-digits), rounding=rounding))


def total_units_sold(sales: Iterable[Sale]) -> int:
    return sum(sale.quantity for sale in sales)


def calculate_average_daily_sales(sales: Iterable[Sale], *, window_days: int) -> float:
    """Unidades vendidas por día sobre una ventana fija de días."""

    sales_list = list(sales)
    if not sales_list or window_days <= 0:
        return 0.0
    return total_units_sold(sales_list) / window_days


def calculate_stock_coverage(
    stock: float, average_daily_sales: float, *, sentinel: int
) -> float:
    """Días de cobertura del stock; ``sentinel`` cuando no hay ventas."""

    if average_daily_sales <= 0:
        return float(sentinel)
    return stock / average_daily_sales


def calculate_rotation_rate(units_sold: float, stock: float) -> float:
    if stock <= 0:
        return 0.0
    return units_sold / stock


def calculate_inventory_turnover(total_sales_amount: float, stock_value: float) -> float:
    """Rotación del portafolio: ventas totales sobre valor del inventario."""

    if stock_value <= 0:
        return 0.0
    return total_sales_amount / stock_value


def calculate_days_of_inventory(turnover: float) -> float:
    if turnover <= 0:
        return 0.0
    return 365 / turnover


__all__ = [
    "calculate_average_daily_sales",
    "calculate_days_of_inventory",
    "calculate_inventory_turnover",
    "calculate_rotation_rate",
    "calculate_stock_coverage",
    "round_half_up",
    "total_units_sold",
]
