"""Funciones para calcular punto de reorden, EOQ y stock de seguridad."""
from __future__ import annotations

import math

# Valores z aproximados por nivel de servicio (%).
Z_SCORES: dict[float, float] = {
    95: 1.65,
    98: 2.05,
    99: 2.33,
    99.9: 3.09,
}
DEFAULT_Z_SCORE = Z_SCORES[95]


def calculate_reorder_point(
    *, daily_demand: float, lead_time_days: float, safety_stock: float = 0.0
) -> int:
    """Calcula el punto de reorden esperado para un producto."""

    if daily_demand < 0:
        raise ValueError("La demanda diaria no puede ser negativa")
    if safety_stock < 0:
        raise ValueError("El stock de seguridad no puede ser negativo")

    return math.ceil((daily_demand * lead_time_days) + safety_stock)


def calculate_economic_order_quantity(
    *, annual_demand: float, ordering_cost: float, holding_cost_per_unit: float
) -> int:
    """Cantidad económica de pedido (EOQ).

    Devuelve 0 cuando el costo de mantener inventario no es positivo.
    """

    if holding_cost_per_unit <= 0:
        return 0
    if annual_demand < 0:
        raise ValueError("La demanda anual no puede ser negativa")
    if ordering_cost < 0:
        raise ValueError("El costo de pedido no puede ser negativo")

    return math.ceil(math.sqrt((2 * annual_demand * ordering_cost) / holding_cost_per_unit))


def z_score_for(service_level: float) -> float:
    """Valor z para el nivel de servicio; 1.65 si el nivel no está tabulado."""

    return Z_SCORES.get(service_level, DEFAULT_Z_SCORE)


def calculate_safety_stock(
    *, service_level: float, lead_time_days: float, demand_variance: float
) -> int:
    """Stock de seguridad por el método de valor z."""

    exposure = lead_time_days * demand_variance
    if exposure < 0:
        raise ValueError("El tiempo de entrega y la varianza no pueden ser negativos")

    return math.ceil(z_score_for(service_level) * math.sqrt(exposure))


__all__ = [
    "DEFAULT_Z_SCORE",
    "Z_SCORES",
    "calculate_economic_order_quantity",
    "calculate_reorder_point",
    "calculate_safety_stock",
    "z_score_for",
]
