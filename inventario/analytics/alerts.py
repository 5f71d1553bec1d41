"""Generación automática de alertas de inventario."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Sequence

from .models import Alert, AlertPriority, AlertType, Product
from .policy import (
    DEFAULT_POLICY,
    AnalyticsPolicy,
    EffectiveProductSettings,
    is_critical_stock,
    is_excess_stock,
    is_low_stock,
    resolve_product_settings,
)
from .timing import resolve_reference_time, whole_days_between

logger = logging.getLogger(__name__)

PRIORITY_ORDER = {
    AlertPriority.CRITICAL: 0,
    AlertPriority.HIGH: 1,
    AlertPriority.MEDIUM: 2,
}


def _alert(
    product: Product,
    alert_type: AlertType,
    priority: AlertPriority,
    message: str,
    *,
    threshold: float | None = None,
    current_value: float | None = None,
) -> Alert:
    return Alert(
        product_id=product.id,
        product_name=product.name,
        alert_type=alert_type,
        priority=priority,
        message=message,
        threshold=threshold,
        current_value=current_value,
    )


def _stock_alerts(
    product: Product, settings: EffectiveProductSettings
) -> list[Alert]:
    alerts: list[Alert] = []
    stock = product.stock

    if is_critical_stock(stock, settings):
        alerts.append(
            _alert(
                product,
                AlertType.LOW_STOCK,
                AlertPriority.CRITICAL,
                f"Stock crítico: Solo {stock} unidades disponibles",
                threshold=settings.critical_threshold,
                current_value=stock,
            )
        )
    elif is_low_stock(stock, settings):
        alerts.append(
            _alert(
                product,
                AlertType.LOW_STOCK,
                AlertPriority.HIGH,
                f"Stock bajo: {stock} unidades (mínimo: {settings.min_stock})",
                threshold=settings.min_stock,
                current_value=stock,
            )
        )

    if stock == 0:
        alerts.append(
            _alert(
                product,
                AlertType.OUT_OF_STOCK,
                AlertPriority.CRITICAL,
                "Producto agotado - requiere reposición inmediata",
                threshold=0,
                current_value=0,
            )
        )

    if is_excess_stock(stock, settings):
        alerts.append(
            _alert(
                product,
                AlertType.EXCESS_STOCK,
                AlertPriority.MEDIUM,
                f"Exceso de stock: {stock} unidades "
                f"(máximo recomendado: {settings.max_stock})",
                threshold=settings.excess_threshold,
                current_value=stock,
            )
        )
    return alerts


def _expiry_alert(
    product: Product, now: datetime, policy: AnalyticsPolicy
) -> Alert | None:
    if product.expiration_date is None:
        return None
    days_to_expiry = whole_days_between(now, product.expiration_date)
    # Los productos ya vencidos no generan esta alerta.
    if not 0 < days_to_expiry <= policy.expiry_window_days:
        return None
    return _alert(
        product,
        AlertType.EXPIRING,
        AlertPriority.HIGH,
        f"Producto expira en {days_to_expiry} días",
        threshold=policy.expiry_window_days,
        current_value=days_to_expiry,
    )


def generate_alerts(
    products: Sequence[Product],
    *,
    as_of: datetime | None = None,
    policy: AnalyticsPolicy = DEFAULT_POLICY,
) -> list[Alert]:
    """Evalúa cada producto y devuelve sus alertas en el orden de entrada.

    Un producto puede generar varias alertas (por ejemplo stock crítico y
    agotado). No se reordena por severidad; ver :func:`sort_alerts_by_priority`.
    """

    now = resolve_reference_time(as_of)
    alerts: list[Alert] = []
    for product in products:
        settings = resolve_product_settings(product, policy)
        alerts.extend(_stock_alerts(product, settings))
        expiry = _expiry_alert(product, now, policy)
        if expiry is not None:
            alerts.append(expiry)

    logger.debug("Generadas %d alertas para %d productos", len(alerts), len(products))
    return alerts


def sort_alerts_by_priority(alerts: Iterable[Alert]) -> list[Alert]:
    """Ordena de crítica a media conservando el orden relativo de entrada."""

    return sorted(alerts, key=lambda alert: PRIORITY_ORDER[alert.priority])


__all__ = ["PRIORITY_ORDER", "generate_alerts", "sort_alerts_by_priority"]
