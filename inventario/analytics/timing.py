"""Cálculo de intervalos en días entre fechas de inventario."""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Iterable

from .models import InventoryMovement

_SECONDS_PER_DAY = 86_400


def ensure_utc(value: datetime) -> datetime:
    """Las fechas sin zona horaria se interpretan como UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def resolve_reference_time(as_of: datetime | None = None) -> datetime:
    return ensure_utc(as_of) if as_of is not None else datetime.now(timezone.utc)


def whole_days_between(start: datetime, end: datetime) -> int:
    """Días completos transcurridos de ``start`` a ``end`` (redondeo hacia abajo)."""

    delta = ensure_utc(end) - ensure_utc(start)
    return math.floor(delta.total_seconds() / _SECONDS_PER_DAY)


def latest_movement(movements: Iterable[InventoryMovement]) -> InventoryMovement | None:
    """Movimiento más reciente de la colección, o ``None`` si está vacía."""

    return max(movements, key=lambda movement: ensure_utc(movement.movement_date), default=None)


__all__ = [
    "ensure_utc",
    "latest_movement",
    "resolve_reference_time",
    "whole_days_between",
]
