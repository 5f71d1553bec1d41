"""Conversión de registros crudos (JSON de la API) a modelos analíticos."""
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .models import InventoryMovement, Product, Sale

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _load_records(
    model: type[ModelT], records: Iterable[Mapping[str, Any] | ModelT]
) -> list[ModelT]:
    loaded: list[ModelT] = []
    for record in records:
        if isinstance(record, model):
            loaded.append(record)
        else:
            loaded.append(model.model_validate(record))
    logger.debug("Cargados %d registros de %s", len(loaded), model.__name__)
    return loaded


def load_products(records: Iterable[Mapping[str, Any] | Product]) -> list[Product]:
    """Valida los productos recibidos.

    Los errores de validación (por ejemplo un precio no numérico) se propagan
    sin modificar: son un incumplimiento de la capa de datos.
    """

    return _load_records(Product, records)


def load_movements(
    records: Iterable[Mapping[str, Any] | InventoryMovement],
) -> list[InventoryMovement]:
    """Valida los movimientos de inventario recibidos."""

    return _load_records(InventoryMovement, records)


def load_sales(records: Iterable[Mapping[str, Any] | Sale]) -> list[Sale]:
    """Valida las líneas de venta recibidas."""

    return _load_records(Sale, records)


class InventoryDataset(BaseModel):
    """Colecciones de entrada de una sola consulta, consistentes entre sí."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    products: list[Product] = Field(default_factory=list)
    movements: list[InventoryMovement] = Field(
        default_factory=list,
        validation_alias=AliasChoices("movements", "inventoryMovements", "inventory_movements"),
    )
    sales: list[Sale] = Field(default_factory=list)


def load_dataset(payload: Mapping[str, Any]) -> InventoryDataset:
    """Construye un :class:`InventoryDataset` desde un diccionario con las tres colecciones."""

    dataset = InventoryDataset.model_validate(payload)
    logger.debug(
        "Dataset cargado: %d productos, %d movimientos, %d ventas",
        len(dataset.products),
        len(dataset.movements),
        len(dataset.sales),
    )
    return dataset


__all__ = [
    "InventoryDataset",
    "load_dataset",
    "load_movements",
    "load_products",
    "load_sales",
]
