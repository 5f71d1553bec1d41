"""Modelos de datos utilizados por los módulos de analítica."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    """Base común: acepta nombres en camelCase (JSON del tablero) o snake_case."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class Product(_Record):
    """Producto del catálogo tal como lo entrega la capa de datos."""

    id: str = Field(..., description="Identificador único del producto")
    name: str = Field(..., description="Nombre comercial")
    category: str | None = Field(None, description="Categoría del producto")
    sku: str | None = Field(None, description="Código interno del producto")
    price: Decimal = Field(..., ge=0, description="Precio unitario de venta")
    cost_price: Decimal | None = Field(
        None, ge=0, description="Costo unitario; si falta se usa el precio de venta"
    )
    stock: int = Field(..., ge=0, description="Unidades disponibles")
    min_stock: int | None = Field(None, ge=0, description="Stock mínimo configurado")
    max_stock: int | None = Field(None, ge=0, description="Stock máximo configurado")
    safety_stock: int | None = Field(
        None, ge=0, description="Stock de seguridad definido manualmente"
    )
    ordering_cost: Decimal | None = Field(None, ge=0, description="Costo por pedido")
    storage_cost: Decimal | None = Field(
        None,
        ge=0,
        validation_alias=AliasChoices("storage_cost", "storageCost", "storagecost"),
        description="Costo de almacenamiento por unidad",
    )
    expiration_date: datetime | None = Field(None, description="Fecha de vencimiento")

    @field_validator("id", "name", mode="before")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip() if isinstance(value, str) else value

    @field_validator("category", "sku", mode="before")
    @classmethod
    def _strip_optional(cls, value: str | None) -> str | None:
        if value is None:
            return value
        return str(value).strip() or None


class InventoryMovement(_Record):
    """Movimiento de inventario registrado por una operación externa."""

    id: str | None = Field(None, description="Identificador del movimiento")
    product_id: str = Field(..., description="Producto afectado")
    movement_type: str = Field(
        "ajuste", description="entrada, salida, transferencia o ajuste"
    )
    quantity: int = Field(0, description="Unidades movidas")
    movement_date: datetime = Field(..., description="Fecha del movimiento")

    @field_validator("product_id", mode="before")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip() if isinstance(value, str) else value


class Sale(_Record):
    """Línea de venta de un producto."""

    id: str | None = Field(None, description="Identificador de la venta")
    product_id: str = Field(..., description="Producto vendido")
    quantity: int = Field(..., ge=0, description="Unidades vendidas")
    total_amount: Decimal = Field(..., description="Monto total de la venta")
    sale_date: datetime | None = Field(None, description="Fecha de la transacción")

    @field_validator("product_id", mode="before")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip() if isinstance(value, str) else value


class Recommendation(str, Enum):
    REPLENISH = "REPLENISH"
    LIQUIDATE = "LIQUIDATE"
    MAINTAIN = "MAINTAIN"
    REDUCE = "REDUCE"


class AlertLevel(str, Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class AlertType(str, Enum):
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"
    EXCESS_STOCK = "excess_stock"
    EXPIRING = "expiring"


class AlertPriority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"


class ABCDistribution(BaseModel):
    """Porcentaje de productos (por cantidad) en cada clase ABC."""

    A: int = 0
    B: int = 0
    C: int = 0


class KPISnapshot(_Record):
    """Resumen de KPIs del portafolio; se recalcula en cada consulta."""

    total_stock_value: float = 0.0
    total_products: int = 0
    low_stock_products: int = 0
    out_of_stock_products: int = 0
    excess_stock_products: int = 0
    inventory_turnover: float = 0.0
    service_level: float = Field(
        0.0, description="Valor fijo de referencia, no se mide sobre pedidos reales"
    )
    days_of_inventory: int = 0
    abc_distribution: ABCDistribution = Field(default_factory=ABCDistribution)
    liquidity_index: int = 0
    inventory_accuracy: float = Field(
        0.0, description="Valor fijo de referencia, no proviene de conteos cíclicos"
    )


class ProductAnalytics(Product):
    """Producto extendido con métricas de diagnóstico y recomendación."""

    rotation_rate: float = 0.0
    days_without_movement: int = 0
    reorder_point: int = 0
    eoq: int = 0
    safety_stock_calculated: int = 0
    stock_coverage: int = 0
    profit_margin: float = 0.0
    roi: float = Field(
        0.0, description="Margen por rotación; puntaje de ranking, no un ROI financiero"
    )
    recommendation: Recommendation = Recommendation.MAINTAIN
    alert_level: AlertLevel = AlertLevel.LOW


class Alert(_Record):
    """Evento de alerta accionable para un producto."""

    product_id: str
    product_name: str
    alert_type: AlertType
    priority: AlertPriority
    message: str
    threshold: float | None = None
    current_value: float | None = None


class RankedProduct(_Record):
    """Fila base de un ranking del reporte."""

    product_id: str
    product_name: str
    category: str | None = None
    stock: int


class RoiRanking(RankedProduct):
    roi: float
    rotation_rate: float


class MovementRanking(RankedProduct):
    days_without_movement: int


class CoverageRanking(RankedProduct):
    stock_coverage: int
    reorder_point: int


class ReportRankings(_Record):
    top_roi: list[RoiRanking] = Field(default_factory=list)
    slowest_movers: list[MovementRanking] = Field(default_factory=list)
    lowest_coverage: list[CoverageRanking] = Field(default_factory=list)


class ReportMetadata(_Record):
    top_n: int
    sentinel_days: int


class InventoryReport(_Record):
    """Reporte consolidado; todas las secciones comparten la fecha de referencia."""

    generated_at: datetime
    kpis: KPISnapshot
    products: list[ProductAnalytics]
    alerts: list[Alert]
    abc_classes: dict[str, str] = Field(
        default_factory=dict, description="Clase ABC por id de producto"
    )
    recommendation_counts: dict[str, int] = Field(default_factory=dict)
    rankings: ReportRankings = Field(default_factory=ReportRankings)
    metadata: ReportMetadata


__all__ = [
    "ABCDistribution",
    "Alert",
    "AlertLevel",
    "AlertPriority",
    "AlertType",
    "CoverageRanking",
    "InventoryMovement",
    "InventoryReport",
    "KPISnapshot",
    "MovementRanking",
    "Product",
    "ProductAnalytics",
    "RankedProduct",
    "Recommendation",
    "ReportMetadata",
    "ReportRankings",
    "RoiRanking",
    "Sale",
]
