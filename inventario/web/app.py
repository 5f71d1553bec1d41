"""FastAPI application that exposes the inventory analytics engine as JSON."""
from __future__ import annotations

import logging
from datetime import datetime
from functools import lru_cache

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Query
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..analytics import (
    Alert,
    AnalyticsPolicy,
    InventoryDataset,
    InventoryReport,
    KPISnapshot,
    ProductAnalytics,
    analyze_products,
    calculate_inventory_kpis,
    generate_alerts,
    generate_inventory_report,
    sort_alerts_by_priority,
)
from ..logging_config import configure_logging

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 5


class Settings(BaseSettings):
    """Application configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="INVENTARIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    log_file: str | None = None
    engine_log_level: str | None = None
    lead_time_days: float = 7.0
    sales_window_days: int = 30
    default_min_stock: int = 10
    default_safety_stock: int = 5
    expiry_window_days: int = 30


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""

    try:
        return Settings()
    except ValidationError as exc:
        invalid = {str(err["loc"][0]) for err in exc.errors() if err.get("loc")}
        raise RuntimeError(
            "Variables de entorno inválidas: " + ", ".join(sorted(invalid))
        ) from exc


def build_policy(settings: Settings) -> AnalyticsPolicy:
    """Translate the configured overrides into an engine policy."""

    return AnalyticsPolicy(
        lead_time_days=settings.lead_time_days,
        sales_window_days=settings.sales_window_days,
        default_min_stock=settings.default_min_stock,
        default_safety_stock=settings.default_safety_stock,
        expiry_window_days=settings.expiry_window_days,
    )


def get_policy(settings: Settings = Depends(get_settings)) -> AnalyticsPolicy:
    return build_policy(settings)


app = FastAPI(
    title="Inventario Analítica",
    description="KPIs, diagnóstico por producto y alertas de inventario.",
    version="0.1.0",
)


@app.on_event("startup")
def configure_app_logging() -> None:
    """Inicializa el logging global según las variables de entorno."""

    settings = get_settings()
    configure_logging(
        settings.log_level, settings.log_file, engine_level=settings.engine_log_level
    )
    logger.debug("Logging configurado para la aplicación web")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/inventory/kpis", response_model=KPISnapshot)
def api_inventory_kpis(
    dataset: InventoryDataset,
    policy: AnalyticsPolicy = Depends(get_policy),
) -> KPISnapshot:
    """Portfolio KPI snapshot for the dashboard summary widgets."""

    return calculate_inventory_kpis(
        dataset.products, dataset.movements, dataset.sales, policy=policy
    )


@app.post("/api/inventory/analytics", response_model=list[ProductAnalytics])
def api_product_analytics(
    dataset: InventoryDataset,
    as_of: datetime | None = None,
    policy: AnalyticsPolicy = Depends(get_policy),
) -> list[ProductAnalytics]:
    """Per-product diagnostics, one record per product in request order."""

    return analyze_products(
        dataset.products, dataset.movements, dataset.sales, as_of=as_of, policy=policy
    )


@app.post("/api/inventory/alerts", response_model=list[Alert])
def api_inventory_alerts(
    dataset: InventoryDataset,
    as_of: datetime | None = None,
    sort_by_priority: bool = False,
    policy: AnalyticsPolicy = Depends(get_policy),
) -> list[Alert]:
    """Alerts in product order, or re-sorted by severity on request."""

    alerts = generate_alerts(dataset.products, as_of=as_of, policy=policy)
    if sort_by_priority:
        alerts = sort_alerts_by_priority(alerts)
    logger.info("Alertas generadas: %d", len(alerts))
    return alerts


@app.post("/api/inventory/report", response_model=InventoryReport)
def api_inventory_report(
    dataset: InventoryDataset,
    as_of: datetime | None = None,
    top_n: int = Query(default=DEFAULT_TOP_N, ge=1, le=25),
    policy: AnalyticsPolicy = Depends(get_policy),
) -> InventoryReport:
    """Consolidated report: KPIs, product diagnostics, alerts and rankings."""

    return generate_inventory_report(
        dataset.products,
        dataset.movements,
        dataset.sales,
        as_of=as_of,
        policy=policy,
        top_n=top_n,
    )
