from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from inventario.analytics import AnalyticsPolicy
from inventario.logging_config import ENGINE_LOGGER, configure_logging
from inventario.web.app import Settings, app, build_policy, get_policy, get_settings

AS_OF = "2024-06-01T12:00:00+00:00"


@pytest.fixture()
def dataset() -> dict[str, Any]:
    return {
        "products": [
            {"id": "P1", "name": "Abrigo", "price": "200", "stock": 40, "maxStock": 100},
            {"id": "P2", "name": "Bufanda", "price": "20", "stock": 3, "minStock": 10,
             "costPrice": "16"},
            {"id": "P3", "name": "Gorra", "price": "10", "stock": 0, "minStock": 10},
            {"id": "P4", "name": "Guantes", "price": "10", "stock": 130, "maxStock": 100},
        ],
        "inventoryMovements": [
            {"productId": "P1", "movementType": "salida", "quantity": 2,
             "movementDate": "2024-05-30T10:00:00+00:00"},
        ],
        "sales": [
            {"productId": "P1", "quantity": 10, "totalAmount": "2000"},
        ],
    }


@pytest.fixture()
def client() -> TestClient:
    get_settings.cache_clear()
    app.dependency_overrides[get_settings] = lambda: Settings()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    get_settings.cache_clear()


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_kpis_endpoint(client: TestClient, dataset: dict[str, Any]) -> None:
    response = client.post("/api/inventory/kpis", json=dataset)

    assert response.status_code == 200
    body = response.json()
    assert body["totalProducts"] == 4
    assert body["totalStockValue"] == pytest.approx(9360)
    assert body["lowStockProducts"] == 2
    assert body["outOfStockProducts"] == 1
    assert body["excessStockProducts"] == 1
    assert body["serviceLevel"] == pytest.approx(95)
    assert set(body["abcDistribution"]) == {"A", "B", "C"}


def test_analytics_endpoint(client: TestClient, dataset: dict[str, Any]) -> None:
    response = client.post(
        "/api/inventory/analytics", params={"as_of": AS_OF}, json=dataset
    )

    assert response.status_code == 200
    body = response.json()
    assert [item["id"] for item in body] == ["P1", "P2", "P3", "P4"]
    bufanda = body[1]
    assert bufanda["profitMargin"] == pytest.approx(20)
    assert bufanda["daysWithoutMovement"] == 999
    assert bufanda["recommendation"] == "REPLENISH"
    assert bufanda["alertLevel"] == "CRITICAL"
    assert body[0]["daysWithoutMovement"] == 2
    assert body[0]["rotationRate"] == pytest.approx(0.25)


def test_alerts_endpoint_sorted_by_priority(
    client: TestClient, dataset: dict[str, Any]
) -> None:
    response = client.post(
        "/api/inventory/alerts",
        params={"as_of": AS_OF, "sort_by_priority": "true"},
        json=dataset,
    )

    assert response.status_code == 200
    body = response.json()
    assert [(item["productId"], item["alertType"]) for item in body] == [
        ("P2", "low_stock"),
        ("P3", "low_stock"),
        ("P3", "out_of_stock"),
        ("P4", "excess_stock"),
    ]
    assert body[-1]["threshold"] == pytest.approx(120)


def test_report_endpoint(client: TestClient, dataset: dict[str, Any]) -> None:
    response = client.post(
        "/api/inventory/report", params={"as_of": AS_OF, "top_n": 2}, json=dataset
    )

    assert response.status_code == 200
    body = response.json()
    assert body["kpis"]["totalProducts"] == 4
    assert len(body["products"]) == 4
    assert len(body["alerts"]) == 4
    assert body["generatedAt"].startswith("2024-06-01T12:00:00")
    assert body["recommendationCounts"]["REPLENISH"] == 2
    assert set(body["abcClasses"]) == {"P1", "P2", "P3", "P4"}
    assert len(body["rankings"]["topRoi"]) == 2
    assert body["rankings"]["topRoi"][0]["productId"] == "P1"
    assert "daysWithoutMovement" in body["rankings"]["slowestMovers"][0]
    assert body["metadata"] == {"topN": 2, "sentinelDays": 999}


def test_policy_override_changes_defaults(
    client: TestClient, dataset: dict[str, Any]
) -> None:
    app.dependency_overrides[get_policy] = lambda: AnalyticsPolicy(default_min_stock=50)

    response = client.post(
        "/api/inventory/alerts", params={"as_of": AS_OF}, json=dataset
    )

    body = response.json()
    assert [(item["productId"], item["alertType"]) for item in body] == [
        ("P1", "low_stock"),
        ("P2", "low_stock"),
        ("P3", "low_stock"),
        ("P3", "out_of_stock"),
        ("P4", "excess_stock"),
    ]
    assert body[0]["priority"] == "high"
    assert body[0]["threshold"] == 50


def test_invalid_price_is_rejected(client: TestClient, dataset: dict[str, Any]) -> None:
    dataset["products"][0]["price"] = "gratis"

    response = client.post("/api/inventory/kpis", json=dataset)

    assert response.status_code == 422


def test_build_policy_uses_settings() -> None:
    policy = build_policy(Settings(lead_time_days=14, expiry_window_days=45))

    assert policy.lead_time_days == 14
    assert policy.expiry_window_days == 45
    assert policy.default_min_stock == 10


def test_startup_applies_engine_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INVENTARIO_ENGINE_LOG_LEVEL", "DEBUG")
    get_settings.cache_clear()
    engine_logger = logging.getLogger(ENGINE_LOGGER)

    try:
        with TestClient(app) as test_client:
            assert test_client.get("/health").status_code == 200
            assert engine_logger.level == logging.DEBUG
    finally:
        engine_logger.setLevel(logging.NOTSET)
        get_settings.cache_clear()


def test_configure_logging_adds_single_file_handler(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "inventario.log"
    root_logger = logging.getLogger()
    previous_level = root_logger.level

    try:
        configure_logging("WARNING", str(log_file), engine_level="INFO")
        configure_logging("WARNING", str(log_file), engine_level="INFO")

        file_handlers = [
            handler
            for handler in root_logger.handlers
            if isinstance(handler, logging.FileHandler)
            and handler.baseFilename == str(log_file.resolve())
        ]
        assert len(file_handlers) == 1
        assert log_file.parent.is_dir()
        assert root_logger.level == logging.WARNING
        assert logging.getLogger(ENGINE_LOGGER).level == logging.INFO
    finally:
        for handler in list(root_logger.handlers):
            if isinstance(handler, logging.FileHandler):
                root_logger.removeHandler(handler)
                handler.close()
        root_logger.setLevel(previous_level)
        logging.getLogger(ENGINE_LOGGER).setLevel(logging.NOTSET)
