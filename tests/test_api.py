"""
Tests for the FastAPI application.

All requests run against the in-memory Supabase client from conftest.
"""

from __future__ import annotations

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from api.main import app
from domain.time import utc_today


@pytest.fixture
def client(fake_supabase) -> TestClient:
    return TestClient(app)


@pytest.fixture
def fleet(fake_supabase):
    today = utc_today()
    fake_supabase.seed(
        "printers",
        {"id": 1, "printer_name": "Busy", "status": "Printing", "job_queue": 2, "hours_printed": 10,
         "last_maintenance_date": today.isoformat(), "created_at": "2025-01-04T00:00:00Z"},
        {"id": 2, "printer_name": "Idle Long Queue", "status": "Idle", "job_queue": 5, "hours_printed": 550,
         "last_maintenance_date": today.isoformat(), "created_at": "2025-01-03T00:00:00Z"},
        {"id": 3, "printer_name": "Idle Short Queue", "status": "Idle", "job_queue": 1, "hours_printed": 0,
         "last_maintenance_date": (today - timedelta(days=50)).isoformat(), "created_at": "2025-01-02T00:00:00Z"},
        {"id": 4, "printer_name": "Down", "status": "Maintenance", "job_queue": 0, "hours_printed": 0,
         "last_maintenance_date": today.isoformat(), "created_at": "2025-01-01T00:00:00Z"},
    )
    return fake_supabase


@pytest.fixture
def catalog(fake_supabase):
    fake_supabase.seed(
        "products",
        {"id": 1, "product_name": "Cable Clip", "weight": 10, "print_time": 0.5, "required_materials": ["PLA"]},
    )
    fake_supabase.seed("inventory", {"id": 1, "material_name": "PLA Black", "quantity_available": 1000})
    return fake_supabase


def test_health_and_root(client: TestClient) -> None:
    health = client.get("/health")
    root = client.get("/")

    assert health.status_code == 200
    assert health.json()["status"] == "healthy"
    assert health.json()["service"] == "print-shop-erp-api"
    assert root.json()["docs"] == "/docs"


def test_availability_in_production(client: TestClient, fake_supabase) -> None:
    fake_supabase.seed(
        "print_jobs",
        {"id": 1, "product_id": 12, "printer_id": 1, "quantity": 10, "status": "Printing",
         "estimated_print_time": 4, "started_at": "2025-06-01T10:00:00Z"},
    )

    response = client.post("/api/v1/products/availability", json={"product_id": 12, "quantity": 5})

    assert response.status_code == 200
    body = response.json()
    assert body["available_stock"] == 0
    assert body["in_production"] == 10
    assert body["total_available"] == 10
    assert body["has_production_in_progress"] is True
    assert body["availability_status"] == "in_production"
    assert body["degraded"] is False


def test_availability_available_from_stock(client: TestClient, fake_supabase) -> None:
    fake_supabase.seed("finished_goods_inventory", {"id": 1, "product_id": 3, "quantity_available": 3})

    body = client.post("/api/v1/products/availability", json={"product_id": 3, "quantity": 3}).json()

    assert body["availability_status"] == "available"


def test_availability_is_cached_until_invalidated(client: TestClient, fake_supabase) -> None:
    fake_supabase.seed("finished_goods_inventory", {"id": 1, "product_id": 3, "quantity_available": 3})
    request = {"product_id": 3, "quantity": 1}

    client.post("/api/v1/products/availability", json=request)
    fake_supabase.rows("finished_goods_inventory")[0]["quantity_available"] = 0
    cached = client.post("/api/v1/products/availability", json=request).json()
    invalidated = client.post("/api/v1/products/3/availability/invalidate").json()
    fresh = client.post("/api/v1/products/availability", json=request).json()

    assert cached["available_stock"] == 3
    assert invalidated == {"entries_removed": 1}
    assert fresh["available_stock"] == 0
    assert fresh["availability_status"] == "out_of_stock"
    assert client.post("/api/v1/products/availability/invalidate").json() == {"entries_removed": 1}


def test_availability_degraded_on_database_failure(client: TestClient, fake_supabase) -> None:
    fake_supabase.failing_tables.add("finished_goods_inventory")

    response = client.post("/api/v1/products/availability", json={"product_id": 3, "quantity": 1})

    assert response.status_code == 200
    assert response.json()["degraded"] is True
    assert response.json()["total_available"] == 0


@pytest.mark.parametrize("quantity", [0, -4])
def test_availability_invalid_quantity_is_400(client: TestClient, quantity: int) -> None:
    response = client.post("/api/v1/products/availability", json={"product_id": 3, "quantity": quantity})

    assert response.status_code == 400


@pytest.mark.parametrize("quantity", ["5", 5.0, True])
def test_availability_non_integer_quantity_is_rejected(client: TestClient, quantity: object) -> None:
    """Verify strings, floats and booleans are not coerced into a quantity."""

    response = client.post("/api/v1/products/availability", json={"product_id": 3, "quantity": quantity})

    assert response.status_code in (400, 422)


@pytest.mark.parametrize("field, value", [("product_id", "1"), ("quantity", 2.0), ("quantity", False), ("printer_id", "3")])
def test_job_plan_non_integer_fields_are_rejected(client: TestClient, catalog, field: str, value: object) -> None:
    body = {"product_id": 1, "quantity": 2}
    body[field] = value

    response = client.post("/api/v1/print-jobs/plan", json=body)

    assert response.status_code in (400, 422)


def test_availability_lists_production_jobs_and_product(client: TestClient, catalog) -> None:
    catalog.rows("products")[0]["sku"] = "CC-01"
    catalog.seed(
        "print_jobs",
        {"id": 7, "product_id": 1, "printer_id": 2, "quantity": 6, "status": "Printing",
         "estimated_print_time": 3, "started_at": "2025-06-01T10:00:00Z",
         "created_at": "2025-06-01T09:00:00Z", "printers": {"printer_name": "Prusa A"}},
        {"id": 8, "product_id": 1, "printer_id": 2, "quantity": 50, "status": "Cancelled",
         "created_at": "2025-06-01T08:00:00Z"},
    )

    body = client.post("/api/v1/products/availability", json={"product_id": 1, "quantity": 4}).json()

    assert body["product_name"] == "Cable Clip"
    assert body["sku"] == "CC-01"
    assert len(body["production_jobs"]) == 1
    job = body["production_jobs"][0]
    assert job["job_id"] == 7
    assert job["quantity"] == 6
    assert job["status"] == "Printing"
    assert job["printer_name"] == "Prusa A"
    assert job["started_at"].startswith("2025-06-01T10:00:00")
    assert job["estimated_completion"].startswith("2025-06-01T13:00:00")
    assert body["earliest_completion"] == job["estimated_completion"]


def test_availability_unknown_product_has_no_name(client: TestClient) -> None:
    body = client.post("/api/v1/products/availability", json={"product_id": 77, "quantity": 1}).json()

    assert body["product_name"] is None
    assert body["production_jobs"] == []


def test_availability_missing_fields_is_422(client: TestClient) -> None:
    response = client.post("/api/v1/products/availability", json={"quantity": 2})

    assert response.status_code == 422


def test_list_printers_with_maintenance(client: TestClient, fleet) -> None:
    body = client.get("/api/v1/printers").json()

    assert body["total_count"] == 4
    by_id = {p["id"]: p for p in body["printers"]}
    assert by_id[1]["maintenance"]["status"] == "ok"
    assert by_id[2]["maintenance"]["status"] == "due"
    assert by_id[3]["maintenance"]["status"] == "overdue"
    assert by_id[3]["maintenance"]["days_since_maintenance"] == 50


def test_list_printers_by_status(client: TestClient, fleet) -> None:
    idle = client.get("/api/v1/printers", params={"status": "Idle"}).json()
    bad = client.get("/api/v1/printers", params={"status": "Sleeping"})

    assert [p["id"] for p in idle["printers"]] == [2, 3]
    assert bad.status_code == 400


def test_recommendation(client: TestClient, fleet) -> None:
    body = client.get("/api/v1/printers/recommendation").json()

    assert body["can_schedule"] is True
    assert body["recommended"]["id"] == 3
    assert [p["id"] for p in body["alternatives"]] == [2, 1]


def test_recommendation_when_nothing_schedulable(client: TestClient, fake_supabase) -> None:
    fake_supabase.seed("printers", {"id": 1, "printer_name": "Off", "status": "Offline"})

    body = client.get("/api/v1/printers/recommendation").json()

    assert body == {"recommended": None, "alternatives": [], "can_schedule": False}


def test_maintenance_sweep(client: TestClient, fleet) -> None:
    response = client.post("/api/v1/maintenance/notifications", params={"user_id": 2})

    body = response.json()
    assert response.status_code == 200
    assert body["message"] == "Created 2 maintenance notifications"
    assert {n["printer_name"]: n["status"] for n in body["notifications"]} == {
        "Idle Long Queue": "due",
        "Idle Short Queue": "overdue",
    }
    assert len(fleet.rows("notifications")) == 2


def test_printers_database_failure_is_500(client: TestClient, fake_supabase) -> None:
    fake_supabase.failing_tables.add("printers")

    assert client.get("/api/v1/printers").status_code == 500


def test_plan_schedule_and_complete_job(client: TestClient, fleet, catalog) -> None:
    plan = client.post("/api/v1/print-jobs/plan", json={"product_id": 1, "quantity": 4}).json()
    created = client.post("/api/v1/print-jobs", json={"product_id": 1, "quantity": 4})
    job_id = created.json()["job_id"]
    printing = client.patch(f"/api/v1/print-jobs/{job_id}/status", json={"status": "Printing"})
    completed = client.patch(f"/api/v1/print-jobs/{job_id}/status", json={"status": "Completed"})
    availability = client.post("/api/v1/products/availability", json={"product_id": 1, "quantity": 4}).json()

    assert plan["can_schedule"] is True
    assert plan["recommended_printer"]["id"] == 3
    assert plan["materials"][0]["status"] == "Available"
    assert plan["availability"]["availability_status"] == "out_of_stock"
    assert created.status_code == 201
    assert printing.json()["started_at"] is not None
    assert completed.json()["status"] == "Completed"
    assert availability["availability_status"] == "available"


def test_plan_unknown_product_is_404(client: TestClient, fleet) -> None:
    response = client.post("/api/v1/print-jobs/plan", json={"product_id": 42, "quantity": 1})

    assert response.status_code == 404


def test_schedule_without_printers_is_409(client: TestClient, catalog) -> None:
    response = client.post("/api/v1/print-jobs", json={"product_id": 1, "quantity": 1})

    assert response.status_code == 409
    assert "No printer available" in response.json()["detail"]


def test_status_update_errors(client: TestClient, fake_supabase) -> None:
    assert client.patch("/api/v1/print-jobs/5/status", json={"status": "Exploded"}).status_code == 400
    assert client.patch("/api/v1/print-jobs/5/status", json={"status": "Cancelled"}).status_code == 404


def test_monitor_reports_overdue_jobs(client: TestClient, fake_supabase) -> None:
    started = date(2025, 1, 1).isoformat() + "T08:00:00Z"
    fake_supabase.seed(
        "print_jobs",
        {"id": 9, "product_id": 1, "printer_id": 1, "quantity": 1, "status": "Printing",
         "estimated_print_time": 2, "started_at": started, "products": {"product_name": "Cable Clip"}},
    )

    body = client.post("/api/v1/print-jobs/monitor").json()

    assert body["message"] == "Found 1 overdue jobs"
    assert body["notifications"][0]["job_id"] == 9
    assert body["notifications"][0]["product_name"] == "Cable Clip"
    assert len(fake_supabase.rows("notifications")) == 1
