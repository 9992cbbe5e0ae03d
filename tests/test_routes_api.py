from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.services.route_loader import load_routes
from app.services.route_store import create_route_store

ROUTES_CSV = "\n".join(
    [
        "route_id,agency_id,route_short_name,route_long_name,route_type,route_color,route_sort_order",
        "B2,MTA,B2,Kings Hwy,3,00AEEF,2",
        "A1,,A1,Avenue A,3,,",
        "Q9,MTA,Q9,Queens Blvd,nope,,1",
        "C3,MTA,C3,Coney Island,1,ffffff,0",
    ]
)


@pytest.fixture()
def client() -> TestClient:
    store = create_route_store(load_routes(ROUTES_CSV))
    return TestClient(create_app(route_store=store))


def test_health_reports_ok_with_rejected_rows(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "routes_loaded": 3,
        "validation_errors": 1,
        "routes_error": None,
    }


def test_health_reports_degraded_source() -> None:
    client = TestClient(create_app(route_store=create_route_store(load_routes(None))))

    body = client.get("/health").json()

    assert body["status"] == "degraded"
    assert body["routes_loaded"] == 0
    assert body["routes_error"] is not None


def test_list_routes_keeps_source_order(client: TestClient) -> None:
    body = client.get("/routes").json()

    assert body["total"] == 3
    assert [route["route_id"] for route in body["routes"]] == ["B2", "A1", "C3"]
    assert body["routes"][2]["route_color"] == "FFFFFF"
    assert body["routes"][2]["route_type_name"] == "Subway/Metro"


def test_list_routes_sorted_with_missing_values_last(client: TestClient) -> None:
    ascending = client.get("/routes", params={"sort_by": "route_sort_order"}).json()
    descending = client.get("/routes", params={"sort_by": "route_sort_order", "descending": True}).json()

    assert [route["route_id"] for route in ascending["routes"]] == ["C3", "B2", "A1"]
    assert [route["route_id"] for route in descending["routes"]] == ["B2", "C3", "A1"]


def test_list_routes_paging(client: TestClient) -> None:
    body = client.get("/routes", params={"sort_by": "route_id", "offset": 1, "limit": 1}).json()

    assert body["total"] == 3
    assert body["offset"] == 1
    assert [route["route_id"] for route in body["routes"]] == ["B2"]


def test_list_routes_rejects_unknown_sort_column(client: TestClient) -> None:
    response = client.get("/routes", params={"sort_by": "route_url"})

    assert response.status_code == 422


def test_get_route_by_id(client: TestClient) -> None:
    response = client.get("/routes/A1")

    assert response.status_code == 200
    body = response.json()
    assert body["agency_id"] is None
    assert body["display_name"] == "Avenue A"


def test_get_unknown_route_returns_404(client: TestClient) -> None:
    response = client.get("/routes/Q9")

    assert response.status_code == 404


def test_validation_errors_lists_rejected_record(client: TestClient) -> None:
    body = client.get("/validation-errors").json()

    assert len(body) == 1
    assert body[0]["row_number"] == 4
    assert body[0]["record"]["route_id"] == "Q9"
    assert body[0]["field_errors"][0]["column"] == "route_type"
