from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from splitscan.api import server


@pytest.fixture
def client() -> Iterator[TestClient]:
    with TestClient(server.app) as test_client:
        yield test_client


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_parse_json_body(client: TestClient) -> None:
    response = client.post("/parse", json={"text": "2x Apple Juice $3.99\nTotal: $7.98"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "parsed"
    result = body["result"]
    assert result["items"][0]["name"] == "Apple Juice"
    assert result["items"][0]["unit_price"] == "3.99"
    assert result["items"][0]["quantity"] == 2
    assert result["items"][0]["total_price"] == "7.98"
    assert result["detected_total"] == "7.98"
    assert result["needs_review"] is False


def test_parse_plain_text_body(client: TestClient) -> None:
    response = client.post(
        "/parse",
        content="Milk 3.50\nBread 2.00\nTotal 10.70",
        headers={"content-type": "text/plain"},
    )

    assert response.status_code == 200
    result = response.json()["result"]
    assert result["items_total"] == "5.50"
    assert result["needs_review"] is True
    assert result["validation_flag"]["difference"] == "5.20"


def test_parse_confidence_is_applied(client: TestClient) -> None:
    response = client.post("/parse", json={"text": "Milk 3.50", "confidence": 0.6})

    assert response.json()["result"]["items"][0]["confidence"] == 0.6


@pytest.mark.parametrize(
    "body",
    [
        {"text": 5},
        {"confidence": 0.5},
        {"text": "Milk 3.50", "confidence": "high"},
        {"text": "Milk 3.50", "confidence": 1.5},
    ],
)
def test_parse_rejects_bad_fields(client: TestClient, body: dict[str, object]) -> None:
    response = client.post("/parse", json=body)

    assert response.status_code == 422
    assert response.json()["status"] == "error"


def test_parse_rejects_non_json_body(client: TestClient) -> None:
    response = client.post("/parse", content="{not json", headers={"content-type": "application/json"})

    assert response.status_code == 400


def test_parse_reports_not_a_receipt(client: TestClient) -> None:
    response = client.post("/parse", json={"text": "hello world"})

    assert response.status_code == 200
    assert response.json()["status"] == "not_a_receipt"


def test_decode_structured_payload(client: TestClient) -> None:
    response = client.post("/decode", json={"payload": '{"id":"TXN1","items":[{"name":"Coffee","price":4.5}]}'})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "decoded"
    assert body["payload"]["items"] == [{"name": "Coffee", "price": "4.50", "quantity": 1, "category": None}]
    assert body["result"]["source"] == "payload"


def test_decode_invalid_payload_is_unprocessable(client: TestClient) -> None:
    response = client.post("/decode", json={"payload": "not json, not an id!!"})

    assert response.status_code == 422
    body = response.json()
    assert body["status"] == "error"
    assert body["recovery_action"] == "manual_entry"
    assert body["user_message"]


def test_decode_requires_payload_string(client: TestClient) -> None:
    response = client.post("/decode", json={"payload": None})

    assert response.status_code == 422
