import pytest
from fastapi.testclient import TestClient
from shelflife.runtime.receipt_server import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_parse_text(client: TestClient) -> None:
    response = client.post("/parse-text", json={"text": "2 x Milk £1.50\nBread\nTOTAL £3.00"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["items"] == [
        {"name": "Milk", "quantity": 2, "price": 1.5},
        {"name": "Bread", "quantity": 1, "price": 0.0},
    ]
    assert body["total"] == 3.0
    assert body["warnings"] == []
    assert body["lines"] == ["2 x Milk £1.50", "Bread"]
    assert body["preselected"] == [0]


def test_parse_text_reports_mismatch(client: TestClient) -> None:
    body = client.post("/parse-text", json={"text": "Milk £1.50\nTOTAL £9.00"}).json()

    assert body["total"] == 9.0
    assert len(body["warnings"]) == 1
    assert body["warnings"][0]["after_item_index"] == 0


@pytest.mark.parametrize("payload", [{}, {"text": 12}, ["text"]])
def test_parse_text_rejects_bad_body(client: TestClient, payload: object) -> None:
    response = client.post("/parse-text", json=payload)

    assert response.status_code == 400
    assert response.json()["status"] == "error"


def test_parse_text_rejects_non_json(client: TestClient) -> None:
    response = client.post("/parse-text", content=b"2 x Milk", headers={"content-type": "text/plain"})

    assert response.status_code == 400


def test_filter_lines(client: TestClient) -> None:
    response = client.post("/filter-lines", json={"lines": ["TOTAL £3.00", "Bread", " £1.20 ", "14:32"]})

    assert response.status_code == 200
    assert response.json() == {"status": "success", "lines": ["Bread", "£1.20"], "preselected": [1]}


def test_parse_selected(client: TestClient) -> None:
    response = client.post("/parse-selected", json={"lines": ["£4.00"]})

    assert response.status_code == 200
    assert response.json()["items"] == [{"name": "Unknown Item", "quantity": 1, "price": 4.0}]


@pytest.mark.parametrize("payload", [{"lines": []}, {"lines": ["  "]}])
def test_parse_selected_requires_lines(client: TestClient, payload: dict) -> None:
    response = client.post("/parse-selected", json=payload)

    assert response.status_code == 400
    assert response.json()["message"] == "No lines selected"


def test_parse_selected_rejects_non_string_lines(client: TestClient) -> None:
    assert client.post("/parse-selected", json={"lines": [1, 2]}).status_code == 400
