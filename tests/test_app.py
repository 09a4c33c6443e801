import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch
import os
import sys

# Add the project root to sys.path to resolve module imports correctly
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from app import app
from router import limiter
from encoding import encode_id, get_service_encoder_config


@pytest.fixture(scope="function")
def client():
    """
    Pytest fixture to provide a test client with fresh rate-limit counters.
    The TestClient context manager runs the application's lifespan events.
    """
    limiter.reset()
    with TestClient(app) as test_client:
        yield test_client


# ===================================
# 1. Monitoring
# ===================================

def test_health_check_ok(client: TestClient):
    """The health check round-trips sample ids through the codec."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["services"]["codec"] == "ok"


def test_health_check_reports_codec_failure(client: TestClient):
    with patch("router.decode_id", return_value=None):
        response = client.get("/health")
    assert response.status_code == 503
    assert response.json()["services"]["codec"] == "error"


# ===================================
# 2. Encode / Decode Endpoints
# ===================================

def test_encode_and_decode_roundtrip(client: TestClient):
    encode_response = client.post("/api/v1/ids/encode", json={"id": "12345"})
    assert encode_response.status_code == 201
    data = encode_response.json()
    assert data["view_details_url"] is None
    token = data["token"]

    decode_response = client.post("/api/v1/ids/decode", json={"token": token})
    assert decode_response.status_code == 200
    assert decode_response.json() == {"id": "12345"}


def test_encode_integer_id(client: TestClient):
    token = client.post("/api/v1/ids/encode", json={"id": 987}).json()["token"]
    response = client.post("/api/v1/ids/decode", json={"token": token})
    assert response.json()["id"] == "987"


def test_encode_with_view_details_type(client: TestClient):
    response = client.post("/api/v1/ids/encode", json={"id": "42", "type": "property"})
    assert response.status_code == 201
    data = response.json()
    assert data["view_details_url"] == f"/view-details?ref={data['token']}&type=property"


def test_encode_rejects_unencodable_id(client: TestClient):
    response = client.post("/api/v1/ids/encode", json={"id": "€42"})
    assert response.status_code == 400
    assert "cannot be encoded" in response.json()["error"]


def test_encode_invalid_payload(client: TestClient):
    """Missing ids and unknown types fail request validation."""
    assert client.post("/api/v1/ids/encode", json={}).status_code == 422
    assert client.post("/api/v1/ids/encode", json={"id": "1", "type": "invoice"}).status_code == 422


def test_decode_malformed_token(client: TestClient):
    response = client.post("/api/v1/ids/decode", json={"token": "not-valid-base64!!!"})
    assert response.status_code == 404
    assert response.json()["error"] == "Token could not be decoded"


def test_decode_token_from_another_key(client: TestClient):
    token = encode_id("12345", {"custom_key": "SomeOtherKey"})
    response = client.post("/api/v1/ids/decode", json={"token": token})
    assert response.status_code == 404


def test_decode_empty_token(client: TestClient):
    response = client.post("/api/v1/ids/decode", json={"token": ""})
    assert response.status_code == 422


# ===================================
# 3. View Details Links
# ===================================

def test_view_details_link_and_resolve(client: TestClient):
    link_response = client.get("/api/v1/view-details/link", params={"id": "8812", "type": "tour-booking"})
    assert link_response.status_code == 200
    url = link_response.json()["url"]
    assert url.startswith("/view-details?ref=")

    resolve_response = client.get(url)
    assert resolve_response.status_code == 200
    assert resolve_response.json() == {"id": "8812", "type": "tour-booking"}


def test_view_details_link_unknown_type(client: TestClient):
    response = client.get("/api/v1/view-details/link", params={"id": "1", "type": "invoice"})
    assert response.status_code == 400
    assert "Unknown view details type" in response.json()["error"]


def test_resolve_view_details_invalid_links(client: TestClient):
    token = encode_id("1", get_service_encoder_config())
    assert client.get("/view-details").status_code == 404
    assert client.get("/view-details", params={"ref": token}).status_code == 404
    assert client.get("/view-details", params={"ref": token, "type": "invoice"}).status_code == 404
    response = client.get("/view-details", params={"ref": "tampered", "type": "user"})
    assert response.status_code == 404
    assert response.json()["error"] == "Link is invalid or has expired"


def test_view_details_types(client: TestClient):
    response = client.get("/api/v1/view-details/types")
    assert response.status_code == 200
    assert "booking" in response.json()["types"]
    assert len(response.json()["types"]) == 7
