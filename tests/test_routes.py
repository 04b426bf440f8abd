import pytest
from fastapi.testclient import TestClient

from badges_server.main import create_app


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))


def test_status(client):
    response = client.get("/api/v1/status")
    assert response.status_code == 200
    assert response.json() == {"service": "badges-server", "status": "ok"}


def test_public_config_hides_secret(client):
    response = client.get("/api/v1/config")
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["site_url"] == "https://badges.example"
    assert body["disabled_actions"] == ["mint", "burn"]
    assert body["web_socket_pusher_port"] == 6001
    assert "nft_storage_api_key" not in body
    assert "nft-storage-secret" not in response.text


def test_resolve_ipfs_url(client):
    response = client.get("/api/v1/ipfs/resolve", params={"url": "ipfs://bafy/badge.png"})
    assert response.status_code == 200, response.text
    assert response.json() == {
        "url": "ipfs://bafy/badge.png",
        "resolved": "https://gw.example/ipfs/bafy/badge.png",
        "rewritten": True,
    }

    metrics = client.get("/metrics").text
    assert "badges_ipfs_urls_rewritten_total 1.0" in metrics


def test_resolve_passes_through_other_urls(client):
    response = client.get("/api/v1/ipfs/resolve", params={"url": "https://example.com/a.png"})
    assert response.json()["resolved"] == "https://example.com/a.png"
    assert response.json()["rewritten"] is False


def test_resolve_accepts_empty_url(client):
    response = client.get("/api/v1/ipfs/resolve", params={"url": ""})
    assert response.status_code == 200
    assert response.json()["resolved"] == ""


def test_resolve_requires_url(client):
    assert client.get("/api/v1/ipfs/resolve").status_code == 422
