"""
System endpoints integration tests.

Verifies:
- Root, health and metrics endpoints
- Upload directory size
- Remote image proxy (remote host replaced by httpx.MockTransport)
- Request ID propagation
"""
import httpx
import pytest
from fastapi.testclient import TestClient

from app.services.proxy import ImageProxyService


def _use_transport(monkeypatch, handler):
    """Make the proxy router talk to a mock remote host."""
    transport = httpx.MockTransport(handler)
    monkeypatch.setattr(
        "app.routers.system.ImageProxyService",
        lambda: ImageProxyService(transport=transport),
    )


class TestRootAndHealth:

    def test_root(self, client: TestClient):
        data = client.get("/").json()

        assert data["name"] == "Photo Albums"
        assert data["docs"] == "/docs"

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_metrics_exposed(self, client: TestClient):
        client.post("/albums/", json={"name": "Counted"})

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "photo_albums_album_operations_total" in response.text

    def test_request_id_header(self, client: TestClient):
        response = client.get("/albums/", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"

    def test_request_id_generated(self, client: TestClient):
        assert client.get("/albums/").headers.get("X-Request-ID")


class TestDirSize:

    def test_empty_dir(self, client: TestClient):
        assert client.get("/system/dir-size").json() == {"size": "0 bytes"}

    def test_dir_size_counts_uploads(self, client: TestClient, album, upload, image_bytes):
        upload(album["id"])

        assert client.get("/system/dir-size").json() == {"size": f"{len(image_bytes)} bytes"}


class TestProxy:

    def test_proxy_returns_image(self, client: TestClient, monkeypatch):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/pics/cat.png"
            return httpx.Response(200, content=b"PNGDATA", headers={"content-type": "image/png"})

        _use_transport(monkeypatch, handler)

        response = client.get("/proxy", params={"url": "https://example.com/pics/cat.png?size=large"})

        assert response.status_code == 200
        assert response.content == b"PNGDATA"
        assert response.headers["content-type"] == "image/png"
        assert response.headers["content-disposition"] == 'attachment; filename="cat.png"'

    def test_proxy_requires_url(self, client: TestClient):
        assert client.get("/proxy").status_code == 422

    def test_proxy_rejects_non_http_url(self, client: TestClient):
        assert client.get("/proxy", params={"url": "file:///etc/passwd"}).status_code == 400

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, content=b"<html></html>", headers={"content-type": "text/html"}),
            httpx.Response(200, content=b"", headers={"content-type": "image/png"}),
            httpx.Response(404, content=b"missing"),
        ],
    )
    def test_proxy_upstream_failures(self, client: TestClient, monkeypatch, response):
        _use_transport(monkeypatch, lambda request: response)

        result = client.get("/proxy", params={"url": "https://example.com/pics/cat.png"})

        assert result.status_code == 502

    def test_proxy_unreachable_host(self, client: TestClient, monkeypatch):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        _use_transport(monkeypatch, handler)

        result = client.get("/proxy", params={"url": "https://example.com/pics/cat.png"})

        assert result.status_code == 502
        assert len(calls) == 2
