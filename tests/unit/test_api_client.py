"""Tests for the async API client against a mocked transport."""
import json

import httpx
import pytest

from app.client.api import AlbumsClient


def _client(handler) -> AlbumsClient:
    return AlbumsClient(base_url="http://test", transport=httpx.MockTransport(handler))


class TestAlbumsClient:

    @pytest.mark.asyncio
    async def test_download_album_returns_raw_bytes(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.path == "/albums/4/download"
            return httpx.Response(
                200, content=b"PK\x03\x04zip", headers={"content-type": "application/zip"}
            )

        async with _client(handler) as client:
            assert await client.download_album(4) == b"PK\x03\x04zip"

    @pytest.mark.asyncio
    async def test_count_photos_by_album(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/photos/count-by-album"
            assert request.url.params["album_id"] == "7"
            return httpx.Response(200, json={"photo_count": 12})

        async with _client(handler) as client:
            assert await client.count_photos_by_album(7) == 12

    @pytest.mark.asyncio
    async def test_theme_round_trip(self):
        saved = {}

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/theme"
            if request.method == "POST":
                saved.update(json.loads(request.read()))
                return httpx.Response(200, json={"message": "Theme saved", "theme": saved["theme"]})
            return httpx.Response(200, json={"theme": saved.get("theme", "SpaceBlue")})

        async with _client(handler) as client:
            assert await client.get_theme() == "SpaceBlue"
            assert await client.save_theme("nord") == "nord"
            assert await client.get_theme() == "nord"

    @pytest.mark.asyncio
    async def test_dir_size(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/system/dir-size"
            return httpx.Response(200, json={"size": "1.50 KB"})

        async with _client(handler) as client:
            assert await client.dir_size() == "1.50 KB"

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"detail": "Album not found"})

        async with _client(handler) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.download_album(99)
