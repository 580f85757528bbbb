"""Tests for drop intake."""
import base64

import httpx
import pytest

from app.client.api import AlbumsClient
from app.client.drop import (
    DroppedFile,
    DropResult,
    collect_drop,
    decode_data_url,
    filename_from_url,
    is_droppable_image_url,
    upload_drop,
)


class TestDroppableUrl:

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/images/cat.jpg",
            "http://cdn.example.org/a/b/photo.PNG?width=200",
            "https://example.com/pictures/anim.webp",
        ],
    )
    def test_accepted(self, url):
        assert is_droppable_image_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "ftp://example.com/images/cat.jpg",
            "https://a.io/x.jpg",  # too short
            "http://localhost:3000/album/12/cover.jpg",  # in-app link
            "https://example.com/images/cat.jpg.html",
            "https://example.com/page?file=cat.jpg",
            "",
        ],
    )
    def test_rejected(self, url):
        assert not is_droppable_image_url(url)


class TestDataUrl:

    def test_base64(self):
        payload = base64.b64encode(b"\x89PNGdata").decode()
        assert decode_data_url(f"data:image/png;base64,{payload}") == ("image/png", b"\x89PNGdata")

    def test_plain(self):
        assert decode_data_url("data:image/svg+xml,%3Csvg%3E") == ("image/svg+xml", b"<svg>")

    @pytest.mark.parametrize("value", ["image/png;base64,AAAA", "data:image/png;base64,@@@", ""])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            decode_data_url(value)


class TestFilenameFromUrl:

    def test_last_segment_without_query(self):
        assert filename_from_url("https://example.com/a/cat%20pic.jpg?x=1") == "cat pic.jpg"

    def test_fallback(self):
        assert filename_from_url("https://example.com/", now_ms=123) == "image_from_123.jpg"


def _client(handler) -> AlbumsClient:
    return AlbumsClient(base_url="http://test", transport=httpx.MockTransport(handler))


class TestCollectDrop:

    @pytest.mark.asyncio
    async def test_local_files_keep_only_images(self):
        files = [
            DroppedFile("a.png", b"1", "image/png"),
            DroppedFile("notes.txt", b"2", "text/plain"),
        ]
        async with _client(lambda request: httpx.Response(500)) as client:
            result = await collect_drop(client, files=files)

        assert [f.filename for f in result.files] == ["a.png"]
        assert result.errors == []

    @pytest.mark.asyncio
    async def test_url_goes_through_proxy(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b"JPEG", headers={"content-type": "image/jpeg"})

        async with _client(handler) as client:
            result = await collect_drop(client, uri_list="https://example.com/images/dog.jpg")

        assert seen[0].url.path == "/proxy"
        assert seen[0].url.params["url"] == "https://example.com/images/dog.jpg"
        assert result.files == [DroppedFile("dog.jpg", b"JPEG", "image/jpeg")]

    @pytest.mark.asyncio
    async def test_proxy_failure_is_reported(self):
        async with _client(lambda request: httpx.Response(502)) as client:
            result = await collect_drop(client, plain_text="https://example.com/images/dog.jpg")

        assert result.files == []
        assert len(result.errors) == 1

    @pytest.mark.asyncio
    async def test_ui_text_is_ignored(self):
        async with _client(lambda request: httpx.Response(500)) as client:
            result = await collect_drop(client, plain_text="http://localhost:3000/album/3")

        assert result == DropResult()

    @pytest.mark.asyncio
    async def test_data_url(self):
        payload = base64.b64encode(b"GIF89a").decode()
        async with _client(lambda request: httpx.Response(500)) as client:
            result = await collect_drop(client, plain_text=f"data:image/gif;base64,{payload}")

        assert len(result.files) == 1
        assert result.files[0].content == b"GIF89a"
        assert result.files[0].content_type == "image/gif"
        assert result.files[0].filename.startswith("image_from_data_")


@pytest.mark.asyncio
async def test_upload_drop_posts_each_file():
    uploads = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/photos/upload"
        uploads.append(request.content)
        return httpx.Response(201, json={"id": len(uploads)})

    result = DropResult(files=[
        DroppedFile("a.png", b"A", "image/png"),
        DroppedFile("b.png", b"B", "image/png"),
    ])
    async with _client(handler) as client:
        uploaded = await upload_drop(client, 4, result)

    assert uploaded == [{"id": 1}, {"id": 2}]
    assert b'name="album_id"' in uploads[0]
    assert b'filename="a.png"' in uploads[0]
