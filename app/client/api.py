"""
Async HTTP client for the photo albums API.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

logger = logging.getLogger("app.client")

DEFAULT_BASE_URL = "http://127.0.0.1:8000"


class AlbumsClient:
    """
    Thin wrapper over httpx.AsyncClient.

    Every method raises httpx.HTTPStatusError for non-2xx answers and
    returns the decoded JSON body otherwise.

    Usage:
        async with AlbumsClient() as client:
            albums = await client.list_albums()
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "AlbumsClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        response = await self._client.request(method, url, **kwargs)
        if response.is_error:
            logger.warning(
                "API request failed",
                extra={
                    "event": "client",
                    "http_method": method,
                    "http_path": url,
                    "http_status": response.status_code,
                },
            )
        response.raise_for_status()
        return response

    async def _json(self, method: str, url: str, **kwargs: Any) -> Any:
        return (await self._request(method, url, **kwargs)).json()

    # ============== Albums ==============

    async def list_albums(self) -> List[Dict[str, Any]]:
        return await self._json("GET", "/albums/")

    async def get_album(self, album_id: int) -> Dict[str, Any]:
        return await self._json("GET", f"/albums/{album_id}")

    async def get_album_photos(self, album_id: int) -> List[Dict[str, Any]]:
        """Photos of an album in display order."""
        return (await self.get_album(album_id))["photos"]

    async def create_album(self, name: str, description: Optional[str] = None) -> Dict[str, Any]:
        return await self._json(
            "POST", "/albums/", json={"name": name, "description": description}
        )

    async def update_album(
        self, album_id: int, name: str, description: Optional[str] = None
    ) -> Dict[str, Any]:
        return await self._json(
            "PUT", f"/albums/{album_id}", json={"name": name, "description": description}
        )

    async def delete_album(self, album_id: int) -> Dict[str, Any]:
        return await self._json("DELETE", f"/albums/{album_id}")

    async def clear_album(self, album_id: int) -> Dict[str, Any]:
        return await self._json("DELETE", f"/albums/{album_id}/photos")

    async def delete_all_albums(self) -> Dict[str, Any]:
        return await self._json("DELETE", "/albums/")

    async def count_albums(self) -> int:
        return (await self._json("GET", "/albums/count"))["albums"]

    async def reorder_albums(self, payload: Sequence[Dict[str, int]]) -> Dict[str, Any]:
        return await self._json("POST", "/albums/reorder", json={"albums": list(payload)})

    async def set_cover(self, album_id: int, photo_id: int) -> Dict[str, Any]:
        return await self._json(
            "PATCH", "/albums/cover", json={"photo_id": photo_id, "album_id": album_id}
        )

    async def move_photo(self, photo_id: int, target_album_id: int) -> Dict[str, Any]:
        return await self._json(
            "PATCH",
            "/albums/move",
            json={"photo_id": photo_id, "target_album_id": target_album_id},
        )

    async def download_album(self, album_id: int) -> bytes:
        """ZIP archive bytes."""
        return (await self._request("GET", f"/albums/{album_id}/download")).content

    # ============== Photos ==============

    async def upload_photo(
        self,
        album_id: int,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> Dict[str, Any]:
        return await self._json(
            "POST",
            "/photos/upload",
            data={"album_id": str(album_id)},
            files={"photo": (filename, content, content_type)},
        )

    async def delete_photo(self, photo_id: int) -> Dict[str, Any]:
        return await self._json("DELETE", f"/photos/{photo_id}")

    async def reorder_photos(self, payload: Sequence[Dict[str, int]]) -> Dict[str, Any]:
        return await self._json("POST", "/photos/reorder", json={"photos": list(payload)})

    async def count_photos(self) -> int:
        return (await self._json("GET", "/photos/count"))["photos"]

    async def count_photos_by_album(self, album_id: int) -> int:
        return (
            await self._json("GET", "/photos/count-by-album", params={"album_id": album_id})
        )["photo_count"]

    # ============== Theme & system ==============

    async def get_theme(self) -> str:
        return (await self._json("GET", "/theme"))["theme"]

    async def save_theme(self, theme: str) -> str:
        return (await self._json("POST", "/theme", json={"theme": theme}))["theme"]

    async def dir_size(self) -> str:
        return (await self._json("GET", "/system/dir-size"))["size"]

    async def proxy_image(self, url: str) -> Tuple[str, bytes]:
        """
        Fetch a remote image through the server.

        Returns:
            (content type, bytes)
        """
        response = await self._request(
            "GET", "/proxy", params={"url": url}, headers={"Accept": "image/*"}
        )
        content_type = response.headers.get("content-type", "").split(";")[0].strip()
        return content_type, response.content
