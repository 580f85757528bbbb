"""
System router: upload directory usage and the remote image proxy.
"""
from urllib.parse import quote

from fastapi import APIRouter, Query
from fastapi.responses import Response

from app.schemas.common import DirSizeResponse
from app.services.local_storage import format_size, get_storage_service
from app.services.proxy import ImageProxyService

router = APIRouter(tags=["System"])


@router.get(
    "/system/dir-size",
    response_model=DirSizeResponse,
    summary="Upload directory size",
)
async def get_dir_size() -> DirSizeResponse:
    """
    Total size of the upload directory, e.g. `{"size": "12.34 MB"}`.
    """
    size = await get_storage_service().directory_size()
    return DirSizeResponse(size=format_size(size))


@router.get(
    "/proxy",
    summary="Fetch a remote image",
    response_class=Response,
)
async def proxy_image(
    url: str = Query(..., min_length=1, description="Absolute http(s) image URL"),
) -> Response:
    """
    Download an image from another site and hand it back to the browser.
    Used when an image is dragged in from another tab.

    - **url**: image URL; non-image responses fail with 502
    """
    image = await ImageProxyService().fetch_image(url)
    return Response(
        content=image.content,
        media_type=image.content_type,
        headers={
            "Content-Disposition": f"attachment; filename=\"{quote(image.filename)}\"",
        },
    )
