import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response

from config.settings import settings
from services.image_fetch_service import ImageFetchError, ImageFetchService
from services.image_processing import ImageProcessingError, MAX_RESIZE_WIDTH, resize_image

router = APIRouter(prefix="/images", tags=["images"])

CACHE_CONTROL = "public, max-age=3600"

def get_image_fetch_service():
    return ImageFetchService()

@router.get("/proxy")
async def proxy_image(
    url: str = Query(..., description="Source image URL on an allowed host"),
    w: Optional[int] = Query(None, ge=1, le=MAX_RESIZE_WIDTH, description="Target width in pixels"),
    q: int = Query(75, ge=1, le=100, description="JPEG quality when resizing"),
    fetch_service: ImageFetchService = Depends(get_image_fetch_service)
):
    """Serve an image from an allowed host, optionally resized"""
    if not settings.is_allowed_image_host(url):
        return JSONResponse(status_code=400, content={"error": "Image host is not allowed"})

    try:
        # Redirect hops are held to the same allow-list
        fetched = await fetch_service.download_image(url, host_check=settings.is_allowed_image_host)
    except ImageFetchError as e:
        print(f"❌ Image proxy download failed: {e}")
        return JSONResponse(status_code=502, content={"error": str(e)})

    if not fetched.content_type.lower().startswith("image/"):
        print(f"❌ Image proxy refused content type: {fetched.content_type}")
        return JSONResponse(
            status_code=502,
            content={"error": f"Upstream did not return an image ({fetched.content_type})"}
        )

    if w is None:
        return Response(
            content=fetched.content,
            media_type=fetched.content_type,
            headers={"Cache-Control": CACHE_CONTROL}
        )

    try:
        resized = await asyncio.to_thread(resize_image, fetched.content, w, q)
    except ImageProcessingError as e:
        print(f"❌ Image proxy resize failed: {e}")
        return JSONResponse(status_code=422, content={"error": str(e)})

    return Response(
        content=resized,
        media_type="image/jpeg",
        headers={"Cache-Control": CACHE_CONTROL}
    )
