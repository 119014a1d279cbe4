from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from config.settings import settings


class ImageFetchError(Exception):
    """Raised when a source image cannot be downloaded."""


@dataclass
class FetchedImage:
    content: bytes
    content_type: str


class ImageFetchService:
    def __init__(
        self,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.timeout = timeout if timeout is not None else settings.IMAGE_FETCH_TIMEOUT
        self.user_agent = user_agent or settings.IMAGE_FETCH_USER_AGENT
        self.transport = transport

    async def download_image(
        self,
        image_url: str,
        host_check: Optional[Callable[[str], bool]] = None
    ) -> FetchedImage:
        """
        Download an image, giving up after the configured timeout.

        Args:
            image_url: URL of the image
            host_check: When given, every request including redirect hops must
                pass it before it is sent

        Raises:
            ImageFetchError: On timeout, transport error, non-2xx status, empty
                body or a request to a host rejected by host_check
        """
        event_hooks = {}
        if host_check is not None:
            async def check_request_host(request: httpx.Request):
                if not host_check(str(request.url)):
                    raise ImageFetchError(
                        f"Failed to fetch image: host {request.url.host} is not allowed"
                    )
            event_hooks["request"] = [check_request_host]

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self.transport,
                event_hooks=event_hooks
            ) as client:
                response = await client.get(
                    image_url,
                    headers={'User-Agent': self.user_agent}
                )
        except httpx.TimeoutException as e:
            raise ImageFetchError(
                f"Failed to fetch image: request timed out after {self.timeout:g} seconds"
            ) from e
        except httpx.HTTPError as e:
            raise ImageFetchError(f"Failed to fetch image: {e}") from e

        if response.status_code < 200 or response.status_code >= 300:
            raise ImageFetchError(
                f"Failed to fetch image: {response.status_code} {response.reason_phrase}"
            )

        content = response.content
        if len(content) == 0:
            raise ImageFetchError("Failed to fetch image: response body is empty")

        content_type = response.headers.get('content-type') or 'image/jpeg'
        # Drop parameters such as "; charset=binary"
        content_type = content_type.split(';')[0].strip() or 'image/jpeg'

        return FetchedImage(content=content, content_type=content_type)
