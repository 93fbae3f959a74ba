"""HTTP handlers for image operations.

Handlers convert between HTTP requests/responses and service calls.
Failures are raised as CatCacheError subclasses and rendered as plain-text
responses by the API layer.
"""

from fastapi import Request, Response, status
from fastapi.responses import PlainTextResponse

from cat_cache.config import IMAGE_MEDIA_TYPE
from cat_cache.exceptions import BadRequest, PayloadTooLarge
from cat_cache.services import ImageService


class ImageHandler:
    """HTTP handlers for image operations.

    Every handler takes the resource key extracted by the router and the
    incoming request, and returns a Response.

    Example:
        ```python
        handler = ImageHandler(image_service=service, max_body_bytes=5 * 1024 * 1024)
        response = await handler.get_image("200", request)
        ```
    """

    def __init__(self, image_service: ImageService, max_body_bytes: int) -> None:
        """Initialize the image handler.

        Args:
            image_service: The image service for business logic (required).
            max_body_bytes: Largest accepted PUT body.
        """
        self._images = image_service
        self._max_body_bytes = max_body_bytes

    async def get_image(self, key: str, request: Request) -> Response:
        """Handle GET /<key>: serve from cache, falling back to the provider."""
        data = await self._images.retrieve(key)
        return Response(content=data, status_code=status.HTTP_200_OK, media_type=IMAGE_MEDIA_TYPE)

    async def put_image(self, key: str, request: Request) -> Response:
        """Handle PUT /<key>: store the request body as the cached image."""
        data = await self.read_body(request)
        await self._images.replace(key, data)
        return PlainTextResponse(f"Image {key} saved", status_code=status.HTTP_201_CREATED)

    async def delete_image(self, key: str, request: Request) -> Response:
        """Handle DELETE /<key>: remove the cached image."""
        await self._images.remove(key)
        return PlainTextResponse(f"Image {key} deleted", status_code=status.HTTP_200_OK)

    async def read_body(self, request: Request) -> bytes:
        """Accumulate the request body up to the configured ceiling.

        The ceiling is checked against the declared Content-Length before
        reading and again as every chunk arrives, so an oversized upload is
        rejected without buffering more than one chunk past the limit.

        Args:
            request: The incoming request

        Returns:
            The complete body

        Raises:
            BadRequest: If Content-Length is not an integer
            PayloadTooLarge: If the body exceeds the ceiling
        """
        declared = request.headers.get("content-length")
        if declared is not None:
            try:
                declared_size = int(declared)
            except ValueError as exc:
                raise BadRequest(f"Invalid Content-Length: {declared!r}") from exc
            if declared_size > self._max_body_bytes:
                raise PayloadTooLarge(self._max_body_bytes)

        body = bytearray()
        async for chunk in request.stream():
            if len(body) + len(chunk) > self._max_body_bytes:
                raise PayloadTooLarge(self._max_body_bytes)
            body.extend(chunk)
        return bytes(body)
