"""Verb-indexed request router.

Every request path must consist of exactly one non-empty segment, the
resource key. Adding a verb means adding an entry to the routing table.
"""

from typing import Awaitable, Callable

from fastapi import Request, Response

from cat_cache.exceptions import BadRequest, MethodNotAllowed

from .image_handler import ImageHandler

RouteHandler = Callable[[str, Request], Awaitable[Response]]


class RequestRouter:
    """Dispatches requests to ImageHandler methods by HTTP verb.

    The method is resolved before the path, so an unsupported verb yields
    405 whatever the path looks like.
    """

    def __init__(self, handler: ImageHandler) -> None:
        self._routes: dict[str, RouteHandler] = {
            "GET": handler.get_image,
            "PUT": handler.put_image,
            "DELETE": handler.delete_image,
        }

    @property
    def allowed_methods(self) -> tuple[str, ...]:
        return tuple(self._routes)

    @staticmethod
    def parse_key(path: str) -> str:
        """Extract the resource key from a request path.

        Args:
            path: The request path, e.g. ``/404``

        Returns:
            The single path segment

        Raises:
            BadRequest: If the path has zero or several non-empty segments
        """
        segments = [segment for segment in path.split("/") if segment]
        if len(segments) != 1:
            raise BadRequest(f"Invalid path: {path}")
        return segments[0]

    def route(self, method: str, path: str) -> tuple[str, RouteHandler]:
        """Resolve a request to its key and handler.

        Raises:
            MethodNotAllowed: If the verb is not in the routing table
            BadRequest: If the path is malformed
        """
        handler = self._routes.get(method.upper())
        if handler is None:
            raise MethodNotAllowed(method, self.allowed_methods)
        return self.parse_key(path), handler

    async def dispatch(self, request: Request) -> Response:
        key, handler = self.route(request.method, request.url.path)
        return await handler(key, request)
