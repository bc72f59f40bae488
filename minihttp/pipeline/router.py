"""Request routing by first path segment and method."""

import logging
from functools import partial
from typing import Callable, Optional

from minihttp.domain.correlation_id import get_logger
from minihttp.domain.file_locks import PathLockRegistry
from minihttp.domain.http_types import HttpRequest, HttpResponse
from minihttp.domain.response_builders import not_found_response
from minihttp.handlers.file_handler import handle_file_read, handle_file_write
from minihttp.handlers.system_handlers import (
    handle_echo,
    handle_root,
    handle_user_agent,
)

ROUTER_LOGGER = get_logger("pipeline.router")

Handler = Callable[[HttpRequest], HttpResponse]


def endpoint_name(path: str) -> Optional[str]:
    """Return the first ``/``-delimited segment of ``path``.

    ``/`` yields the empty string; a path without a leading slash has no
    endpoint.
    """
    if not path.startswith("/"):
        return None
    return path.split("/")[1]


def build_routes(file_locks: PathLockRegistry) -> dict[tuple[str, str], Handler]:
    """Return the dispatch table keyed by (endpoint, method)."""
    return {
        ("", "GET"): handle_root,
        ("echo", "GET"): handle_echo,
        ("user-agent", "GET"): handle_user_agent,
        ("files", "GET"): handle_file_read,
        ("files", "POST"): partial(handle_file_write, file_locks=file_locks),
    }


def route_request(
    request: HttpRequest, file_locks: Optional[PathLockRegistry] = None
) -> HttpResponse:
    """Dispatch the request to its handler, or answer 404 when none matches."""
    routes = build_routes(file_locks if file_locks is not None else PathLockRegistry())
    endpoint = endpoint_name(request.path)
    handler = routes.get((endpoint, request.method)) if endpoint is not None else None

    if handler is None:
        ROUTER_LOGGER.info(
            "No matching route found",
            extra={
                "event": "route_not_found",
                "route": request.path,
                "method": request.method,
            },
        )
        return not_found_response()

    if ROUTER_LOGGER.logger.isEnabledFor(logging.DEBUG):
        ROUTER_LOGGER.debug(
            "Route matched",
            extra={
                "event": "route_matched",
                "endpoint": endpoint,
                "method": request.method,
            },
        )
    return handler(request)
