"""Per-connection worker: read, parse, route, respond, close."""

import logging
import socket
import threading
import time
from typing import Optional

from minihttp.domain.correlation_id import (
    clear_correlation_id,
    generate_correlation_id,
    get_logger,
    set_correlation_id,
)
from minihttp.domain.http_types import (
    HttpResponse,
    MalformedRequest,
    RequestEntityTooLarge,
)
from minihttp.domain.response_builders import (
    bad_request_response,
    entity_too_large_response,
)
from minihttp.pipeline.io import receive_request_bytes, send_response
from minihttp.pipeline.parser import parse_request
from minihttp.pipeline.router import route_request
from minihttp.transport.context import WorkerContext

WORKER_LOGGER = get_logger("transport.worker")


def _serve_request(
    client_socket: socket.socket, context: WorkerContext, client_addr_str: str
) -> Optional[HttpResponse]:
    """Produce the response for one request, or None when nothing arrived."""
    try:
        raw_request = receive_request_bytes(client_socket)
    except RequestEntityTooLarge:
        WORKER_LOGGER.warning(
            "Request body size exceeded limit",
            extra={"event": "body_size_exceeded", "client": client_addr_str},
        )
        return entity_too_large_response()
    except MalformedRequest:
        WORKER_LOGGER.warning(
            "Malformed request framing",
            extra={"event": "malformed_request", "client": client_addr_str},
        )
        return bad_request_response()

    if not raw_request:
        if WORKER_LOGGER.logger.isEnabledFor(logging.DEBUG):
            WORKER_LOGGER.debug(
                "Client closed without sending a request",
                extra={"event": "client_disconnected", "client": client_addr_str},
            )
        return None

    try:
        request = parse_request(raw_request, context.directory)
    except MalformedRequest as error:
        WORKER_LOGGER.warning(
            "Malformed request received",
            extra={
                "event": "malformed_request",
                "client": client_addr_str,
                "reason": str(error),
            },
        )
        return bad_request_response()

    return route_request(request, context.file_locks)


def _close_socket(client_socket: socket.socket) -> None:
    try:
        client_socket.shutdown(socket.SHUT_WR)
    except OSError:
        pass
    client_socket.close()


def handle_client(
    client_socket: socket.socket,
    client_address: tuple[str, int],
    context: WorkerContext,
) -> None:
    """Serve exactly one request on the connection, then close it.

    Failures are confined to this connection: they are logged and the
    socket is closed, leaving the accept loop and sibling workers running.
    """
    set_correlation_id(generate_correlation_id())
    lifecycle = context.lifecycle
    if context.config is not None and context.config.socket_timeout > 0:
        client_socket.settimeout(context.config.socket_timeout)

    client_addr_str = f"{client_address[0]}:{client_address[1]}"
    started = time.monotonic()
    try:
        response = _serve_request(client_socket, context, client_addr_str)
        if response is not None:
            send_response(client_socket, response)
            WORKER_LOGGER.info(
                "Request complete",
                extra={
                    "event": "request_complete",
                    "client": client_addr_str,
                    "status_code": response.status_code,
                    "duration_ms": round((time.monotonic() - started) * 1000, 3),
                },
            )
    except (ConnectionError, TimeoutError, OSError) as error:
        WORKER_LOGGER.error(
            "Error handling client connection",
            extra={
                "event": "connection_error",
                "client": client_addr_str,
                "error_type": type(error).__name__,
            },
        )
    except Exception as error:  # pylint: disable=broad-except
        WORKER_LOGGER.error(
            "Unexpected error in worker",
            extra={
                "event": "worker_error",
                "client": client_addr_str,
                "error_type": type(error).__name__,
            },
            exc_info=True,
        )
    finally:
        _close_socket(client_socket)
        if lifecycle is not None:
            lifecycle.cleanup_worker(threading.current_thread())
        WORKER_LOGGER.debug(
            "Socket closed",
            extra={"event": "socket_closed", "client": client_addr_str},
        )
        clear_correlation_id()
