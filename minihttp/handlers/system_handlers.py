"""Handlers for the root, echo and user-agent endpoints."""

import logging

from minihttp.bootstrap.config import ECHO_ENDPOINT_PREFIX, TEXT_PLAIN
from minihttp.domain.correlation_id import get_logger
from minihttp.domain.http_types import HttpRequest, HttpResponse
from minihttp.domain.response_builders import (
    bad_request_response,
    ok_response,
    text_response,
)

SYSTEM_LOGGER = get_logger("handlers.system")

USER_AGENT_HEADER = "User-Agent"


def handle_root(_request: HttpRequest) -> HttpResponse:
    """Answer ``GET /`` with an empty text/plain body."""
    return ok_response(TEXT_PLAIN, b"")


def echo_payload(path: str) -> str:
    """Return the part of an echo path that is reflected back.

    Paths under ``/echo/`` yield everything after the prefix, deeper
    slashes included. Any other echo path (bare ``/echo``) yields its last
    segment.
    """
    if path.startswith(ECHO_ENDPOINT_PREFIX):
        return path[len(ECHO_ENDPOINT_PREFIX) :]
    return path.rsplit("/", 1)[-1]


def handle_echo(request: HttpRequest) -> HttpResponse:
    content = echo_payload(request.path)
    if SYSTEM_LOGGER.logger.isEnabledFor(logging.DEBUG):
        SYSTEM_LOGGER.debug(
            "Echo request processed",
            extra={"event": "echo_request", "bytes_out": len(content)},
        )
    return text_response(content)


def handle_user_agent(request: HttpRequest) -> HttpResponse:
    """Reflect the exact-case ``User-Agent`` header, or 400 when it is absent."""
    agent = request.headers.get(USER_AGENT_HEADER)
    if agent is None:
        SYSTEM_LOGGER.info(
            "User-Agent header missing",
            extra={"event": "user_agent_missing", "status_code": 400},
        )
        return bad_request_response()
    if SYSTEM_LOGGER.logger.isEnabledFor(logging.DEBUG):
        SYSTEM_LOGGER.debug(
            "User-agent request processed",
            extra={"event": "user_agent_request", "user_agent": agent},
        )
    return text_response(agent)
