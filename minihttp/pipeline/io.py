"""Socket input/output: reading request bytes and writing responses."""

import logging
import socket
from typing import Optional

from minihttp.bootstrap.config import MAX_BODY_BYTES, MAX_HEADER_BYTES, READ_CHUNK_SIZE
from minihttp.domain.correlation_id import get_logger
from minihttp.domain.http_types import (
    HttpResponse,
    MalformedRequest,
    RequestEntityTooLarge,
)
from minihttp.pipeline.parser import find_header_terminator

IO_LOGGER = get_logger("pipeline.io")


def declared_content_length(head: bytes) -> Optional[int]:
    """Return the Content-Length declared in a raw head, if any."""
    for raw_line in head.splitlines()[1:]:
        name, separator, value = raw_line.partition(b":")
        if not separator or name.strip().lower() != b"content-length":
            continue
        try:
            length = int(value.strip())
        except ValueError as exc:
            raise MalformedRequest("Invalid Content-Length") from exc
        if length < 0:
            raise MalformedRequest("Negative Content-Length")
        return length
    return None


def receive_request_bytes(
    client_socket: socket.socket,
    max_header_bytes: int = MAX_HEADER_BYTES,
    max_body_bytes: int = MAX_BODY_BYTES,
) -> bytes:
    """Read one request off the socket and return its raw bytes.

    Reads ``READ_CHUNK_SIZE`` chunks until the blank line ending the head is
    seen, then reads exactly ``Content-Length`` further bytes when declared.
    Without a declared length the body is whatever arrived with the head. A
    peer that half-closes early yields the bytes received so far.
    """
    buffer = b""
    while True:
        index, terminator = find_header_terminator(buffer)
        if index != -1:
            break
        if len(buffer) > max_header_bytes:
            raise MalformedRequest("Request head exceeds limit")
        chunk = client_socket.recv(READ_CHUNK_SIZE)
        if not chunk:
            return buffer
        buffer += chunk

    head_end = index + len(terminator)
    content_length = declared_content_length(buffer[:index])
    if content_length is None:
        if len(buffer) - head_end > max_body_bytes:
            raise RequestEntityTooLarge
        return buffer
    if content_length > max_body_bytes:
        raise RequestEntityTooLarge

    expected = head_end + content_length
    while len(buffer) < expected:
        chunk = client_socket.recv(min(READ_CHUNK_SIZE, expected - len(buffer)))
        if not chunk:
            IO_LOGGER.warning(
                "Client closed before body completed",
                extra={"event": "body_truncated", "bytes_in": len(buffer)},
            )
            break
        buffer += chunk
    return buffer[:expected]


def serialize_response(response: HttpResponse) -> bytes:
    """Encode a response to its wire form."""
    if response.is_minimal:
        return f"{response.status_line}\r\n".encode()
    head = (
        f"{response.status_line}\r\n"
        f"Content-Type: {response.content_type}\r\n"
        f"Content-Length: {len(response.body)}\r\n"
        "\r\n"
    )
    return head.encode() + response.body


def send_response(client_socket: socket.socket, response: HttpResponse) -> None:
    """Serialize and send the response over the socket."""
    payload = serialize_response(response)
    client_socket.sendall(payload)
    if IO_LOGGER.logger.isEnabledFor(logging.DEBUG):
        IO_LOGGER.debug(
            "Sent response",
            extra={
                "event": "response_sent",
                "status_code": response.status_code,
                "bytes_out": len(payload),
            },
        )
