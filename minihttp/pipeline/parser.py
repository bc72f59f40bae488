"""Conversion of raw request bytes into an HttpRequest."""

import logging
from typing import Iterable, Tuple

from minihttp.bootstrap.config import (
    HEADER_DELIMITER,
    HEADER_ENCODING,
    LF_HEADER_DELIMITER,
)
from minihttp.domain.correlation_id import get_logger
from minihttp.domain.http_types import HttpRequest, MalformedRequest

PARSER_LOGGER = get_logger("pipeline.parser")


def find_header_terminator(buffer: bytes) -> Tuple[int, bytes]:
    """Locate the blank line ending the head.

    Returns the offset of the terminator and the terminator itself, or
    ``(-1, b"")`` when the buffer holds no complete head. CRLF framing is
    expected; a bare ``\\n\\n`` is accepted when it comes first, so a body
    containing CRLF pairs cannot be mistaken for the end of an LF head.
    """
    crlf_index = buffer.find(HEADER_DELIMITER)
    lf_index = buffer.find(LF_HEADER_DELIMITER)
    if lf_index != -1 and (crlf_index == -1 or lf_index < crlf_index):
        return lf_index, LF_HEADER_DELIMITER
    if crlf_index != -1:
        return crlf_index, HEADER_DELIMITER
    return -1, b""


def split_head_and_body(buffer: bytes) -> Tuple[bytes, bytes]:
    """Split the buffer at the first blank line into head bytes and body bytes.

    The body is the literal byte slice after the terminator and is never
    re-split into lines. A buffer without a terminator is all head.
    """
    index, terminator = find_header_terminator(buffer)
    if index == -1:
        return buffer, b""
    return buffer[:index], buffer[index + len(terminator) :]


def _head_lines(head: bytes) -> list[str]:
    text = head.decode(HEADER_ENCODING)
    if "\r\n" in text:
        lines = text.split("\r\n")
    else:
        lines = text.split("\n")
    # A head cut short of its terminator can end in a partial line break.
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def parse_request_line(request_line: str) -> Tuple[str, str, str]:
    """Split the request line on single spaces into method, path and version."""
    tokens = request_line.split(" ")
    if len(tokens) < 3:
        raise MalformedRequest("Invalid request line")
    method, path, version = tokens[0], tokens[1], tokens[2]
    if not method or not path:
        raise MalformedRequest("Empty method or path")
    return method, path, version


def parse_headers(lines: Iterable[str]) -> dict[str, str]:
    """Convert header lines into a case-sensitive mapping.

    Each line is split on its first colon and both sides are trimmed. A later
    duplicate name overwrites the earlier value.
    """
    headers: dict[str, str] = {}
    for line in lines:
        name, separator, value = line.partition(":")
        if not separator:
            raise MalformedRequest(f"Header line without colon: {line!r}")
        headers[name.strip()] = value.strip()
    return headers


def parse_request(buffer: bytes, serving_directory: str = ".") -> HttpRequest:
    """Parse a raw request buffer, raising MalformedRequest when it is unusable."""
    if not buffer:
        raise MalformedRequest("Empty request")

    head, body = split_head_and_body(buffer)
    lines = _head_lines(head)
    if not lines:
        raise MalformedRequest("Missing request line")

    method, path, _ = parse_request_line(lines[0])
    headers = parse_headers(lines[1:])

    if PARSER_LOGGER.logger.isEnabledFor(logging.DEBUG):
        PARSER_LOGGER.debug(
            "Parsed request",
            extra={
                "event": "request_parsed",
                "method": method,
                "route": path,
                "bytes_in": len(buffer),
            },
        )
    return HttpRequest(method, path, headers, body, serving_directory)
