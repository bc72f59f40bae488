"""File read and write handlers for the ``/files/`` endpoint."""

import os
from pathlib import Path

from minihttp.bootstrap.config import (
    FILES_ENDPOINT_PREFIX,
    HEADER_ENCODING,
    OCTET_STREAM,
)
from minihttp.domain.correlation_id import get_logger
from minihttp.domain.file_locks import PathLockRegistry
from minihttp.domain.http_types import HttpRequest, HttpResponse
from minihttp.domain.response_builders import (
    bad_request_response,
    created_response,
    forbidden_response,
    not_found_response,
    ok_response,
)
from minihttp.domain.sandbox import ForbiddenPath, resolve_sandbox_path

FILE_LOGGER = get_logger("handlers.file")

CONTENT_TYPE_HEADER = "Content-Type"


def filename_from_path(path: str) -> str:
    """Strip the ``/files/`` prefix; a bare ``/files`` names no file.

    The request bytes are handed to the filesystem unchanged, so non-ASCII
    names written by one request are found again by the next.
    """
    if not path.startswith(FILES_ENDPOINT_PREFIX):
        return ""
    return os.fsdecode(path[len(FILES_ENDPOINT_PREFIX) :].encode(HEADER_ENCODING))


def _resolve(request: HttpRequest) -> Path:
    filename = filename_from_path(request.path)
    try:
        return resolve_sandbox_path(request.serving_directory, filename)
    except ForbiddenPath:
        FILE_LOGGER.warning(
            "Forbidden path access blocked",
            extra={
                "event": "forbidden_path",
                "path": filename,
                "method": request.method,
            },
        )
        raise


def handle_file_read(request: HttpRequest) -> HttpResponse:
    """Return the file contents as application/octet-stream.

    A missing file is 404; any other I/O failure (a directory, a permission
    problem) is 400.
    """
    try:
        resolved_path = _resolve(request)
    except ForbiddenPath:
        return forbidden_response()

    try:
        with open(resolved_path, "rb") as file_handle:
            payload = file_handle.read()
    except FileNotFoundError:
        FILE_LOGGER.info(
            "File not found",
            extra={"event": "file_not_found", "path": resolved_path.as_posix()},
        )
        return not_found_response()
    except OSError as error:
        FILE_LOGGER.warning(
            "File read failed",
            extra={
                "event": "file_read_failed",
                "path": resolved_path.as_posix(),
                "error_type": type(error).__name__,
            },
        )
        return bad_request_response()

    FILE_LOGGER.info(
        "File read operation complete",
        extra={
            "event": "file_read_complete",
            "path": resolved_path.as_posix(),
            "bytes_out": len(payload),
        },
    )
    return ok_response(OCTET_STREAM, payload)


def handle_file_write(
    request: HttpRequest, file_locks: PathLockRegistry
) -> HttpResponse:
    """Create or truncate the file and write the request body verbatim."""
    content_type = request.headers.get(CONTENT_TYPE_HEADER)
    if content_type != OCTET_STREAM:
        FILE_LOGGER.info(
            "Rejected upload with unexpected content type",
            extra={"event": "file_write_rejected", "status_code": 400},
        )
        return bad_request_response()

    try:
        resolved_path = _resolve(request)
    except ForbiddenPath:
        return forbidden_response()

    try:
        with file_locks.hold(resolved_path):
            with open(resolved_path, "wb") as file_handle:
                file_handle.write(request.body)
    except OSError as error:
        FILE_LOGGER.warning(
            "File write failed",
            extra={
                "event": "file_write_failed",
                "path": resolved_path.as_posix(),
                "error_type": type(error).__name__,
            },
        )
        return bad_request_response()

    FILE_LOGGER.info(
        "File write complete",
        extra={
            "event": "file_write_complete",
            "path": resolved_path.as_posix(),
            "bytes_in": len(request.body),
        },
    )
    return created_response()
