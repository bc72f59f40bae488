"""Pure HTTP response builders."""

from minihttp.bootstrap.config import HEADER_ENCODING, TEXT_PLAIN
from minihttp.domain.http_types import HttpResponse


def ok_response(content_type: str, body: bytes) -> HttpResponse:
    """Return a 200 OK response carrying ``body``."""
    return HttpResponse(200, "OK", content_type, body)


def text_response(message: str) -> HttpResponse:
    return ok_response(TEXT_PLAIN, message.encode(HEADER_ENCODING))


def created_response() -> HttpResponse:
    return HttpResponse(201, "Created")


def bad_request_response() -> HttpResponse:
    return HttpResponse(400, "Bad Request")


def forbidden_response() -> HttpResponse:
    return HttpResponse(403, "Forbidden")


def not_found_response() -> HttpResponse:
    return HttpResponse(404, "Not Found")


def entity_too_large_response() -> HttpResponse:
    return HttpResponse(413, "Payload Too Large")
