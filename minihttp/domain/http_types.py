"""HTTP request and response value types."""

from dataclasses import dataclass, field
from typing import Optional


class MalformedRequest(ValueError):
    """Raised when a raw buffer cannot be parsed into a request."""


class RequestEntityTooLarge(Exception):
    """Raised when a request body exceeds configured limits."""


@dataclass
class HttpRequest:
    """A parsed HTTP request bound to the directory it is served from."""

    method: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    serving_directory: str = "."


@dataclass
class HttpResponse:
    """An HTTP response ready to be serialized onto a connection.

    A ``content_type`` of ``None`` marks a minimal response that is written
    as the status line alone, without headers or body.
    """

    status_code: int
    reason: str
    content_type: Optional[str] = None
    body: bytes = b""

    @property
    def status_line(self) -> str:
        return f"HTTP/1.1 {self.status_code} {self.reason}"

    @property
    def is_minimal(self) -> bool:
        return self.content_type is None
