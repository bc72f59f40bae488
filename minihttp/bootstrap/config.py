"""Server configuration and CLI argument parsing."""

import argparse
import os
from dataclasses import dataclass
from pathlib import Path


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value is not None else default


HEADER_DELIMITER = b"\r\n\r\n"
LF_HEADER_DELIMITER = b"\n\n"
READ_CHUNK_SIZE = 1024
MAX_HEADER_BYTES = _env_int("MINIHTTP_MAX_HEADER_BYTES", 16 * 1024)
MAX_BODY_BYTES = _env_int("MINIHTTP_MAX_BODY_BYTES", 5 * 1024 * 1024)
DEFAULT_PORT = 4221
DEFAULT_SOCKET_TIMEOUT = _env_int("MINIHTTP_SOCKET_TIMEOUT", 60)
DEFAULT_SHUTDOWN_GRACE_SECONDS = _env_int("MINIHTTP_SHUTDOWN_GRACE_SECONDS", 30)

ECHO_ENDPOINT_PREFIX = "/echo/"
FILES_ENDPOINT_PREFIX = "/files/"
# Request heads and text bodies map bytes 1:1 onto characters.
HEADER_ENCODING = "iso-8859-1"
TEXT_PLAIN = "text/plain"
OCTET_STREAM = "application/octet-stream"


class ConfigurationError(Exception):
    """Raised when startup configuration cannot be used."""


@dataclass
class ServerConfig:
    """Runtime settings shared by the accept loop and its workers."""

    directory: str
    socket_timeout: int
    shutdown_grace_seconds: int


def validate_directory(directory: str) -> Path:
    """Return the resolved serving directory or raise ConfigurationError."""
    path = Path(directory)
    if not path.exists():
        raise ConfigurationError(f"Directory does not exist: {directory}")
    if not path.is_dir():
        raise ConfigurationError(f"Not a directory: {directory}")
    return path.resolve()


def parse_cli_args(argv: list[str]) -> argparse.Namespace:
    """Return parsed CLI arguments for server configuration."""
    parser = argparse.ArgumentParser(description="Minimal HTTP/1.1 file server")
    parser.add_argument(
        "--directory", default=".", help="Directory from which to serve files"
    )
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    default_log_level = os.getenv("MINIHTTP_LOG_LEVEL", "INFO").upper()
    default_destination = os.getenv("MINIHTTP_LOG_DESTINATION", "stdout")
    parser.add_argument(
        "--log-level",
        default=default_log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
    )
    parser.add_argument(
        "--log-destination",
        default=default_destination,
        help="stdout or a file path",
    )
    parser.add_argument(
        "--log-format",
        default=os.getenv("MINIHTTP_LOG_FORMAT", "json").lower(),
        choices=["json", "text"],
        type=str.lower,
    )
    parser.add_argument(
        "--socket-timeout",
        type=int,
        default=DEFAULT_SOCKET_TIMEOUT,
        help="Idle read timeout in seconds for client sockets (0 disables)",
    )
    parser.add_argument(
        "--shutdown-grace-seconds",
        type=int,
        default=DEFAULT_SHUTDOWN_GRACE_SECONDS,
        help="Grace period in seconds for graceful shutdown",
    )
    return parser.parse_args(argv)
