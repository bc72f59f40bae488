"""Minimal HTTP/1.1 server serving echo, user-agent, and file endpoints."""

import signal
import sys
from typing import Optional

from minihttp.bootstrap.config import (
    ConfigurationError,
    ServerConfig,
    parse_cli_args,
    validate_directory,
)
from minihttp.bootstrap.logging_setup import configure_logging
from minihttp.domain.correlation_id import get_logger
from minihttp.lifecycle.state import ServerLifecycle
from minihttp.transport.accept_loop import run_server

SERVER_LOGGER = get_logger("server")


def main(argv: Optional[list[str]] = None) -> None:
    """Validate configuration, install signal handlers, and run the accept loop."""
    args = parse_cli_args(sys.argv[1:] if argv is None else argv)
    configure_logging(
        args.log_level, args.log_destination, use_json=args.log_format == "json"
    )

    try:
        directory = validate_directory(args.directory)
    except ConfigurationError as error:
        SERVER_LOGGER.critical(
            "Invalid serving directory",
            extra={
                "event": "config_invalid",
                "directory": args.directory,
                "reason": str(error),
            },
        )
        sys.exit(1)

    config = ServerConfig(
        directory=str(directory),
        socket_timeout=args.socket_timeout,
        shutdown_grace_seconds=args.shutdown_grace_seconds,
    )
    lifecycle = ServerLifecycle()

    def shutdown_handler(signum: int, _frame) -> None:
        SERVER_LOGGER.info(
            "Received shutdown signal", extra={"event": "signal", "signal": signum}
        )
        lifecycle.request_stop()

    signal.signal(signal.SIGTERM, shutdown_handler)
    signal.signal(signal.SIGINT, shutdown_handler)

    SERVER_LOGGER.info(
        "Starting HTTP server",
        extra={
            "event": "server_starting",
            "host": args.host,
            "port": args.port,
            "directory": config.directory,
            "log_destination": args.log_destination,
            "log_level": args.log_level,
            "socket_timeout": config.socket_timeout,
            "shutdown_grace_seconds": config.shutdown_grace_seconds,
        },
    )
    run_server(args.host, args.port, config, lifecycle)


if __name__ == "__main__":
    main()
