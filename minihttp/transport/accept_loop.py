"""Connection acceptance loop."""

import logging
import socket
import threading

from minihttp.bootstrap.config import ServerConfig
from minihttp.bootstrap.socket_factory import create_server_socket
from minihttp.domain.correlation_id import get_logger
from minihttp.lifecycle.state import ServerLifecycle
from minihttp.transport.context import WorkerContext
from minihttp.transport.worker import handle_client

ACCEPT_LOGGER = get_logger("transport.accept")


def _spawn_worker(
    client_socket: socket.socket,
    client_address: tuple[str, int],
    context: WorkerContext,
) -> threading.Thread:
    """Hand the connection to a dedicated thread that owns it until close."""
    if ACCEPT_LOGGER.logger.isEnabledFor(logging.DEBUG):
        ACCEPT_LOGGER.debug(
            "Client connection accepted",
            extra={
                "event": "client_accepted",
                "client": f"{client_address[0]}:{client_address[1]}",
            },
        )
    thread = threading.Thread(
        target=handle_client,
        args=(client_socket, client_address, context),
        daemon=False,
    )
    if context.lifecycle is not None:
        context.lifecycle.register_worker(thread)
    thread.start()
    return thread


def run_server(
    host: str, port: int, config: ServerConfig, lifecycle: ServerLifecycle
) -> None:
    """Accept connections until the lifecycle asks to stop, then drain workers."""
    server_socket = create_server_socket(host, port)
    ACCEPT_LOGGER.info(
        "Server listening for connections",
        extra={"event": "server_listening", "host": host, "port": port},
    )

    context = WorkerContext(
        directory=config.directory, config=config, lifecycle=lifecycle
    )

    try:
        while not lifecycle.should_stop():
            try:
                client_socket, client_address = server_socket.accept()
            except socket.timeout:
                continue
            except OSError as error:
                if lifecycle.should_stop():
                    break
                ACCEPT_LOGGER.error(
                    "Socket accept failed",
                    extra={"event": "accept_error", "error_type": type(error).__name__},
                )
                continue
            _spawn_worker(client_socket, client_address, context)
    finally:
        server_socket.close()
        ACCEPT_LOGGER.info(
            "Waiting for active connections to complete",
            extra={
                "event": "shutdown_waiting",
                "shutdown_grace_seconds": config.shutdown_grace_seconds,
            },
        )
        lifecycle.wait_for_workers(config.shutdown_grace_seconds)
        ACCEPT_LOGGER.info(
            "Server shutdown complete", extra={"event": "server_stopped"}
        )
