"""Server: accepts one client and logs the messages and packages it sends."""

from __future__ import annotations

import argparse
import logging
import socket
import sys

from opwire.protocol import (
    ConnectionClosed,
    OpCode,
    decode_values,
    receive_buffer,
    receive_operation,
)

PORT = "4444"

_log = logging.getLogger(__name__)


def start_server(port=PORT) -> socket.socket:
    """Create a listening TCP/IPv4 socket on all interfaces."""
    family, socktype, proto, _, address = socket.getaddrinfo(
        None, port, socket.AF_INET, socket.SOCK_STREAM, 0, socket.AI_PASSIVE
    )[0]
    sock = socket.socket(family, socktype, proto)
    try:
        if hasattr(socket, "SO_REUSEPORT"):
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEPORT, 1)
        sock.bind(address)
        sock.listen(socket.SOMAXCONN)
    except OSError:
        sock.close()
        raise
    _log.debug("Ready to listen for a client")
    return sock


def wait_client(server_sock: socket.socket) -> socket.socket:
    """Accept one client connection."""
    client, _ = server_sock.accept()
    _log.info("A client connected")
    return client


def receive_message(sock: socket.socket) -> str:
    """Read a MESSAGE payload and return its text."""
    return receive_buffer(sock).split(b"\0", 1)[0].decode(errors="replace")


def receive_package(sock: socket.socket) -> list[str]:
    """Read a PACKAGE payload and return its values."""
    return decode_values(receive_buffer(sock))


def serve(sock: socket.socket, logger: logging.Logger) -> int:
    """Handle operations until the client disconnects; return the exit status."""
    while True:
        try:
            code = receive_operation(sock)
        except ConnectionClosed:
            logger.error("The client disconnected. Shutting down server")
            return 1
        match code:
            case OpCode.MESSAGE:
                logger.info("Received message %s", receive_message(sock))
            case OpCode.PACKAGE:
                values = receive_package(sock)
                logger.info("Received the following values:")
                for value in values:
                    logger.info("%s", value)
            case _:
                logger.warning("Unknown operation")


def _make_logger(path) -> logging.Logger:
    logger = logging.Logger("Servidor", logging.DEBUG)
    formatter = logging.Formatter(
        "[%(levelname)s] %(asctime)s %(name)s/(%(process)d): %(message)s"
    )
    for handler in (logging.FileHandler(path), logging.StreamHandler(sys.stdout)):
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Receive messages from one client.")
    parser.add_argument("--port", default=PORT)
    parser.add_argument("--log", default="log.log")
    args = parser.parse_args(argv)

    logger = _make_logger(args.log)
    try:
        with start_server(args.port) as server_sock:
            logger.info("Server ready to receive the client")
            client = wait_client(server_sock)
            with client:
                return serve(client, logger)
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


if __name__ == "__main__":
    sys.exit(main())