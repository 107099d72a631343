import logging
import socket
import struct

import pytest

from opwire.protocol import Package, encode_message
from opwire.server import (
    receive_message,
    receive_package,
    serve,
    start_server,
    wait_client,
)


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def pair():
    a, b = socket.socketpair()
    yield a, b
    a.close()
    b.close()


def _package(*values):
    package = Package()
    for value in values:
        package.add(value.encode() + b"\0")
    return package


def test_receive_message(pair):
    a, b = pair
    a.sendall(encode_message("hola")[4:])
    assert receive_message(b) == "hola"


def test_receive_package(pair):
    a, b = pair
    a.sendall(_package("x", "y").serialize()[4:])
    assert receive_package(b) == ["x", "y"]


def test_serve_handles_all_operations(pair):
    a, b = pair
    handler = _ListHandler()
    logger = logging.Logger("test-server", logging.DEBUG)
    logger.addHandler(handler)

    a.sendall(encode_message("clave"))
    a.sendall(_package("uno", "dos").serialize())
    a.sendall(struct.pack("<i", 7))
    a.close()

    assert serve(b, logger) == 1
    messages = [r.getMessage() for r in handler.records]
    assert messages[0] == "Received message clave"
    assert messages[2:4] == ["uno", "dos"]
    levels = [r.levelno for r in handler.records]
    assert levels[-2:] == [logging.WARNING, logging.ERROR]


def test_start_and_wait_client():
    with start_server("0") as server_sock:
        port = server_sock.getsockname()[1]
        with socket.create_connection(("127.0.0.1", port)) as client:
            conn = wait_client(server_sock)
            with conn:
                client.sendall(encode_message("ok")[4:])
                assert receive_message(conn) == "ok"


def test_start_server_bad_port():
    with pytest.raises(OSError):
        start_server("not-a-port")