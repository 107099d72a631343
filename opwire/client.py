"""Client: logs console input, then sends a message and a package."""

from __future__ import annotations

import argparse
import logging
import socket
import sys
from typing import Callable, Iterator

from opwire.protocol import Package, encode_message

PROMPT = "> "


def load_config(path) -> dict[str, str]:
    """Read a KEY=VALUE configuration file, ignoring blanks and comments."""
    config = {}
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            config[key.strip()] = value.strip()
    return config


def setup_logger(path, name: str, echo: bool) -> logging.Logger:
    """Create an INFO logger that writes to ``path`` and optionally stdout."""
    logger = logging.Logger(name, logging.INFO)
    formatter = logging.Formatter(
        "[%(levelname)s] %(asctime)s %(name)s/(%(process)d): %(message)s"
    )
    handlers: list[logging.Handler] = [logging.FileHandler(path)]
    if echo:
        handlers.append(logging.StreamHandler(sys.stdout))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def read_lines(input_func: Callable[[str], str] = input) -> Iterator[str]:
    """Yield lines from ``input_func`` until an empty line or end of input."""
    while True:
        try:
            line = input_func(PROMPT)
        except EOFError:
            return
        if not line:
            return
        yield line


def read_console(logger: logging.Logger, input_func: Callable[[str], str] = input) -> None:
    """Log every line read until an empty one."""
    for line in read_lines(input_func):
        logger.info("%s", line)


def build_package(lines) -> Package:
    """Pack each line as a NUL-terminated string."""
    package = Package()
    for line in lines:
        package.add(line.encode() + b"\0")
    return package


def create_connection(ip: str, port) -> socket.socket:
    """Open a TCP/IPv4 connection to ``ip``:``port``."""
    family, socktype, proto, _, address = socket.getaddrinfo(
        ip, port, socket.AF_INET, socket.SOCK_STREAM
    )[0]
    sock = socket.socket(family, socktype, proto)
    try:
        sock.connect(address)
    except OSError:
        sock.close()
        raise
    return sock


def send_message(message: str, sock: socket.socket) -> None:
    """Send ``message`` as a MESSAGE frame."""
    sock.sendall(encode_message(message))


def send_package(package: Package, sock: socket.socket) -> None:
    """Send a serialized package."""
    sock.sendall(package.serialize())


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Send console input to the server.")
    parser.add_argument("--config", default="./cliente.config")
    parser.add_argument("--log", default="./cliente.log")
    args = parser.parse_args(argv)

    logger = setup_logger(args.log, "CLIENTE", True)
    try:
        logger.info("hola soy un logger")
        config = load_config(args.config)
        key = config["CLAVE"]
        ip = config["IP"]
        port = config["PUERTO"]
        logger.info("PUERTO=%s , IP=%s , CLAVE=%s", port, ip, key)

        read_console(logger, input)

        with create_connection(ip, port) as sock:
            send_message(key, sock)
            send_package(build_package(read_lines(input)), sock)
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
    return 0


if __name__ == "__main__":
    sys.exit(main())