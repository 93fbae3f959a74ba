"""Command-line entry point: validate flags, bind the socket, serve."""

from __future__ import annotations

import argparse
import dataclasses
import errno
import socket
import sys
from typing import Sequence

import structlog
import uvicorn

from cat_cache.api import create_app
from cat_cache.config import Settings, get_settings
from cat_cache.observability import configure_logging

logger = structlog.get_logger("cat_cache.cli")


class BindError(Exception):
    """Raised when the listening socket cannot be bound."""


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    # -h is the host flag, so help moves to --help only
    parser = argparse.ArgumentParser(
        prog="cat-cache",
        description="Serve http.cat images through a local directory cache",
        add_help=False,
    )
    parser.add_argument("--help", action="help", help="Show this help message and exit")
    parser.add_argument("-h", "--host", required=True, help="server address")
    parser.add_argument("-p", "--port", required=True, help="server port")
    parser.add_argument("-c", "--cache", required=True, help="path to the cache directory")
    return parser.parse_args(argv)


def parse_port(value: str) -> int:
    """Parse a port number in the range 1-65535.

    Raises:
        ValueError: With the user-facing message if the value is invalid
    """
    try:
        port = int(value)
    except ValueError:
        port = None
    if port is None or not 1 <= port <= 65535:
        raise ValueError(f"Invalid port number: {value}. Must be an integer between 1 and 65535.")
    return port


def bind_socket(host: str, port: int) -> socket.socket:
    """Create a listening TCP socket for host and port.

    Raises:
        BindError: With a diagnostic naming the cause
    """
    try:
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM, flags=socket.AI_PASSIVE)
    except socket.gaierror as exc:
        raise BindError(f"error: Host {host} could not be found.") from exc

    family, sock_type, proto, _, address = infos[0]
    sock = socket.socket(family, sock_type, proto)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind(address)
        sock.listen(socket.SOMAXCONN)
    except OSError as exc:
        sock.close()
        raise BindError(describe_bind_error(exc, host, port)) from exc
    sock.setblocking(False)
    return sock


def describe_bind_error(exc: OSError, host: str, port: int) -> str:
    if exc.errno == errno.EADDRINUSE:
        return f"error: Port {port} is already in use."
    if exc.errno == errno.EADDRNOTAVAIL:
        return f"error: Host {host} is not available."
    if exc.errno == errno.EACCES:
        return (
            f"error: Insufficient privileges to bind to port {port}. "
            "Try using a port number above 1024 or running with elevated privileges."
        )
    return f"Server error: {exc.strerror or exc}"


def build_settings(args: argparse.Namespace, base: Settings | None = None) -> Settings:
    """Apply command-line values on top of the environment settings.

    Raises:
        ValueError: If the port is invalid
    """
    port = parse_port(args.port)
    return dataclasses.replace(base or get_settings(), host=args.host, port=port, cache_dir=args.cache)


def run(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        settings = build_settings(args)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    configure_logging("cat-cache", settings.log_level)

    try:
        sock = bind_socket(settings.host, settings.port)
    except BindError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    app = create_app(settings)
    config = uvicorn.Config(
        app,
        log_config=None,
        log_level=settings.log_level.lower(),
    )
    server = uvicorn.Server(config)
    logger.info("server_started", url=f"http://{settings.host}:{settings.port}/", cache_dir=str(settings.cache_dir))
    try:
        server.run(sockets=[sock])
    finally:
        sock.close()
    return 0


def main() -> None:
    sys.exit(run())
