"""Listening socket creation, done before the ASGI server takes over."""

from __future__ import annotations

import ipaddress
import logging
import socket

from rehost.domain.exceptions import BindError

logger = logging.getLogger(__name__)


def bind_socket(host: str, port: int) -> socket.socket:
    """Bind a TCP socket to ``host:port`` and return it.

    *host* must be an IPv4 or IPv6 literal.  Any failure surfaces as
    :class:`BindError`, so the process exits before serving anything.
    """
    try:
        address = ipaddress.ip_address(host)
    except ValueError as exc:
        raise BindError(f"Error parsing IP address '{host}'") from exc

    if not 0 <= port <= 65535:
        raise BindError(f"Port out of range: {port}")

    family = socket.AF_INET6 if address.version == 6 else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except OSError as exc:
        sock.close()
        raise BindError(f"Cannot bind to {host}:{port}: {exc.strerror or exc}") from exc

    sock.set_inheritable(True)
    logger.debug("Bound %s:%d", host, port)
    return sock
