"""Static file server for the public asset directory."""

import errno
import functools
import http.server
import logging
import socketserver
from pathlib import Path

from src.core.config import PORT_SEARCH_ATTEMPTS

logger = logging.getLogger(__name__)


class AssetServer(socketserver.ThreadingMixIn, http.server.HTTPServer):
    """Threaded HTTP server for staged assets."""

    daemon_threads = True
    allow_reuse_address = False


class QuietRequestHandler(http.server.SimpleHTTPRequestHandler):
    """Request handler that routes access logs through logging."""

    extensions_map = {
        **http.server.SimpleHTTPRequestHandler.extensions_map,
        '.geojson': 'application/geo+json',
    }

    def log_message(self, format, *args):
        logger.debug(f"{self.address_string()} - {format % args}")


def bind_server(directory: Path, host: str, port: int, strict_port: bool = False) -> AssetServer:
    """
    Bind an HTTP server serving a directory.

    Args:
        directory: Directory to serve
        host: Interface to bind
        port: Preferred port
        strict_port: Fail instead of trying the following ports when busy

    Returns:
        Bound (not yet serving) server

    Raises:
        FileNotFoundError: If the directory does not exist
        OSError: If no port could be bound
    """
    if not directory.is_dir():
        raise FileNotFoundError(f"Directory not found: {directory}")

    handler = functools.partial(QuietRequestHandler, directory=str(directory))
    attempts = 1 if strict_port else PORT_SEARCH_ATTEMPTS

    for offset in range(attempts):
        candidate = port + offset
        try:
            return AssetServer((host, candidate), handler)
        except OSError as e:
            if e.errno != errno.EADDRINUSE or offset == attempts - 1:
                raise
            logger.info(f"Port {candidate} is in use, trying {candidate + 1}")

    # Unreachable: the loop either returns or raises
    raise OSError(f"No free port found starting at {port}")


def server_url(server: AssetServer) -> str:
    """Browser URL for a bound server."""
    host, port = server.server_address[:2]
    if host in ('0.0.0.0', '', '::'):
        host = 'localhost'
    return f"http://{host}:{port}/"
