"""Minimal HTTP surface around :func:`handle_request`."""

from __future__ import annotations

import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

from . import handler as feed_handler

logger = logging.getLogger(__name__)


class FeedRequestHandler(BaseHTTPRequestHandler):
    """Answers every method with the rendered feed (or an error payload)."""

    def _respond(self, include_body: bool = True) -> None:
        # The body is ignored but must be consumed before the connection closes.
        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            length = 0
        if length > 0:
            self.rfile.read(length)

        response = feed_handler.handle_request()
        payload = response.body.encode("utf-8")

        self.send_response(response.status)
        for name, value in response.headers.items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        if include_body:
            self.wfile.write(payload)

    def do_GET(self) -> None:  # noqa: N802
        self._respond()

    def do_HEAD(self) -> None:  # noqa: N802
        self._respond(include_body=False)

    do_POST = do_GET
    do_PUT = do_GET
    do_PATCH = do_GET
    do_DELETE = do_GET
    do_OPTIONS = do_GET

    def log_message(self, format: str, *args) -> None:  # noqa: A002
        logger.info("%s - %s", self.address_string(), format % args)


def serve(host: str = "127.0.0.1", port: int = 3000) -> None:
    """Run a local development server until interrupted."""
    server = ThreadingHTTPServer((host, port), FeedRequestHandler)
    logger.info("Serving RSS feed on http://%s:%d/", host, server.server_port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()
