import socket
import threading
from http.server import ThreadingHTTPServer

import pytest
import requests

from beehiiv_rss import server
from beehiiv_rss.handler import HttpResponse


@pytest.fixture
def client():
    session = requests.Session()
    session.trust_env = False
    yield session
    session.close()


@pytest.fixture
def running_server(monkeypatch):
    calls = []

    def fake_handle_request():
        calls.append(1)
        return HttpResponse(
            status=200,
            body="<rss>feed</rss>",
            headers={"Content-Type": "application/rss+xml; charset=utf-8"},
        )

    monkeypatch.setattr(server.feed_handler, "handle_request", fake_handle_request)

    httpd = ThreadingHTTPServer(("127.0.0.1", 0), server.FeedRequestHandler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{httpd.server_port}", calls
    finally:
        httpd.shutdown()
        httpd.server_close()


@pytest.mark.parametrize("method", ["GET", "POST", "PUT", "DELETE"])
def test_any_method_returns_feed(running_server, client, method):
    base_url, calls = running_server

    response = client.request(method, f"{base_url}/api/rss?ignored=1", data="x")

    assert response.status_code == 200
    assert response.headers["Content-Type"] == "application/rss+xml; charset=utf-8"
    assert response.text == "<rss>feed</rss>"
    assert calls == [1]


def test_head_returns_headers_only(running_server, client):
    base_url, _ = running_server

    response = client.head(base_url)

    assert response.status_code == 200
    assert response.headers["Content-Length"] == str(len("<rss>feed</rss>"))
    assert response.text == ""


def test_error_responses_are_forwarded(monkeypatch, client):
    monkeypatch.setattr(
        server.feed_handler,
        "handle_request",
        lambda: HttpResponse.json_error({"error": "boom", "details": "bad"}),
    )
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), server.FeedRequestHandler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    try:
        response = client.get(f"http://127.0.0.1:{httpd.server_port}/")
    finally:
        httpd.shutdown()
        httpd.server_close()

    assert response.status_code == 500
    assert response.json() == {"error": "boom", "details": "bad"}


def _raw_request(port, content_length):
    request = (
        "POST /api/rss HTTP/1.0\r\n"
        "Host: 127.0.0.1\r\n"
        f"Content-Length: {content_length}\r\n"
        "\r\n"
    ).encode("ascii")
    with socket.create_connection(("127.0.0.1", port), timeout=5) as sock:
        sock.sendall(request)
        chunks = []
        while True:
            chunk = sock.recv(4096)
            if not chunk:
                break
            chunks.append(chunk)
    return b"".join(chunks)


@pytest.mark.parametrize("content_length", ["abc", "-1"])
def test_malformed_content_length_still_gets_response(running_server, content_length):
    base_url, calls = running_server
    port = int(base_url.rsplit(":", 1)[1])

    reply = _raw_request(port, content_length)

    assert reply.startswith(b"HTTP/1.0 200")
    assert reply.endswith(b"<rss>feed</rss>")
    assert calls == [1]
