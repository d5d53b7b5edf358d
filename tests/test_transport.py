"""Tests for UrllibTransport against a local HTTP server."""

import http.server
import json
import socket
import threading
import time

import pytest

from hylea.core.errors import TransportError
from hylea.pipeline.transport import TransportResponse, UrllibTransport


class _Handler(http.server.BaseHTTPRequestHandler):
    def log_message(self, format, *args):
        pass

    def _reply(self, status: int, body: bytes, content_type: str = "application/json"):
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_GET(self):
        if self.path == "/ok":
            self._reply(200, b'{"a":1}')
        elif self.path == "/slow":
            time.sleep(1.0)
            self._reply(200, b"late")
        elif self.path == "/binary":
            self._reply(200, b"\xff\xfeok", "application/octet-stream")
        else:
            self._reply(404, b"not found", "text/plain")

    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length)
        echo = {
            "body": body.decode("utf-8"),
            "content_type": self.headers.get("Content-Type"),
        }
        self._reply(201, json.dumps(echo).encode("utf-8"))


@pytest.fixture
def server_url():
    server = http.server.ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address
    try:
        yield f"http://{host}:{port}"
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def closed_port_url():
    sock = socket.socket()
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return f"http://127.0.0.1:{port}/"


def test_get_returns_status_and_body(server_url):
    response = UrllibTransport().send("GET", server_url + "/ok")
    assert response == TransportResponse(status=200, body='{"a":1}')


def test_post_sends_body_and_headers(server_url):
    response = UrllibTransport().send(
        "POST",
        server_url + "/echo",
        b'{"x": 1}',
        {"Content-Type": "application/json"},
    )
    assert response.status == 201
    assert json.loads(response.body) == {"body": '{"x": 1}', "content_type": "application/json"}


def test_http_error_status_is_a_response(server_url):
    response = UrllibTransport().send("GET", server_url + "/missing")
    assert response == TransportResponse(status=404, body="not found")


def test_undecodable_bytes_are_replaced(server_url):
    response = UrllibTransport().send("GET", server_url + "/binary")
    assert response.body.endswith("ok")
    assert "�" in response.body


def test_connection_refused_is_transport_error(closed_port_url):
    with pytest.raises(TransportError, match="failed to send request"):
        UrllibTransport().send("GET", closed_port_url)


@pytest.mark.parametrize("url", ["not a url", "", "ftp-ish://"])
def test_malformed_url_is_transport_error(url):
    with pytest.raises(TransportError):
        UrllibTransport().send("GET", url)


def test_timeout_is_transport_error(server_url):
    with pytest.raises(TransportError):
        UrllibTransport(timeout=0.1).send("GET", server_url + "/slow")
