import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest.mock import MagicMock

import pytest

from unifi_api_client import UnifiClient


class RecordingTransport:
    """Records requests and answers 200; a login sets a session cookie in the jar."""

    def __init__(self):
        self.calls = []

    def request(self, method, path, **options):
        self.calls.append((method, path, options))
        if path == "/api/login":
            options["cookies"].set("unifises", "session-token")
        response = MagicMock()
        response.status_code = 200
        response.text = '{"meta": {"rc": "ok"}, "data": []}'
        return response

    @property
    def last_call(self):
        return self.calls[-1]


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def client(transport):
    return UnifiClient(transport)


class ControllerHandler(BaseHTTPRequestHandler):
    """
    Minimal controller: ``/api/login`` sets the session cookie, ``/logout``
    expires it with a redirect, ``/redirect-login`` sets a cookie on a redirect
    hop. Every request is recorded with its Cookie header and body.
    """

    requests_seen = None

    def log_message(self, format, *args):
        pass

    def _record(self):
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        self.requests_seen.append(
            {
                "method": self.command,
                "path": self.path,
                "cookie": self.headers.get("Cookie", ""),
                "body": json.loads(body) if body else None,
            }
        )

    def _send(self, status, cookies=(), location=None):
        payload = json.dumps({"meta": {"rc": "ok"}, "data": []}).encode()
        self.send_response(status)
        for cookie in cookies:
            self.send_header("Set-Cookie", cookie)
        if location:
            self.send_header("Location", location)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def do_GET(self):
        self._record()
        if self.path == "/logout":
            self._send(302, ["unifises=; Path=/; Max-Age=0"], location="/manage")
        elif self.path == "/redirect-login":
            self._send(302, ["csrf_token=xyz; Path=/"], location="/api/landing")
        elif self.path == "/api/landing":
            self._send(200, ["unifises=abc; Path=/"])
        elif self.path == "/api/denied":
            self._send(401)
        else:
            self._send(200)

    def do_POST(self):
        self._record()
        if self.path == "/api/login":
            self._send(200, ["unifises=tok123; Path=/"])
        else:
            self._send(200)

    do_PUT = do_POST


@pytest.fixture
def controller():
    """A local HTTP controller; yields ``(base_url, requests_seen)``."""
    seen = []
    handler = type("Handler", (ControllerHandler,), {"requests_seen": seen})
    server = ThreadingHTTPServer(("127.0.0.1", 0), handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}", seen
    finally:
        server.shutdown()
        server.server_close()
        thread.join()
