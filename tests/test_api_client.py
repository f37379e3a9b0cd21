import logging
from unittest.mock import patch

from requests.cookies import RequestsCookieJar

from unifi_api_client import RequestsTransport, UnifiClient


def test_url_builds_requests_transport():
    client = UnifiClient("https://127.0.0.1:8443")
    assert isinstance(client.http_client, RequestsTransport)
    assert client.http_client.base_url == "https://127.0.0.1:8443"


def test_http_client_returns_given_transport(client, transport):
    assert client.http_client is transport


def test_no_options_defaults(transport):
    client = UnifiClient(transport)
    assert client.options.verify is False
    assert isinstance(client.options.cookies, RequestsCookieJar)
    assert len(client.options.cookies) == 0


def test_disabled_verification_warns(transport, caplog):
    with patch("unifi_api_client.api_client.urllib3.disable_warnings") as disable:
        with caplog.at_level(logging.WARNING, logger="unifi_api_client"):
            UnifiClient(transport)
    disable.assert_called_once()
    assert "verification is disabled" in caplog.text


def test_certificate_path_is_kept(transport):
    with patch("unifi_api_client.api_client.urllib3.disable_warnings") as disable:
        client = UnifiClient(transport, {"verify": "/path/cert.pem"})
    disable.assert_not_called()
    client.sites()
    assert transport.last_call[2]["verify"] == "/path/cert.pem"


def test_endpoint_paths(client, transport):
    client.sites()
    client.statistics("default")
    client.device_statistics("default")
    assert [(method, path) for method, path, _ in transport.calls] == [
        ("GET", "/api/self/sites"),
        ("GET", "/api/s/default/stat/sta"),
        ("GET", "/api/s/default/stat/device"),
    ]


def test_generic_requests(client, transport):
    client.get("/api/s/default/stat/event", {"_limit": 10})
    assert transport.last_call[2]["params"] == {"_limit": 10}
    client.post("/api/s/default/rest/user", {"name": "printer"})
    assert transport.last_call[:2] == ("POST", "/api/s/default/rest/user")
    client.put("/api/s/default/rest/user/1")
    assert transport.last_call[2]["json"] == {}


def test_clients_do_not_share_sessions(transport):
    first = UnifiClient(transport)
    second = UnifiClient(transport)
    first.login("u", "p")
    assert first.session.cookies.get("unifises") == "session-token"
    assert second.session.cookies.get("unifises") is None
