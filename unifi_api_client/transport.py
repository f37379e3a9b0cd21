"""
HTTP transport used by the client.

The client talks to the controller only through :class:`HttpTransport`, so the
connection handling can be replaced (for instance by a test double). The
default :class:`RequestsTransport` is built on :class:`requests.Session`.
"""

from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import Any, Optional, Protocol

import requests
from requests.cookies import extract_cookies_to_jar

from .exceptions import TransportError
from .logging import get_logger

logger = get_logger(__name__)


class HttpTransport(Protocol):
    """Anything that can perform an HTTP request against the controller."""

    def request(self, method: str, path: str, **options: Any) -> requests.Response:
        """
        Perform an HTTP request.

        Args:
            method: HTTP method, e.g. ``"GET"``.
            path: Path relative to the controller URL, e.g. ``"/api/login"``.
            **options: ``requests`` keyword options (``cookies``, ``verify``,
                       ``json``, ``params``, ``allow_redirects``, ``timeout``...).

        Returns:
            requests.Response: The controller response.

        Raises:
            TransportError: If the request fails or the controller answers 4xx/5xx.
        """
        ...


class RequestsTransport:
    """
    :class:`HttpTransport` backed by a pooled :class:`requests.Session`.

    The session's own cookie store is disabled: cookies travel only in the jar
    passed with each call, and cookies set by a response are written back into
    that jar. Several clients may therefore share one transport without
    sharing a controller session.
    """

    def __init__(self, base_url: str, session: Optional[requests.Session] = None):
        """
        Args:
            base_url: Base URL of the UniFi Controller, e.g. ``https://127.0.0.1:8443``.
            session: Optional pre-configured session (adapters, proxies, ...).
        """
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))

    def url_for(self, path: str) -> str:
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url}{path}"

    def request(self, method: str, path: str, **options: Any) -> requests.Response:
        url = self.url_for(path)
        jar = options.get("cookies")

        try:
            response = self.session.request(method.upper(), url, **options)
        except requests.exceptions.RequestException as e:
            error_msg = f"API {method.upper()} request to {url} failed: {e}"
            logger.error(error_msg)
            raise TransportError(error_msg, original=e) from e

        if isinstance(jar, CookieJar):
            store_response_cookies(jar, response)

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            error_msg = f"API {method.upper()} request to {url} failed: {e}"
            logger.error(error_msg)
            raise TransportError(error_msg, original=e, response=response) from e

        return response

    def close(self):
        """Release pooled connections."""
        self.session.close()


def store_response_cookies(jar: CookieJar, response: requests.Response):
    """
    Apply the Set-Cookie headers of a response, and of any redirect leading to it, to ``jar``.

    Cookies the controller expires (e.g. ``Max-Age=0`` on logout) are removed.

    Args:
        jar: Cookie jar to update.
        response: Final response of a request.
    """
    for hop in list(response.history) + [response]:
        extract_cookies_to_jar(jar, hop.request, hop.raw)
