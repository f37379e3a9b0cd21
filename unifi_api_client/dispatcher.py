from typing import Any, Dict, Optional

import requests

from .logging import get_logger, log_api_response
from .options import RequestOptions
from .transport import HttpTransport

logger = get_logger(__name__)


class RequestDispatcher:
    """
    Issues GET/POST/PUT calls with the client's shared request options.

    The dispatcher does not interpret responses. Status handling belongs to the
    transport (which raises :class:`TransportError` for failures) and to the caller.
    """

    def __init__(self, transport: HttpTransport, options: RequestOptions):
        self.transport = transport
        self.options = options

    def request(self, method: str, path: str, **call_options: Any) -> requests.Response:
        """
        Send a request with the shared options merged with ``call_options``.

        Args:
            method: HTTP method.
            path: Path relative to the controller URL.
            **call_options: Per-call transport options. ``cookies`` and ``verify``
                            are always taken from the shared options.

        Returns:
            requests.Response: The raw response.

        Raises:
            TransportError: If the transport call fails.
        """
        kwargs = self.options.for_request(**call_options)
        logger.debug(f"API {method} request to {path}")
        response = self.transport.request(method, path, **kwargs)
        logger.debug(
            f"API {method} request to {path} returned status {response.status_code}"
        )
        log_api_response(logger, method, path, response)
        return response

    def get(self, path: str, query: Optional[Dict[str, Any]] = None) -> requests.Response:
        """
        Send a GET request.

        Args:
            path: Path relative to the controller URL.
            query: Query parameters. Omitted from the request when empty.

        Returns:
            requests.Response: The raw response.
        """
        if query:
            return self.request("GET", path, params=query)
        return self.request("GET", path)

    def post(self, path: str, data: Optional[Dict[str, Any]] = None) -> requests.Response:
        """
        Send a POST request with ``data`` as JSON body.

        An empty or missing body is sent as ``{}``.
        """
        return self.request("POST", path, json=data or {})

    def put(self, path: str, data: Optional[Dict[str, Any]] = None) -> requests.Response:
        """Send a PUT request with ``data`` as JSON body (``{}`` when empty)."""
        return self.request("PUT", path, json=data or {})
