from typing import Optional

import requests


class UnifiClientError(Exception):
    """Base exception for UnifiClient errors."""

    pass


class TransportError(UnifiClientError):
    """
    Raised when an HTTP call to the UniFi Controller fails.

    Covers network and TLS failures as well as non-2xx responses. The
    underlying ``requests`` exception is kept in ``original`` and, when the
    controller answered at all, the response is kept in ``response`` so the
    caller can interpret the status code and body.
    """

    def __init__(
        self,
        message: str,
        original: Optional[BaseException] = None,
        response: Optional[requests.Response] = None,
    ):
        super().__init__(message)
        self.original = original
        self.response = response

    @property
    def status_code(self) -> Optional[int]:
        """HTTP status of the failed response, or None for network errors."""
        if self.response is None:
            return None
        return self.response.status_code


class MissingCredentialsError(UnifiClientError):
    """Raised when a relogin is attempted without stored or supplied credentials."""

    pass


class UnifiDataError(UnifiClientError):
    """Raised when there is an error parsing data from the UniFi Controller."""

    pass
