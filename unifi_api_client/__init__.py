"""
UniFi Controller API client.

This package provides a session-aware Python client for the UniFi Controller
API: login and relogin with a cookie-backed session, generic GET/POST/PUT
requests, and station manager commands such as guest authorization.
"""

from .api_client import UnifiClient
from .commands import CommandAPI, CommandEnvelope, GuestAuthorization
from .dispatcher import RequestDispatcher
from .options import RequestOptions, merge_request_options
from .session import Credentials, SessionStore
from .transport import HttpTransport, RequestsTransport
from .utils import extract_data, response_meta
from .exceptions import (
    UnifiClientError,
    TransportError,
    MissingCredentialsError,
    UnifiDataError,
)

__version__ = "0.1.0"

__all__ = [
    "UnifiClient",
    "CommandAPI",
    "CommandEnvelope",
    "GuestAuthorization",
    "RequestDispatcher",
    "RequestOptions",
    "merge_request_options",
    "Credentials",
    "SessionStore",
    "HttpTransport",
    "RequestsTransport",
    "extract_data",
    "response_meta",
    "UnifiClientError",
    "TransportError",
    "MissingCredentialsError",
    "UnifiDataError",
]
