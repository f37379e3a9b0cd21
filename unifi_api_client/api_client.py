from typing import Any, Dict, List, Mapping, Optional, Union

import requests
import urllib3

from .commands import CommandAPI
from .dispatcher import RequestDispatcher
from .logging import get_logger
from .options import RequestOptions
from .session import Credentials, SessionStore
from .transport import HttpTransport, RequestsTransport

logger = get_logger(__name__)


class UnifiClient:
    """
    Client for the UniFi Controller API.

    Every method returns the raw :class:`requests.Response`. Failures, including
    an expired session, raise :class:`TransportError`; the client never retries.
    After a session expires, call :meth:`relogin` and repeat the request.

    Example:
        >>> client = UnifiClient("https://127.0.0.1:8443")
        >>> client.login("your_username", "your_password")
        >>> client.statistics("default")

    UniFi controllers ship with a self-signed certificate, so TLS verification
    is disabled by default. To verify the controller, download its certificate
    and pass its path as the ``verify`` option:

        >>> client = UnifiClient(
        ...     "https://127.0.0.1:8443", {"verify": "/your/unifi/cert.pem"}
        ... )

    Note:
        This client interacts with the UniFi Controller's **undocumented** private API.
        Response structures and endpoint behavior may change without notice between
        controller versions.
    """

    def __init__(
        self,
        controller: Union[str, HttpTransport],
        request_options: Optional[Mapping[str, Any]] = None,
    ):
        """
        Initialize the client. No request is sent.

        Args:
            controller: Base URL of the UniFi Controller, or an :class:`HttpTransport`
                        to send requests through.
            request_options: ``requests`` options sent with every request. Recognized:
                             - cookies: cookie jar holding the session (default: a new jar)
                             - verify: ``False`` (default), ``True``, or a path to a CA bundle
                             Any other option (``timeout``, ``headers``...) is passed through.
        """
        if isinstance(controller, str):
            logger.debug(f"Initializing UnifiClient with URL: {controller}")
            controller = RequestsTransport(controller)
        self._transport = controller

        self.options = RequestOptions.from_config(request_options)
        if self.options.verify is False:
            logger.warning(
                "SSL certificate verification is disabled. This is not recommended for production use."
            )
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        self.dispatcher = RequestDispatcher(self._transport, self.options)
        self.session = SessionStore(self.dispatcher)
        self.commands = CommandAPI(self.dispatcher)

    @property
    def http_client(self) -> HttpTransport:
        """The transport requests are sent through."""
        return self._transport

    # Session

    def login(self, username: Optional[str], password: Optional[str]) -> requests.Response:
        """
        Login to the UniFi Controller.

        You need to login before you can make other API requests.

        Raises:
            TransportError: In case of a login failure.
        """
        return self.session.login(username, password)

    def relogin(
        self, username: Optional[str] = None, password: Optional[str] = None
    ) -> requests.Response:
        """
        Login again, using the stored credentials for omitted arguments.

        Raises:
            MissingCredentialsError: If no credentials are supplied or stored.
            TransportError: In case of a login failure.
        """
        return self.session.relogin(username, password)

    def set_login_data(self, credentials: Union[Credentials, Mapping[str, Optional[str]]]):
        """Store credentials for a later :meth:`relogin` without logging in."""
        self.session.set_login_data(credentials)

    def logout(self) -> requests.Response:
        """
        Logout from the UniFi Controller.

        The redirect answered by the controller is not followed and counts as
        success. Stored credentials are kept for a later :meth:`relogin`.

        Returns:
            requests.Response: The raw logout response, normally a redirect.

        Raises:
            TransportError: In case of a failure.
        """
        return self.session.logout()

    # Generic requests

    def get(self, path: str, query: Optional[Dict[str, Any]] = None) -> requests.Response:
        """
        Send a GET request.

        Args:
            path: (relative) path to the API endpoint.
            query: Query parameters, omitted when empty.
        """
        return self.dispatcher.get(path, query)

    def post(self, path: str, data: Optional[Dict[str, Any]] = None) -> requests.Response:
        """
        Send a POST request.

        Args:
            path: (relative) path to the API endpoint.
            data: Data sent as JSON body.
        """
        return self.dispatcher.post(path, data)

    def put(self, path: str, data: Optional[Dict[str, Any]] = None) -> requests.Response:
        """
        Send a PUT request, used for idempotent updates.

        Args:
            path: (relative) path to the API endpoint.
            data: Data sent as JSON body. An empty body is sent as ``{}``.

        Returns:
            requests.Response: The raw response.

        Raises:
            TransportError: If the request fails.
        """
        return self.dispatcher.put(path, data)

    # Endpoints

    def sites(self) -> requests.Response:
        """List the sites visible to the logged in user (``/api/self/sites``)."""
        return self.get("/api/self/sites")

    def statistics(self, site: str) -> requests.Response:
        """Fetch client statistics of a site (``/api/s/{site}/stat/sta``)."""
        return self.get(f"/api/s/{site}/stat/sta")

    def device_statistics(self, site: str) -> requests.Response:
        """Fetch device statistics of a site (``/api/s/{site}/stat/device``)."""
        return self.get(f"/api/s/{site}/stat/device")

    # Station manager commands

    def authorize_guest(
        self,
        site: str,
        mac: str,
        minutes: int,
        extra: Optional[Mapping[str, Any]] = None,
    ) -> requests.Response:
        """
        Authorize a guest by MAC address.

        Args:
            site: The short name (ID) of the site.
            mac: The MAC address of the guest to authorize.
            minutes: Number of minutes to authorize the guest.
            extra: Extra data, i.e. ``up`` (Kbps), ``down`` (Kbps), ``bytes`` (MB).
                   Overrides ``mac``/``minutes`` on name collisions.
        """
        return self.commands.authorize_guest(site, mac, minutes, extra)

    def unauthorize_guest(self, site: str, mac: str) -> requests.Response:
        """
        Unauthorize a guest by MAC address (``unauthorize-guest``).

        Args:
            site: The short name (ID) of the site.
            mac: The MAC address of the guest to unauthorize.

        Returns:
            requests.Response: The raw response.

        Raises:
            TransportError: If the request fails.
        """
        return self.commands.unauthorize_guest(site, mac)

    def reconnect_client(self, site: str, mac: str) -> requests.Response:
        """
        Force a wireless client to disconnect and reconnect (``kick-sta``).

        Args:
            site: The short name (ID) of the site.
            mac: The MAC address of the client to reconnect.

        Returns:
            requests.Response: The raw response.

        Raises:
            TransportError: If the request fails.
        """
        return self.commands.reconnect_client(site, mac)

    def block_client(self, site: str, mac: str) -> requests.Response:
        """
        Block a client from associating with the site's network (``block-sta``).

        Args:
            site: The short name (ID) of the site.
            mac: The MAC address of the client to block.

        Returns:
            requests.Response: The raw response.

        Raises:
            TransportError: If the request fails.
        """
        return self.commands.block_client(site, mac)

    def unblock_client(self, site: str, mac: str) -> requests.Response:
        """
        Remove a block placed on a client (``unblock-sta``).

        Args:
            site: The short name (ID) of the site.
            mac: The MAC address of the client to unblock.

        Returns:
            requests.Response: The raw response.

        Raises:
            TransportError: If the request fails.
        """
        return self.commands.unblock_client(site, mac)

    def forget_client(self, site: str, macs: Union[str, List[str]]) -> requests.Response:
        """
        Forget one or more clients, removing their history from the controller (``forget-sta``).

        Args:
            site: The short name (ID) of the site.
            macs: A single MAC address or a list of MAC addresses.

        Returns:
            requests.Response: The raw response.

        Raises:
            TransportError: If the request fails.

        Note:
            This action is irreversible.
        """
        return self.commands.forget_client(site, macs)
