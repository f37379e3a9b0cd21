"""
Controller session handling.

A session is a cookie issued by ``POST /api/login``. The :class:`SessionStore`
keeps the credentials of the last login so the session can be re-established
with :meth:`SessionStore.relogin` once the controller expires it.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

import requests
from requests.cookies import RequestsCookieJar

from .dispatcher import RequestDispatcher
from .exceptions import MissingCredentialsError
from .logging import get_logger

logger = get_logger(__name__)

LOGIN_PATH = "/api/login"
LOGOUT_PATH = "/logout"


@dataclass(frozen=True)
class Credentials:
    """Username and password for a local controller account."""

    username: Optional[str]
    password: Optional[str]

    def to_payload(self) -> Dict[str, Any]:
        return {"username": self.username, "password": self.password}

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


class SessionStore:
    """
    Holds the last used credentials and logs in through the dispatcher.

    The session cookie itself lives in the dispatcher's shared cookie jar, so
    every request issued after a login carries it.
    """

    def __init__(self, dispatcher: RequestDispatcher):
        self.dispatcher = dispatcher
        self._credentials: Optional[Credentials] = None

    @property
    def credentials(self) -> Optional[Credentials]:
        """Credentials of the last login, or None before any login."""
        return self._credentials

    @property
    def cookies(self) -> RequestsCookieJar:
        """The cookie jar shared by all requests of this client."""
        return self.dispatcher.options.cookies

    def login(self, username: Optional[str], password: Optional[str]) -> requests.Response:
        """
        Login to the UniFi Controller.

        The credentials are stored before the request is sent, so they are
        available to :meth:`relogin` even when this login fails.

        Args:
            username: Username. Must be a local account, not a cloud account.
            password: Password.

        Returns:
            requests.Response: The raw login response. Its body is not inspected.

        Raises:
            TransportError: If the login request fails.
        """
        self._credentials = Credentials(username, password)
        logger.info(f"Logging in to UniFi controller as {username!r}")
        return self.dispatcher.post(LOGIN_PATH, self._credentials.to_payload())

    def relogin(
        self, username: Optional[str] = None, password: Optional[str] = None
    ) -> requests.Response:
        """
        Login again, falling back to the stored credentials.

        Any argument that is omitted (or empty) is replaced by the value of the
        last :meth:`login` or :meth:`set_login_data`.

        Raises:
            MissingCredentialsError: If no username or password was supplied and
                                     none is stored. No request is sent.
            TransportError: If the login request fails.
        """
        stored = self._credentials or Credentials(None, None)
        if not username:
            username = stored.username
        if not password:
            password = stored.password

        if username is None or password is None:
            missing = "username" if username is None else "password"
            error_msg = f"Cannot relogin: no {missing} supplied or stored"
            logger.error(error_msg)
            raise MissingCredentialsError(error_msg)

        logger.debug("Re-establishing controller session")
        return self.login(username, password)

    def set_login_data(
        self, credentials: Union[Credentials, Mapping[str, Optional[str]]]
    ):
        """
        Store credentials without logging in.

        Args:
            credentials: A :class:`Credentials` or a mapping with ``username`` and
                         ``password`` keys; missing keys are stored as None.
        """
        if not isinstance(credentials, Credentials):
            credentials = Credentials(
                credentials.get("username"), credentials.get("password")
            )
        self._credentials = credentials

    def logout(self) -> requests.Response:
        """
        Logout from the controller.

        The controller answers with a redirect, which is not followed. Stored
        credentials are kept, so :meth:`relogin` still works afterwards.

        Raises:
            TransportError: If the logout request fails.
        """
        logger.info("Logging out from UniFi controller")
        return self.dispatcher.request("GET", LOGOUT_PATH, allow_redirects=False)
