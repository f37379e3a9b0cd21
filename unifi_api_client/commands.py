"""
Station manager commands.

Guest authorisation, kicks and blocks are all sent to one per-site endpoint,
``/api/s/{site}/cmd/stamgr``, as a JSON body of the form ``{"cmd": ..., **params}``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

import requests

from .dispatcher import RequestDispatcher
from .logging import get_logger

logger = get_logger(__name__)

STAMGR_PATH = "/api/s/{site}/cmd/stamgr"


def stamgr_path(site: str) -> str:
    """Path of the station manager command endpoint of ``site``."""
    return STAMGR_PATH.format(site=site)


@dataclass(frozen=True)
class CommandEnvelope:
    """A ``cmd`` discriminator plus its parameters."""

    cmd: str
    parameters: Mapping[str, Any] = field(default_factory=dict)

    def overlay(self, extra: Optional[Mapping[str, Any]]) -> "CommandEnvelope":
        """
        Return a new envelope with ``extra`` merged over the parameters.

        Keys in ``extra`` replace parameters of the same name. A ``cmd`` key in
        ``extra`` is ignored; the discriminator cannot be changed this way.
        """
        if not extra:
            return self
        parameters = dict(self.parameters)
        for key, value in extra.items():
            if key == "cmd":
                logger.debug(f"Ignoring 'cmd' in extra parameters of {self.cmd}")
                continue
            parameters[key] = value
        return CommandEnvelope(self.cmd, parameters)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"cmd": self.cmd}
        payload.update((k, v) for k, v in self.parameters.items() if k != "cmd")
        return payload


@dataclass(frozen=True)
class GuestAuthorization:
    """
    Parameters of an ``authorize-guest`` command.

    Attributes:
        mac: Client MAC address to authorize.
        minutes: Duration in minutes until authorization expires.
        up: Optional upload speed limit in Kbps.
        down: Optional download speed limit in Kbps.
        bytes: Optional data transfer limit. The API expects Megabytes here.
        ap_mac: Optional MAC address of the AP the client is connected to.
    """

    mac: str
    minutes: int
    up: Optional[int] = None
    down: Optional[int] = None
    bytes: Optional[int] = None
    ap_mac: Optional[str] = None

    def to_envelope(self) -> CommandEnvelope:
        parameters: Dict[str, Any] = {"mac": self.mac, "minutes": self.minutes}
        for name in ("up", "down", "bytes", "ap_mac"):
            value = getattr(self, name)
            if value is not None:
                parameters[name] = value
        return CommandEnvelope("authorize-guest", parameters)


class CommandAPI:
    """Builds station manager command envelopes and posts them."""

    def __init__(self, dispatcher: RequestDispatcher):
        self.dispatcher = dispatcher

    def execute(self, site: str, envelope: CommandEnvelope) -> requests.Response:
        """
        Post a command envelope to the station manager endpoint of ``site``.

        Args:
            site: The short name (ID) of the site. Not validated.
            envelope: The command to send.

        Returns:
            requests.Response: The raw response.

        Raises:
            TransportError: If the request fails.
        """
        path = stamgr_path(site)
        logger.debug(f"Sending {envelope.cmd} command to {path}")
        return self.dispatcher.post(path, envelope.to_payload())

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
            mac: Client MAC address to authorize.
            minutes: Duration in minutes until authorization expires.
            extra: Additional fields, e.g. ``up`` (Kbps), ``down`` (Kbps) or
                   ``bytes`` (MB). They override ``mac`` and ``minutes`` when
                   the names collide.
        """
        envelope = GuestAuthorization(mac, minutes).to_envelope().overlay(extra)
        logger.info(f"Authorizing guest {mac} on site {site} for {minutes} minutes")
        return self.execute(site, envelope)

    def unauthorize_guest(self, site: str, mac: str) -> requests.Response:
        """Revoke a guest authorization by MAC address."""
        logger.info(f"Unauthorizing guest {mac} on site {site}")
        return self.execute(site, CommandEnvelope("unauthorize-guest", {"mac": mac}))

    def reconnect_client(self, site: str, mac: str) -> requests.Response:
        """Force a wireless client to disconnect and reconnect (``kick-sta``)."""
        logger.info(f"Reconnecting client {mac} on site {site}")
        return self.execute(site, CommandEnvelope("kick-sta", {"mac": mac}))

    def block_client(self, site: str, mac: str) -> requests.Response:
        """Prevent a client from associating with the network of a site (``block-sta``)."""
        logger.info(f"Blocking client {mac} on site {site}")
        return self.execute(site, CommandEnvelope("block-sta", {"mac": mac}))

    def unblock_client(self, site: str, mac: str) -> requests.Response:
        """Remove a block previously placed on a client (``unblock-sta``)."""
        logger.info(f"Unblocking client {mac} on site {site}")
        return self.execute(site, CommandEnvelope("unblock-sta", {"mac": mac}))

    def forget_client(self, site: str, macs: Union[str, List[str]]) -> requests.Response:
        """
        Forget one or more clients, removing their history from the controller.

        Args:
            site: The short name (ID) of the site.
            macs: A single MAC address or a list of MAC addresses.

        Note:
            This action is irreversible.
        """
        mac_list = [macs] if isinstance(macs, str) else list(macs)
        logger.info(f"Forgetting client(s) {mac_list} on site {site}")
        return self.execute(site, CommandEnvelope("forget-sta", {"macs": mac_list}))
