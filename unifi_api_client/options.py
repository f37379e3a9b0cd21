"""
Request options shared by every call a client issues.

Options use the keyword names of :meth:`requests.Session.request`. Two of them
are owned by the client and can never be overridden per call:

* ``cookies``: the cookie jar holding the controller session.
* ``verify``: TLS verification, ``False`` or ``True`` or a path to a CA bundle.

Everything else (``timeout``, ``headers``, ``proxies``, ...) is passed through
to the transport untouched.
"""

from dataclasses import dataclass, field
from http.cookiejar import CookieJar
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from requests.cookies import RequestsCookieJar, cookiejar_from_dict

from .logging import get_logger

logger = get_logger(__name__)

COOKIES = "cookies"
VERIFY = "verify"
PROTECTED_OPTIONS = (COOKIES, VERIFY)


def merge_request_options(*layers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Merge option layers into a single options dictionary.

    Layers are applied in order, so a key in a later layer replaces the same key
    from an earlier one. The client uses the precedence
    ``defaults < constructor options < per-call options``.

    Args:
        *layers: Option mappings, lowest precedence first. ``None`` entries are skipped.

    Returns:
        A new dictionary with the merged options.
    """
    merged: Dict[str, Any] = {}
    for layer in layers:
        if layer:
            merged.update(layer)
    return merged


def default_request_options() -> Dict[str, Any]:
    """Defaults for a new client: a fresh empty cookie jar and no TLS verification."""
    return {COOKIES: RequestsCookieJar(), VERIFY: False}


@dataclass(frozen=True)
class RequestOptions:
    """
    Transport options fixed at client construction.

    The instance is immutable; only the cookie jar changes, as the transport
    stores cookies set by the controller into it.
    """

    cookies: RequestsCookieJar
    verify: Union[bool, str] = False
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]] = None) -> "RequestOptions":
        """
        Build options from a caller-supplied configuration mapping.

        Args:
            config: Options given at client construction. ``cookies`` and ``verify``
                    replace the defaults, any other key is kept as a passthrough option.
                    ``cookies`` may be a cookie jar or a dict of cookie names to values;
                    a dict is converted to a new jar.

        Returns:
            RequestOptions: The effective options for the client.
        """
        merged = merge_request_options(default_request_options(), config)
        cookies = merged.pop(COOKIES)
        verify = merged.pop(VERIFY)
        if cookies is None:
            cookies = RequestsCookieJar()
        elif not isinstance(cookies, CookieJar):
            cookies = cookiejar_from_dict(dict(cookies))
        logger.debug(
            f"Request options: verify={verify!r}, passthrough={sorted(merged)}"
        )
        return cls(cookies=cookies, verify=verify, extra=merged)

    def for_request(self, **call_options: Any) -> Dict[str, Any]:
        """
        Build the transport keyword arguments for a single call.

        Call options win over passthrough options, while ``cookies`` and
        ``verify`` always come from this instance.

        Args:
            **call_options: Per-call options such as ``json``, ``params`` or
                            ``allow_redirects``.

        Returns:
            Dictionary of keyword arguments for :meth:`HttpTransport.request`.
        """
        ignored = [name for name in PROTECTED_OPTIONS if name in call_options]
        if ignored:
            logger.debug(f"Ignoring per-call override of client options: {ignored}")
        return merge_request_options(
            self.extra,
            call_options,
            {COOKIES: self.cookies, VERIFY: self.verify},
        )
