"""
Helpers for reading UniFi Controller responses.

Controller responses have the shape ``{"meta": {"rc": "ok"}, "data": [...]}``.
The client returns raw responses; these helpers are for callers that want the
decoded parts.
"""

from typing import Any, Dict, List

import requests

from .exceptions import UnifiDataError
from .logging import get_logger

logger = get_logger(__name__)


def _decode(response: requests.Response, uri: str) -> Dict[str, Any]:
    try:
        raw_data = response.json()
    except ValueError as e:
        error_msg = f"Failed to parse API response from {uri}: {e}"
        logger.error(error_msg)
        raise UnifiDataError(error_msg) from e

    if not isinstance(raw_data, dict):
        error_msg = f"Unexpected API response format for {uri}"
        logger.warning(error_msg)
        raise UnifiDataError(error_msg)
    return raw_data


def extract_data(response: requests.Response, uri: str = "") -> List[Dict[str, Any]]:
    """
    Return the ``data`` list of a controller response.

    Args:
        response: Response returned by the client.
        uri: URI that was called, used in error messages.

    Returns:
        List of data items from the response

    Raises:
        UnifiDataError: If the body is not JSON or has no ``data`` field.
    """
    raw_data = _decode(response, uri)
    if "data" not in raw_data:
        error_msg = f"Unexpected API response format for {uri}"
        logger.warning(error_msg)
        raise UnifiDataError(error_msg)
    return raw_data["data"]


def response_meta(response: requests.Response, uri: str = "") -> Dict[str, Any]:
    """
    Return the ``meta`` block of a controller response, or an empty dict.

    Raises:
        UnifiDataError: If the body is not a JSON object.
    """
    return _decode(response, uri).get("meta", {})
