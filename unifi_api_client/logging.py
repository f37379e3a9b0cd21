import logging
from typing import Optional

import requests


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with the appropriate name.

    Args:
        name: Optional specific logger name. If not provided, uses the package logger.

    Returns:
        A logger instance for the specified name
    """
    if name is None:
        return logging.getLogger("unifi_api_client")
    elif name.startswith("unifi_api_client"):
        return logging.getLogger(name)
    else:
        return logging.getLogger(f"unifi_api_client.{name}")


def log_api_response(
    logger: logging.Logger,
    method: str,
    url: str,
    response: requests.Response,
    truncate: bool = True,
    max_length: int = 500,
):
    """
    Log an API response body using the provided logger.

    Args:
        logger: Logger to use
        method: HTTP method of the request.
        url: The API URL that was called.
        response: The response returned by the transport.
        truncate: Whether to truncate large response bodies. Default is True.
        max_length: Maximum length for the body in the log if truncated. Default is 500.
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return

    try:
        body = response.text
    except (AttributeError, UnicodeDecodeError, ValueError) as e:
        logger.debug(
            f"API {method} response from {url} (Status: {response.status_code}) - Error reading body: {e}"
        )
        return

    if not isinstance(body, str):
        body = repr(body)
    if truncate and len(body) > max_length:
        body = body[:max_length] + "... [truncated]"

    logger.debug(
        f"API {method} response from {url} (Status: {response.status_code}):\n{body}"
    )
