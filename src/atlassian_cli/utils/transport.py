"""Error wrapping around calls made through the atlassian client objects."""

import logging
from typing import Any

from requests.exceptions import HTTPError, RequestException

from ..exceptions import AuthenticationError, TransportError

logger = logging.getLogger("atlassian-cli.transport")


def _response_body(http_err: HTTPError) -> Any:
    response = http_err.response
    if response is None:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def call_api(
    client: Any, method: str, path: str, base_url: str = "", **kwargs: Any
) -> Any:
    """
    Call ``client.<method>(path, **kwargs)`` and wrap request failures.

    Args:
        client: An ``atlassian.Jira`` or ``atlassian.Confluence`` instance
        method: One of get, post, put, delete
        path: API path relative to the client URL, or an absolute URL
            together with ``absolute=True``
        base_url: Client URL, used to report the full request URL
        **kwargs: Passed through to the client method

    Returns:
        The decoded response

    Raises:
        AuthenticationError: On 401/403 responses
        TransportError: On any other HTTP or connection failure
    """
    if kwargs.get("absolute"):
        url = path
    else:
        url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    try:
        return getattr(client, method)(path, **kwargs)
    except HTTPError as http_err:
        response = http_err.response
        status = response.status_code if response is not None else None
        body = _response_body(http_err)
        if status in (401, 403):
            error_msg = (
                f"Authentication failed ({status}). "
                "Token may be expired or invalid. Please verify credentials."
            )
            logger.error(error_msg)
            raise AuthenticationError(
                method, url, status=status, body=body, message=error_msg
            ) from http_err
        logger.error(f"HTTP error during API call: {http_err}")
        raise TransportError(
            method, url, status=status, body=body, message=str(http_err) or None
        ) from http_err
    except RequestException as e:
        logger.error(f"Network error during API call to {url}: {e}")
        raise TransportError(method, url, message=str(e)) from e
