"""Module: http.

Shared request helper for the hosted backend (identity + storage APIs).
"""

import logging

import httpx

from petconnect.core.errors import BackendError

logger = logging.getLogger(__name__)


def response_error_message(response: httpx.Response) -> str:
    # The hosted backend reports errors under a handful of different keys.
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        for key in ("msg", "message", "error_description", "error"):
            if payload.get(key):
                return str(payload[key])
    return f"Request failed with status {response.status_code}"


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def send(http: httpx.AsyncClient, method: str, url: str, **kwargs) -> httpx.Response:
    try:
        response = await http.request(method, url, **kwargs)
    except httpx.HTTPError as exc:
        logger.warning("Hosted backend unreachable (%s %s): %s", method, url, exc)
        raise BackendError("Could not reach the server. Please try again.") from exc

    if response.is_error:
        message = response_error_message(response)
        logger.warning("Hosted backend error (%s %s -> %s): %s", method, url, response.status_code, message)
        raise BackendError(message)
    return response
