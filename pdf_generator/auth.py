"""
Authentication Module

Decides whether a conversion request may proceed. Requests arriving over
the internal network (no proxy forwarding header) are trusted; everything
else must present the shared secret as a bearer token.
"""

import hmac
import logging
from typing import Mapping, Optional

from fastapi import Request

from .errors import AuthorizationError


logger = logging.getLogger(__name__)

FORWARDED_FOR_HEADER = "x-forwarded-for"


def is_internal_request(headers: Mapping[str, str]) -> bool:
    """A request that did not pass through the public proxy has no X-Forwarded-For."""
    return headers.get(FORWARDED_FOR_HEADER) is None


def authorize(
    is_internal: bool,
    provided_credential: Optional[str],
    configured_secret: Optional[str],
) -> bool:
    """
    Request Gate decision.

    Args:
        is_internal: True if the request came over the internal network
        provided_credential: Raw Authorization header value, if any
        configured_secret: PLAYWRIGHT_SERVICE_SECRET, if configured

    Returns:
        True to allow, False to deny. With no secret configured every
        external request is denied.
    """
    if is_internal:
        return True

    if not configured_secret or provided_credential is None:
        return False

    expected = f"Bearer {configured_secret}"
    return hmac.compare_digest(
        provided_credential.encode("utf-8"), expected.encode("utf-8")
    )


def is_request_authorized(request: Request) -> bool:
    """Apply the Request Gate to an incoming request using the app's configured secret."""
    return authorize(
        is_internal_request(request.headers),
        request.headers.get("authorization"),
        request.app.state.settings.playwright_service_secret,
    )


async def verify_request(request: Request) -> None:
    """
    FastAPI dependency applying the Request Gate.

    Raises:
        AuthorizationError: if the gate denies the request
    """
    if not is_request_authorized(request):
        client = request.client.host if request.client else "unknown"
        logger.warning(f"Rejected unauthorized external request from {client}")
        raise AuthorizationError("Unauthorized")
