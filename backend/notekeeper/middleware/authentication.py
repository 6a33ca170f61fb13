"""
NoteKeeper Backend: Authentication Middleware
===============================================

What:  Resolves who is making the request and records it on request.state.
Why:   Tokens are issued by an external identity provider. This service only
       verifies them, and the auth gate (dependencies.is_logged_in) only
       needs a yes/no answer plus the user id.
How:   Checks, in order:
           1. Trusted proxy header (only when AUTH_TRUSTED_HEADER is set)
           2. Authorization: Bearer <jwt>, verified with python-jose
       The first source that yields a user id wins.
Who:   Applied to every request via Starlette middleware.
When:  After RequestIDMiddleware, so failures are logged with the request id.

Never rejects a request itself. It sets:
    request.state.user              CurrentUser or None
    request.state.is_authenticated  bool

Expected token claims:
    sub         user id (required)
    given_name  first name shown on the dashboard (first_name also accepted)
    exp         expiry, enforced by jose when present
"""

import logging
from dataclasses import dataclass
from typing import Optional

from jose import JWTError, jwt
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notekeeper.config import settings
from notekeeper.middleware.request_id import request_id_var

logger = logging.getLogger("notekeeper.auth")


@dataclass(frozen=True)
class CurrentUser:
    """The identity attached to an authenticated request."""
    id: str
    first_name: Optional[str] = None


def _mask_user_id(user_id: Optional[str]) -> str:
    value = (user_id or "").strip()
    if not value:
        return "-"
    if len(value) <= 8:
        return value
    return f"{value[:4]}...{value[-4:]}"


def decode_bearer_token(token: str) -> Optional[CurrentUser]:
    """
    Verify a bearer token and turn its claims into a CurrentUser.

    Returns None (never raises) when the signature, expiry or claims are
    invalid; the caller decides what an anonymous request may do.
    """
    try:
        payload = jwt.decode(
            token,
            settings.auth_jwt_secret,
            algorithms=[settings.auth_jwt_algorithm],
        )
    except JWTError as e:
        logger.warning("[%s] Rejected bearer token: %s", request_id_var.get(""), str(e))
        return None

    user_id = payload.get("sub")
    if not user_id:
        logger.warning("[%s] Bearer token has no 'sub' claim", request_id_var.get(""))
        return None

    first_name = payload.get("given_name") or payload.get("first_name")
    return CurrentUser(id=str(user_id), first_name=first_name)


def resolve_user(request: Request) -> Optional[CurrentUser]:
    """Work out the request's identity from the trusted header or bearer token."""
    if settings.auth_trusted_header:
        trusted_id = (request.headers.get(settings.auth_trusted_header) or "").strip()
        if trusted_id:
            first_name = request.headers.get(settings.auth_trusted_name_header) or None
            return CurrentUser(id=trusted_id, first_name=first_name)

    authorization = request.headers.get("Authorization", "")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return decode_bearer_token(token.strip())

    return None


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """
    Populates request.state.user and request.state.is_authenticated.

    Anonymous requests pass through untouched; protected routes reject them
    through the is_logged_in dependency, public ones (/health, /docs) do not
    care.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        user = resolve_user(request)

        request.state.user = user
        request.state.is_authenticated = user is not None

        if user is not None:
            logger.debug(
                "[%s] Authenticated user %s",
                request_id_var.get(""),
                _mask_user_id(user.id),
            )

        return await call_next(request)
