"""
NoteKeeper Backend: Route Dependencies
========================================

What:  The auth gate that every dashboard route depends on.
How:   Reads the flag AuthenticationMiddleware left on request.state and
       either returns the CurrentUser or raises AuthenticationError, which
       the global handler turns into 401 "Access Denied".
"""

import logging

from fastapi import Request

from notekeeper.exceptions import AuthenticationError
from notekeeper.middleware.authentication import CurrentUser
from notekeeper.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


def is_logged_in(request: Request) -> CurrentUser:
    """
    Let the request through only when it carries a verified identity.

    getattr defaults cover apps assembled without AuthenticationMiddleware:
    the gate then denies everything instead of failing open.
    """
    user = getattr(request.state, "user", None)
    if getattr(request.state, "is_authenticated", False) and user is not None:
        return user

    client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
    logger.warning(
        "[%s] AUTH_DENY method=%s path=%s ip=%s",
        request_id_var.get(""),
        request.method,
        request.url.path,
        client_ip,
    )
    raise AuthenticationError()
