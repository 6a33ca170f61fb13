# Middleware package init
"""
NoteKeeper Backend: Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [Authentication] → [GZip] → [CORS] → Route

    1. Request ID first: every later log line can carry the id
    2. Logging: measures the whole request including auth
    3. Authentication: sets request.state.user for the auth gate

    Responses unwind in reverse, so X-Request-ID is added last and the
    logged status is the final one.
"""
