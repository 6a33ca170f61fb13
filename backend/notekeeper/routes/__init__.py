# Routes package init
"""
NoteKeeper Backend: API Routes Package
========================================

Route Inventory:
    - dashboard.py:  /dashboard/*   (notes CRUD + search, auth-gated)
    - health.py:     GET /health    (service health check, public)

Design Principle:
    Routes are THIN. They pull data out of the request, call NoteService
    with the authenticated user's id, and pick the response type
    (JSON view or redirect). Queries live in services/note_service.py.
"""
