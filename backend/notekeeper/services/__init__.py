# Services package init
"""
NoteKeeper Backend: Services Layer
====================================

What:  Business logic between routes (HTTP) and the database.

Service Inventory:
    - NoteService: owner-scoped note queries (dashboard, view, create,
      update, delete, search)
"""
