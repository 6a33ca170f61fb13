"""
NoteKeeper Backend: Dashboard Route Handlers
==============================================

What:  The note endpoints, all under /dashboard and all behind the auth gate.
How:   Extract params/body, call NoteService with the authenticated user's
       id, return a JSON view document or a 303 redirect to /dashboard.

Route Inventory:
    GET    /dashboard                     paginated listing (?page=N)
    GET    /dashboard/item/{id}           view one note
    PUT    /dashboard/item/{id}           update title/body → redirect
    DELETE /dashboard/item-delete/{id}    delete → redirect
    GET    /dashboard/add                 empty add-note form
    POST   /dashboard/add                 create → redirect
    GET    /dashboard/search              empty search page
    POST   /dashboard/search              search results

Why 303 See Other for mutations:
    The follow-up request is always a GET of /dashboard, whatever verb the
    mutation used (PUT/DELETE/POST).
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.database import get_db_session
from notekeeper.dependencies import is_logged_in
from notekeeper.middleware.authentication import CurrentUser
from notekeeper.schemas.note import (
    AddNoteView,
    DashboardView,
    NoteCreate,
    NoteUpdate,
    NoteView,
    PageLocals,
    SearchRequest,
    SearchView,
)
from notekeeper.services.note_service import note_service, sanitize_search_term

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
    dependencies=[Depends(is_logged_in)],
)

_ERROR_RESPONSES = {
    401: {"description": "Access Denied"},
    500: {"description": "Internal Server Error"},
}


def _back_to_dashboard() -> RedirectResponse:
    return RedirectResponse(url="/dashboard", status_code=303)


@router.get(
    "",
    response_model=DashboardView,
    responses=_ERROR_RESPONSES,
    summary="Paginated dashboard listing",
)
async def dashboard(
    response: Response,
    page: int = Query(default=1, ge=1, description="1-based page number"),
    user: CurrentUser = Depends(is_logged_in),
    db: AsyncSession = Depends(get_db_session),
) -> DashboardView:
    """
    One page (12 notes) of the user's notes, most recently updated first.

    X-Total-Count carries the user's total note count, same as the body's
    total_count, for clients that only read headers.
    """
    result = await note_service.dashboard(
        db=db,
        user_id=user.id,
        page=page,
        user_name=user.first_name,
    )
    response.headers["X-Total-Count"] = str(result.total_count)
    return result


@router.get(
    "/item/{note_id}",
    response_model=NoteView,
    responses={404: {"description": "Note not found."}, **_ERROR_RESPONSES},
    summary="View a single note",
)
async def view_note(
    note_id: UUID,
    response: Response,
    user: CurrentUser = Depends(is_logged_in),
    db: AsyncSession = Depends(get_db_session),
) -> NoteView:
    """Full note if the user owns it; 404 otherwise (including other users' ids)."""
    note = await note_service.get_note(db=db, user_id=user.id, note_id=note_id)
    # private: note contents must never land in a shared cache
    response.headers["Cache-Control"] = "private, no-cache"
    return NoteView(note_id=note_id, note=note)


@router.put(
    "/item/{note_id}",
    status_code=303,
    response_class=RedirectResponse,
    responses=_ERROR_RESPONSES,
    summary="Update a note",
)
async def update_note(
    note_id: UUID,
    payload: NoteUpdate,
    user: CurrentUser = Depends(is_logged_in),
    db: AsyncSession = Depends(get_db_session),
) -> RedirectResponse:
    """Redirects to /dashboard whether or not a note matched."""
    await note_service.update_note(
        db=db,
        user_id=user.id,
        note_id=note_id,
        title=payload.title,
        body=payload.body,
    )
    return _back_to_dashboard()


@router.delete(
    "/item-delete/{note_id}",
    status_code=303,
    response_class=RedirectResponse,
    responses=_ERROR_RESPONSES,
    summary="Delete a note",
)
async def delete_note(
    note_id: UUID,
    user: CurrentUser = Depends(is_logged_in),
    db: AsyncSession = Depends(get_db_session),
) -> RedirectResponse:
    await note_service.delete_note(db=db, user_id=user.id, note_id=note_id)
    return _back_to_dashboard()


@router.get(
    "/add",
    response_model=AddNoteView,
    responses=_ERROR_RESPONSES,
    summary="Add-note form",
)
async def add_note_form() -> AddNoteView:
    return AddNoteView(locals=PageLocals(title="Add Note"))


@router.post(
    "/add",
    status_code=303,
    response_class=RedirectResponse,
    responses=_ERROR_RESPONSES,
    summary="Create a note",
)
async def add_note(
    payload: NoteCreate,
    user: CurrentUser = Depends(is_logged_in),
    db: AsyncSession = Depends(get_db_session),
) -> RedirectResponse:
    """The owner is the authenticated user; any owner field in the body is ignored."""
    await note_service.create_note(
        db=db,
        user_id=user.id,
        title=payload.title,
        body=payload.body,
    )
    return _back_to_dashboard()


@router.get(
    "/search",
    response_model=SearchView,
    responses=_ERROR_RESPONSES,
    summary="Search page",
)
async def search_form() -> SearchView:
    return SearchView()


@router.post(
    "/search",
    response_model=SearchView,
    responses=_ERROR_RESPONSES,
    summary="Search notes",
)
async def search_notes(
    payload: SearchRequest,
    user: CurrentUser = Depends(is_logged_in),
    db: AsyncSession = Depends(get_db_session),
) -> SearchView:
    """
    Case-insensitive substring search over title and body.

    Example:
        POST /dashboard/search {"searchTerm": "Groceries!!"}
        → matches notes containing "groceries" in any letter case
    """
    results = await note_service.search_notes(
        db=db,
        user_id=user.id,
        search_term=payload.search_term,
    )
    return SearchView(
        search_term=sanitize_search_term(payload.search_term),
        search_results=results,
    )
