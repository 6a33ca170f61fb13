"""
NoteKeeper Backend: Note Service (Business Logic)
===================================================

What:  Every query the dashboard runs: list, view, create, update, delete,
       search.
Why:   Keeps SQL out of the route handlers, so the ownership rule lives in
       exactly one place and can be tested without HTTP.
How:   Plain SQLAlchemy 2.0 select/update/delete statements on an injected
       AsyncSession. Each statement filters on user_id.
Who:   Called by routes/dashboard.py.

Ownership rule:
    A note is only visible or mutable by the user whose id it carries. Every
    statement here has `Note.user_id == user_id` in its WHERE clause, so an
    id belonging to another user behaves exactly like an id that does not
    exist: view raises NotFoundError, update/delete touch zero rows.

Error Handling Strategy:
    NotFoundError propagates as-is. Anything else raised by the driver is
    logged with its traceback and wrapped in DatabaseError, which the global
    handler turns into a generic 500.

Design Decision:
    NoteService is stateless; it receives the session for each call.
"""

import logging
import math
import re
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, desc, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.config import settings
from notekeeper.exceptions import DatabaseError, NotFoundError
from notekeeper.models.note import Note
from notekeeper.schemas.note import (
    DashboardView,
    NotePreview,
    NoteResponse,
    PageLocals,
)

logger = logging.getLogger(__name__)

# Anything that is not an ASCII letter, digit or space
_SEARCH_STRIP_RE = re.compile(r"[^a-zA-Z0-9 ]")


def sanitize_search_term(search_term: Optional[str]) -> str:
    """
    Drop every character except ASCII letters, digits and spaces.

    "foo!@#" → "foo". The result contains no LIKE wildcards (% and _ are
    stripped), so it can be embedded in a pattern without escaping.
    """
    if not search_term:
        return ""
    return _SEARCH_STRIP_RE.sub("", search_term)


def page_count(total: int, per_page: int) -> int:
    """ceil(total / per_page); 0 notes means 0 pages."""
    if total <= 0:
        return 0
    return math.ceil(total / per_page)


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - dashboard():    One page of previews plus pagination state
        - get_note():     Single note, owner-scoped, NotFoundError otherwise
        - create_note():  Insert under the requesting user
        - update_note():  Owner-scoped replace; silent no-op on no match
        - delete_note():  Owner-scoped delete; silent no-op on no match
        - search_notes(): Sanitized case-insensitive substring match
    """

    async def dashboard(
        self,
        db: AsyncSession,
        user_id: str,
        page: int = 1,
        user_name: Optional[str] = None,
    ) -> DashboardView:
        """
        Build one page of the dashboard.

        Query plan:
            SELECT count(id) FROM notes WHERE user_id = :uid
            SELECT id, title, body FROM notes WHERE user_id = :uid
            ORDER BY updated_at DESC LIMIT :per_page OFFSET :skip

        The page query is skipped when :skip is at or past the count, so a
        page beyond the end (however large) yields an empty list.

        Truncation happens here rather than in SQL so it counts characters
        the same way on every backend.

        Args:
            db: Async database session
            user_id: Authenticated user id
            page: 1-based page number (validated >= 1 by the route)
            user_name: First name to greet the user with

        Raises:
            DatabaseError: Any failure while querying (→ 500)
        """
        per_page = settings.notes_per_page
        skip = per_page * page - per_page
        notes = []

        try:
            count_result = await db.execute(
                select(func.count(Note.id)).where(Note.user_id == user_id)
            )
            total_count = count_result.scalar() or 0

            if skip < total_count:
                result = await db.execute(
                    select(Note)
                    .where(Note.user_id == user_id)
                    .order_by(desc(Note.updated_at))
                    .offset(skip)
                    .limit(per_page)
                )
                notes = list(result.scalars().all())

        except Exception as e:
            logger.error("Database error building dashboard for %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not load the dashboard.",
                context={"user_id": user_id, "page": page, "error_type": type(e).__name__},
            )

        previews = [
            NotePreview(
                id=note.id,
                title=(note.title or "")[: settings.title_preview_length],
                body=(note.body or "")[: settings.body_preview_length],
            )
            for note in notes
        ]

        return DashboardView(
            user_name=user_name,
            locals=PageLocals(title="Dashboard"),
            notes=previews,
            current=page,
            pages=page_count(total_count, per_page),
            total_count=total_count,
        )

    async def get_note(self, db: AsyncSession, user_id: str, note_id: UUID) -> NoteResponse:
        """
        Retrieve a single note owned by `user_id`.

        Raises:
            NotFoundError: No note with that id for this user (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            result = await db.execute(
                select(Note).where(Note.id == note_id, Note.user_id == user_id)
            )
            note = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve the note.",
                context={"note_id": str(note_id)},
            )

        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))

        return NoteResponse.model_validate(note)

    async def create_note(
        self,
        db: AsyncSession,
        user_id: str,
        title: str,
        body: str,
    ) -> Note:
        """
        Insert a new note owned by `user_id`.

        The owner always comes from the authenticated identity; the request
        body has no say in it. Flush (not commit) assigns defaults; the
        session dependency commits at the end of the request.
        """
        now = datetime.now(timezone.utc)
        note = Note(
            user_id=user_id,
            title=title,
            body=body,
            created_at=now,
            updated_at=now,
        )
        try:
            db.add(note)
            await db.flush()
        except Exception as e:
            logger.error("Database error creating note for %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note.",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )

        logger.info("Note %s created for user %s", note.id, user_id)
        return note

    async def update_note(
        self,
        db: AsyncSession,
        user_id: str,
        note_id: UUID,
        title: Optional[str] = None,
        body: Optional[str] = None,
    ) -> int:
        """
        Replace title/body of a note owned by `user_id` and bump updated_at.

        No existence check is made first: when nothing matches (missing id
        or another user's note) the UPDATE touches zero rows and the caller
        redirects as usual.

        Returns:
            Number of rows updated (0 or 1)
        """
        values = {"updated_at": datetime.now(timezone.utc)}
        if title is not None:
            values["title"] = title
        if body is not None:
            values["body"] = body

        try:
            result = await db.execute(
                update(Note)
                .where(Note.id == note_id, Note.user_id == user_id)
                .values(**values)
            )
        except Exception as e:
            logger.error("Database error updating note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the note.",
                context={"note_id": str(note_id), "error_type": type(e).__name__},
            )

        if result.rowcount == 0:
            logger.debug("Update matched no note %s for user %s", note_id, user_id)
        return result.rowcount

    async def delete_note(self, db: AsyncSession, user_id: str, note_id: UUID) -> int:
        """
        Delete a note owned by `user_id`.

        Returns:
            Number of rows deleted (0 or 1)
        """
        try:
            result = await db.execute(
                delete(Note).where(Note.id == note_id, Note.user_id == user_id)
            )
        except Exception as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the note.",
                context={"note_id": str(note_id), "error_type": type(e).__name__},
            )

        if result.rowcount:
            logger.info("Note %s deleted by user %s", note_id, user_id)
        return result.rowcount

    async def search_notes(
        self,
        db: AsyncSession,
        user_id: str,
        search_term: Optional[str],
    ) -> List[NoteResponse]:
        """
        Case-insensitive substring search over title OR body.

        How:
            1. sanitize_search_term() leaves only [a-zA-Z0-9 ]
            2. lower(column) LIKE '%term%' on both columns
               (lower() on both sides behaves the same on PostgreSQL and
               SQLite, unlike ILIKE which SQLite lacks)
            3. Scoped to user_id, most recently updated first

        An empty cleaned term produces the pattern '%%', which matches every
        note of the user.
        """
        cleaned = sanitize_search_term(search_term)
        pattern = f"%{cleaned.lower()}%"

        try:
            result = await db.execute(
                select(Note)
                .where(
                    Note.user_id == user_id,
                    or_(
                        func.lower(Note.title).like(pattern),
                        func.lower(Note.body).like(pattern),
                    ),
                )
                .order_by(desc(Note.updated_at))
            )
            notes = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error searching notes for %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not search notes.",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )

        logger.debug("Search %r for user %s matched %d notes", cleaned, user_id, len(notes))
        return [NoteResponse.model_validate(note) for note in notes]


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
