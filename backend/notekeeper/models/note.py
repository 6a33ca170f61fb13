"""
NoteKeeper Backend: Note SQLAlchemy Model
===========================================

What:  ORM model representing the `notes` table.
Why:   Maps Python objects to database rows for type-safe database operations.
Who:   Used by NoteService for every dashboard operation.

Table Design Rationale:
    - UUID primary key: non-sequential, so ids cannot be enumerated
    - user_id: opaque id issued by the external identity provider; every
      query filters on it, which is what keeps notes private to their owner
    - title / body: TEXT, full content (previews are cut in the service layer)
    - created_at / updated_at: UTC with timezone, never naive datetimes

    Index on (user_id, updated_at DESC):
        Serves the dashboard query "this user's notes, most recently
        updated first" plus its COUNT(*) without touching other users' rows.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A user-owned title/body record.

    Lifecycle:
        1. Created on submit (created_at == updated_at)
        2. Title/body replaced on update, updated_at bumped
        3. Deleted on explicit request; no soft delete, no versioning
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier",
    )

    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Owning user id as issued by the identity provider",
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note title",
    )

    body: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note body",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="When this note was created (UTC)",
    )

    # Set explicitly by NoteService.update_note; the default covers inserts
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="When this note was last changed (UTC)",
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, user_id='{self.user_id}', "
            f"updated_at='{self.updated_at}')>"
        )


# Matches the dashboard's ORDER BY updated_at DESC within one user
Index("idx_notes_user_updated", Note.user_id, Note.updated_at.desc())
