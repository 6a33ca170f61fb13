"""
NoteKeeper Backend: Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract between the view layer and
       the backend.
Why:   Strict input validation, automatic serialization, and OpenAPI docs.
How:   FastAPI validates request bodies against the *Create/*Update/*Request
       models and serializes the *View models returned by the handlers.

Design Decision:
    Schemas are separate from SQLAlchemy models because:
    1. The owning user id is never accepted from the client (NoteCreate has
       no user field; extra keys are ignored)
    2. Dashboard items expose truncated previews, not the stored text
    3. OpenAPI docs are generated from schemas, not from DB models
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Body of POST /dashboard/add."""
    title: str = Field(description="Note title")
    body: str = Field(description="Note body")


class NoteUpdate(BaseModel):
    """
    Body of PUT /dashboard/item/{id}.

    Omitted fields keep their stored value; updated_at is bumped either way.
    """
    title: Optional[str] = Field(default=None, description="New title")
    body: Optional[str] = Field(default=None, description="New body")


class SearchRequest(BaseModel):
    """Body of POST /dashboard/search. Accepts `searchTerm` or `search_term`."""
    model_config = ConfigDict(populate_by_name=True)

    search_term: str = Field(
        default="",
        alias="searchTerm",
        description="Free text; everything except letters, digits and spaces is dropped",
    )


# ══════════════════════════════════════════════════════════════════════════
# View Models
# ══════════════════════════════════════════════════════════════════════════


class PageLocals(BaseModel):
    title: str
    description: str = "Free Notes App."


class NotePreview(BaseModel):
    """
    What:  Compact note representation for the dashboard grid.
    Why:   Title cut to 30 chars and body to 100 chars so a card renders
           without the full text.
    """
    id: uuid.UUID = Field(description="Unique note identifier")
    title: str = Field(description="Title preview (first 30 characters)")
    body: str = Field(description="Body preview (first 100 characters)")


class DashboardView(BaseModel):
    """
    What:  One page of the user's notes.
    Who:   Returned by GET /dashboard.

    Pagination strategy:
        Offset pagination with numbered pages. `pages` is
        ceil(total / per_page), so 0 notes gives 0 pages; `current` echoes
        the requested page even when it is past the end.
    """
    user_name: Optional[str] = Field(default=None, description="First name of the signed-in user")
    locals: PageLocals
    notes: List[NotePreview] = Field(description="Notes on this page, most recently updated first")
    current: int = Field(description="Requested page number (1-based)")
    pages: int = Field(description="Total number of pages")
    total_count: int = Field(description="Total number of notes owned by the user")


class NoteResponse(BaseModel):
    """Full representation of a single note."""
    id: uuid.UUID
    title: str
    body: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NoteView(BaseModel):
    """Returned by GET /dashboard/item/{id}."""
    note_id: uuid.UUID
    note: NoteResponse


class AddNoteView(BaseModel):
    """Returned by GET /dashboard/add: the empty add-note form."""
    locals: PageLocals
    fields: List[str] = Field(default_factory=lambda: ["title", "body"])


class SearchView(BaseModel):
    """Returned by GET and POST /dashboard/search."""
    search_term: str = Field(default="", description="The sanitized term that was matched")
    search_results: List[NoteResponse] = Field(default_factory=list)


# ══════════════════════════════════════════════════════════════════════════
# Operational Models
# ══════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
