"""
NoteKeeper Backend: Note Model Tests
======================================

What we test:
    ✅ The dashboard index orders updated_at newest first
    ✅ The index exists in a freshly created database
"""

import pytest
from sqlalchemy import text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.schema import CreateIndex

from notekeeper.models.note import Note


def _dashboard_index():
    return next(ix for ix in Note.__table__.indexes if ix.name == "idx_notes_user_updated")


class TestDashboardIndex:

    @pytest.mark.parametrize("dialect", [sqlite.dialect(), postgresql.dialect()])
    def test_index_is_user_then_updated_desc(self, dialect):
        ddl = str(CreateIndex(_dashboard_index()).compile(dialect=dialect))

        assert "(user_id, updated_at DESC)" in ddl

    @pytest.mark.asyncio
    async def test_index_created_with_tables(self, db_engine):
        async with db_engine.connect() as conn:
            result = await conn.execute(
                text("SELECT sql FROM sqlite_master WHERE type = 'index' AND name = 'idx_notes_user_updated'")
            )
            ddl = result.scalar_one()

        assert "updated_at DESC" in ddl
