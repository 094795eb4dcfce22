"""
Snippetbox: Snippet Service Tests
=================================

What:  Tests for SnippetService insert / get / latest.
How:   Round-trip and expiry behavior run against a real SQLite database;
       error translation uses a mock session.

What we test:
    ✅ Insert then get returns matching fields
    ✅ Insert commits before returning
    ✅ Get on a nonexistent, expired or out-of-range id raises NotFoundError
    ✅ Latest returns at most 10, newest first, excluding expired
    ✅ Driver errors surface as DatabaseError
"""

from datetime import timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from snippetbox.database import async_session_factory
from snippetbox.exceptions import DatabaseError, NotFoundError
from snippetbox.models.snippet import Snippet
from snippetbox.services.snippet_service import (
    LATEST_LIMIT,
    MAX_SNIPPET_ID,
    SnippetService,
    utcnow,
)


def as_utc(dt):
    """SQLite hands back naive datetimes; compare everything in aware UTC."""
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


class TestSnippetServiceInsert:
    """Tests for insert against a real database."""

    def setup_method(self):
        self.service = SnippetService()

    @pytest.mark.asyncio
    async def test_insert_returns_new_id(self, db_session):
        first = await self.service.insert(db_session, "First", "one", 7)
        second = await self.service.insert(db_session, "Second", "two", 7)

        assert first >= 1
        assert second > first

    @pytest.mark.asyncio
    async def test_insert_then_get_round_trip(self, db_session):
        before = utcnow()
        snippet_id = await self.service.insert(
            db_session,
            title="O snail",
            content="O snail\nClimb Mount Fuji,\nBut slowly, slowly!\n\n– Kobayashi Issa",
            expires_days=7,
        )
        await db_session.commit()

        snippet = await self.service.get(db_session, snippet_id)

        assert snippet.id == snippet_id
        assert snippet.title == "O snail"
        assert snippet.content.startswith("O snail\nClimb Mount Fuji")
        assert as_utc(snippet.created) >= before - timedelta(seconds=1)
        assert as_utc(snippet.expires) - as_utc(snippet.created) == timedelta(days=7)

    @pytest.mark.asyncio
    async def test_insert_database_error(self, mock_db_session):
        """A failed flush (e.g. constraint violation) becomes DatabaseError."""
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT INTO snippets", {}, Exception("NOT NULL"))
        )

        with pytest.raises(DatabaseError) as exc_info:
            await SnippetService().insert(mock_db_session, "t", "c", 1)

        assert isinstance(exc_info.value.__cause__, IntegrityError)
        mock_db_session.add.assert_called_once()

    @pytest.mark.asyncio
    async def test_insert_commits(self, mock_db_session):
        mock_db_session.add.side_effect = lambda snippet: setattr(snippet, "id", 5)

        assert await self.service.insert(mock_db_session, "t", "c", 7) == 5

        mock_db_session.flush.assert_awaited_once()
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_insert_commit_failure_is_database_error(self, mock_db_session):
        mock_db_session.commit = AsyncMock(
            side_effect=OperationalError("COMMIT", {}, Exception("database is locked"))
        )

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.insert(mock_db_session, "t", "c", 7)

        assert isinstance(exc_info.value.__cause__, OperationalError)

    @pytest.mark.asyncio
    async def test_insert_visible_to_other_sessions(self, db_session):
        snippet_id = await self.service.insert(db_session, "Shared", "seen elsewhere", 7)

        async with async_session_factory() as other:
            snippet = await self.service.get(other, snippet_id)

        assert snippet.title == "Shared"


class TestSnippetServiceGet:
    """Tests for get retrieval."""

    def setup_method(self):
        self.service = SnippetService()

    @pytest.mark.asyncio
    async def test_get_nonexistent_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get(db_session, 9999)

        assert exc_info.value.context["resource_id"] == "9999"

    @pytest.mark.asyncio
    async def test_get_expired_raises_not_found(self, db_session):
        snippet_id = await self.service.insert(db_session, "Old news", "gone", -1)

        with pytest.raises(NotFoundError):
            await self.service.get(db_session, snippet_id)

    @pytest.mark.parametrize("snippet_id", [0, -1, MAX_SNIPPET_ID + 1, 10**20])
    @pytest.mark.asyncio
    async def test_get_out_of_range_is_not_found_without_query(self, mock_db_session, snippet_id):
        with pytest.raises(NotFoundError):
            await self.service.get(mock_db_session, snippet_id)

        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_found_with_mock(self, mock_db_session):
        now = utcnow()
        row = Snippet(id=3, title="Mocked", content="body", created=now, expires=now + timedelta(days=1))
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = row
        mock_db_session.execute.return_value = mock_result

        snippet = await self.service.get(mock_db_session, 3)

        assert snippet.id == 3
        assert snippet.title == "Mocked"
        mock_db_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_database_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection lost"))
        )

        with pytest.raises(DatabaseError):
            await self.service.get(mock_db_session, 1)


class TestSnippetServiceLatest:
    """Tests for latest."""

    def setup_method(self):
        self.service = SnippetService()

    @pytest.mark.asyncio
    async def test_latest_empty(self, db_session):
        assert await self.service.latest(db_session) == []

    @pytest.mark.asyncio
    async def test_latest_limit_and_order(self, db_session):
        ids = [
            await self.service.insert(db_session, f"Snippet {i}", f"content {i}", 365)
            for i in range(LATEST_LIMIT + 2)
        ]

        latest = await self.service.latest(db_session)

        assert len(latest) == LATEST_LIMIT
        assert [s.id for s in latest] == list(reversed(ids))[:LATEST_LIMIT]
        created = [as_utc(s.created) for s in latest]
        assert created == sorted(created, reverse=True)

    @pytest.mark.asyncio
    async def test_latest_excludes_expired(self, db_session):
        live = await self.service.insert(db_session, "Live", "still here", 1)
        await self.service.insert(db_session, "Expired", "gone", -1)

        latest = await self.service.latest(db_session)

        assert [s.id for s in latest] == [live]

    @pytest.mark.asyncio
    async def test_latest_database_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection lost"))
        )

        with pytest.raises(DatabaseError):
            await self.service.latest(mock_db_session)
