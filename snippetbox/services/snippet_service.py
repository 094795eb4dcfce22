"""
Snippetbox: Snippet Service (Data Access)
=========================================

What:  Insert / get / latest operations against the `snippets` table.
How:   Parameterized SQLAlchemy statements executed on the request's
       AsyncSession; rows are mapped to SnippetResponse records.
Who:   Called by the HTML page handlers and the JSON API routes.

Expiry:
    created and expires are computed here in UTC, and every read filters on
    `expires > now`. An expired snippet behaves exactly like a missing one.

Error Handling Strategy:
    No rows                 → NotFoundError (get only; latest returns [])
    Any SQLAlchemyError     → DatabaseError, driver error chained
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.exceptions import DatabaseError, NotFoundError
from snippetbox.models.snippet import Snippet
from snippetbox.schemas.snippet import SnippetResponse

logger = logging.getLogger(__name__)

# Number of snippets shown on the home page
LATEST_LIMIT = 10

# Largest value the INTEGER id column can hold on every supported backend
MAX_SNIPPET_ID = 2**31 - 1


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SnippetService:
    """
    Data-access layer for snippets.

    Stateless: each call receives the session to run in, so a request's
    statements share its transaction and tests can pass a mock session.
    """

    async def insert(
        self,
        db: AsyncSession,
        title: str,
        content: str,
        expires_days: int,
    ) -> int:
        """
        Insert a new snippet, commit it and return its identifier.

        The row is committed before this returns, so it is visible to other
        connections by the time the caller sends its response.

        Args:
            db: Async database session
            title: Snippet title
            content: Snippet body
            expires_days: Lifetime in days, added to the creation time

        Raises:
            DatabaseError: Constraint violation or connectivity failure (→ 500)
        """
        created = utcnow()
        snippet = Snippet(
            title=title,
            content=content,
            created=created,
            expires=created + timedelta(days=expires_days),
        )
        try:
            db.add(snippet)
            await db.flush()  # Assigns the autoincrement id
            snippet_id = snippet.id
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error inserting snippet: %s", str(e))
            raise DatabaseError(
                message="Could not save the snippet. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Snippet %d created (expires in %d days)", snippet_id, expires_days)
        return snippet_id

    async def get(self, db: AsyncSession, snippet_id: int) -> SnippetResponse:
        """
        Retrieve a single non-expired snippet by ID.

        Query:
            SELECT id, title, content, created, expires FROM snippets
            WHERE expires > :now AND id = :id

        Ids outside 1..MAX_SNIPPET_ID cannot match a row and are reported as
        not found without a query.

        Raises:
            NotFoundError: No non-expired snippet has this ID (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        if not 1 <= snippet_id <= MAX_SNIPPET_ID:
            raise NotFoundError(resource="snippet", resource_id=str(snippet_id))

        stmt = select(Snippet).where(
            Snippet.expires > utcnow(),
            Snippet.id == snippet_id,
        )
        try:
            result = await db.execute(stmt)
            snippet = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching snippet %s: %s", snippet_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the snippet. Please try again.",
                context={"snippet_id": snippet_id},
            ) from e

        if snippet is None:
            raise NotFoundError(resource="snippet", resource_id=str(snippet_id))

        return SnippetResponse.model_validate(snippet)

    async def latest(self, db: AsyncSession) -> List[SnippetResponse]:
        """
        Return the 10 most recently created non-expired snippets, newest first.

        Query:
            SELECT ... FROM snippets WHERE expires > :now
            ORDER BY created DESC, id DESC LIMIT 10
            → served by idx_snippets_created

        Returns an empty list, never NotFoundError, when nothing matches.
        """
        stmt = (
            select(Snippet)
            .where(Snippet.expires > utcnow())
            .order_by(desc(Snippet.created), desc(Snippet.id))
            .limit(LATEST_LIMIT)
        )
        try:
            result = await db.execute(stmt)
            snippets = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing snippets: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve snippets. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        return [SnippetResponse.model_validate(s) for s in snippets]


# Stateless; one shared instance
snippet_service = SnippetService()
