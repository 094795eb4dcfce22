"""
Snippetbox: JSON API Route Handlers
===================================

What:  JSON counterparts of the HTML pages under /api.
How:   Extracts path/body parameters, delegates to SnippetService, returns JSON.

Routes:
    GET  /api/snippets        latest non-expired snippets
    GET  /api/snippets/{id}   one snippet
    POST /api/snippets        create a snippet (201)
"""

import logging

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.database import get_db_session
from snippetbox.schemas.snippet import (
    ErrorResponse,
    SnippetCreate,
    SnippetCreatedResponse,
    SnippetListResponse,
    SnippetResponse,
)
from snippetbox.services.snippet_service import snippet_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Snippets"])


@router.get(
    "/snippets",
    response_model=SnippetListResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List the latest snippets",
    description="Returns up to 10 non-expired snippets, newest first.",
)
async def list_snippets(
    db: AsyncSession = Depends(get_db_session),
) -> SnippetListResponse:
    return SnippetListResponse(snippets=await snippet_service.latest(db))


@router.get(
    "/snippets/{snippet_id}",
    response_model=SnippetResponse,
    responses={
        404: {"description": "Snippet not found or expired", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single snippet by ID",
)
async def get_snippet(
    snippet_id: int = Path(description="Snippet identifier"),
    db: AsyncSession = Depends(get_db_session),
) -> SnippetResponse:
    return await snippet_service.get(db, snippet_id)


@router.post(
    "/snippets",
    status_code=201,
    response_model=SnippetCreatedResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Create a snippet",
    description="Stores a snippet that expires after 1, 7 or 365 days.",
)
async def create_snippet(
    body: SnippetCreate,
    db: AsyncSession = Depends(get_db_session),
) -> SnippetCreatedResponse:
    snippet_id = await snippet_service.insert(
        db, title=body.title, content=body.content, expires_days=body.expires
    )
    return SnippetCreatedResponse(id=snippet_id, url=f"/snippet?id={snippet_id}")
