"""
Snippetbox: HTML Page Handlers
==============================

What:  Server-rendered pages for browsing and creating snippets.
How:   Each handler calls SnippetService and renders a Jinja2 template.

Routes:
    GET  /                 home page, latest snippets
    GET  /snippet?id=N     one snippet
    GET  /snippet/create   empty create form
    POST /snippet/create   validate, insert, 303 redirect to the new snippet
"""

import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.database import get_db_session
from snippetbox.exceptions import NotFoundError
from snippetbox.schemas.snippet import SnippetCreate
from snippetbox.services.snippet_service import MAX_SNIPPET_ID, snippet_service
from snippetbox.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"], include_in_schema=False)


def parse_snippet_id(raw: Optional[str]) -> int:
    """
    Convert the `id` query parameter to a snippet id.

    Anything that is not an integer in 1..MAX_SNIPPET_ID (missing,
    non-numeric, zero, negative, too large for the column) is treated the
    same as an unknown snippet.
    """
    try:
        snippet_id = int(raw) if raw is not None else 0
    except ValueError:
        snippet_id = 0
    if not 1 <= snippet_id <= MAX_SNIPPET_ID:
        raise NotFoundError(resource="snippet", resource_id=raw)
    return snippet_id


def form_errors(exc: ValidationError) -> Dict[str, str]:
    """Map pydantic errors to {field: first message} for the form template."""
    errors: Dict[str, str] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "form"
        message = err["msg"].removeprefix("Value error, ")
        errors.setdefault(field, message)
    return errors


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> HTMLResponse:
    snippets = await snippet_service.latest(db)
    return templates.TemplateResponse(request, "home.html", {"snippets": snippets})


@router.get("/snippet", response_class=HTMLResponse)
async def show_snippet(
    request: Request,
    raw_id: Optional[str] = Query(default=None, alias="id"),
    db: AsyncSession = Depends(get_db_session),
) -> HTMLResponse:
    snippet = await snippet_service.get(db, parse_snippet_id(raw_id))
    return templates.TemplateResponse(request, "show.html", {"snippet": snippet})


@router.get("/snippet/create", response_class=HTMLResponse)
async def create_snippet_form(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "create.html",
        {"form": {"title": "", "content": "", "expires": 365}, "errors": {}},
    )


@router.post("/snippet/create")
async def create_snippet(
    request: Request,
    title: str = Form(default=""),
    content: str = Form(default=""),
    expires: str = Form(default="365"),
    db: AsyncSession = Depends(get_db_session),
):
    """
    Create a snippet from the HTML form.

    Invalid input re-renders the form (400) with the submitted values and a
    message per field; nothing is written in that case.
    """
    submitted = {"title": title, "content": content, "expires": expires}
    try:
        data = SnippetCreate(**submitted)
    except ValidationError as e:
        errors = form_errors(e)
        logger.info("Rejected snippet form: %s", ", ".join(errors))
        return templates.TemplateResponse(
            request,
            "create.html",
            {"form": submitted, "errors": errors},
            status_code=400,
        )

    snippet_id = await snippet_service.insert(
        db, title=data.title, content=data.content, expires_days=data.expires
    )
    return RedirectResponse(url=f"/snippet?id={snippet_id}", status_code=303)
