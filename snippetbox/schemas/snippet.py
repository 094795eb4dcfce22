"""
Snippetbox: Pydantic Request/Response Schemas
=============================================

What:  Pydantic models defining the JSON API contract and validating the
       create form.
Why:   Strict input validation, automatic serialization, and OpenAPI docs.

Schemas are separate from the SQLAlchemy model so the API contract can
change independently of the table.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

# Allowed lifetimes offered by the create form: one day, one week, one year
EXPIRY_CHOICES = (1, 7, 365)


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class SnippetCreate(BaseModel):
    """
    What:  Input for creating a snippet (JSON body or HTML form fields).
    Rules: title non-blank and at most 100 characters, content non-blank,
           expires one of 1, 7 or 365 days.
    """
    title: str = Field(max_length=100, description="Snippet title (max 100 characters)")
    content: str = Field(description="Snippet body text")
    expires: int = Field(default=365, description="Lifetime in days: 1, 7 or 365")

    @field_validator("title", "content")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("This field cannot be blank")
        return v

    @field_validator("expires")
    @classmethod
    def validate_expires(cls, v: int) -> int:
        if v not in EXPIRY_CHOICES:
            raise ValueError(f"This field must equal one of {', '.join(map(str, EXPIRY_CHOICES))}")
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class SnippetResponse(BaseModel):
    """
    What:  Full representation of a snippet.
    Who:   Returned by SnippetService.get / latest, rendered by both the HTML
           templates and the JSON API.
    """
    id: int = Field(description="Snippet identifier")
    title: str = Field(description="Snippet title")
    content: str = Field(description="Snippet body text")
    created: datetime = Field(description="When the snippet was created (UTC)")
    expires: datetime = Field(description="When the snippet stops being visible (UTC)")

    model_config = {"from_attributes": True}


class SnippetListResponse(BaseModel):
    """Returned by GET /api/snippets: the latest non-expired snippets, newest first."""
    snippets: List[SnippetResponse] = Field(description="Up to 10 snippets")


class SnippetCreatedResponse(BaseModel):
    """Returned by POST /api/snippets with HTTP 201 Created."""
    id: int = Field(description="Identifier of the new snippet")
    url: str = Field(description="HTML page showing the new snippet")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for all JSON API errors.

    Example:
        {
            "error": "not_found",
            "message": "snippet with ID '42' was not found",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer health checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
