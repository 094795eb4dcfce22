"""
Snippetbox: Application Package Initializer
===========================================

What: Marks the `snippetbox` directory as a Python package.
Why:  Enables module imports like `from snippetbox.config import settings`.
Who:  Used by uvicorn, pytest and the `python -m snippetbox` entry point.

Architecture Note:
    ┌─────────────────────────────────────┐
    │   Routes (HTML pages + JSON API)    │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (SnippetService)         │  ← insert / get / latest
    ├─────────────────────────────────────┤
    │   Models & Schemas                  │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database (async sessions)         │  ← engine + connection pool
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
