"""
Snippetbox: HTML Template Rendering
===================================

What:  Shared Jinja2Templates instance and custom template filters.
Who:   Used by the HTML page routes and the HTML error handlers in main.py.
"""

from datetime import datetime, timezone
from pathlib import Path

from fastapi.templating import Jinja2Templates

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATE_DIR))


def human_date(value) -> str:
    """
    Format a timestamp as '02 Jan 2026 at 15:04' (UTC).

    Naive datetimes (as returned by SQLite) are treated as UTC.
    """
    if not isinstance(value, datetime):
        return ""
    dt = value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%d %b %Y at %H:%M")


templates.env.filters["human_date"] = human_date
templates.env.globals["current_year"] = lambda: datetime.now(timezone.utc).year
