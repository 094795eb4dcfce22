"""
Snippetbox: Snippet SQLAlchemy Model
====================================

What:  ORM model representing the `snippets` table.
How:   Inherits from the shared DeclarativeBase in snippetbox.database.
Who:   Used by SnippetService for insert / get / latest.

Table Design:
    - Integer autoincrement primary key (shown in URLs: /snippet?id=3)
    - title: VARCHAR(100), matching the form validation limit
    - content: TEXT, no artificial length limit
    - created / expires: UTC timestamps computed by the application

    Index on created DESC:
        Serves the home page query "10 newest non-expired snippets".
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from snippetbox.database import Base


class Snippet(Base):
    """
    A stored text record with an expiration time.

    Lifecycle:
        1. Inserted with created = now and expires = now + N days
        2. Never updated
        3. Invisible to get/latest once expires <= now; the row itself is
           left for external maintenance to delete
    """

    __tablename__ = "snippets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(100), nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Always UTC. SQLite returns these naive, PostgreSQL returns them aware.
    created: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    expires: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_snippets_created", created.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<Snippet(id={self.id}, title='{self.title}', "
            f"expires='{self.expires}')>"
        )
