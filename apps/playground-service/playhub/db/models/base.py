"""
Shared SQLAlchemy base and helpers.
"""
from datetime import datetime, UTC

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import declarative_base

from ..types import DocumentJSON


def now_utc():
    """Return an aware UTC datetime for default/updated timestamps."""
    return datetime.now(UTC)


Base = declarative_base()


class DocumentMixin:
    """Columns shared by every collection table.

    ``key`` is the document's unique lookup key and ``document`` the full JSON
    body. ``index_fields`` maps extra indexed columns to the document field
    they mirror; the repository helpers keep them in step on every write.
    """

    index_fields: dict = {}

    key = Column(String, primary_key=True)
    document = Column(DocumentJSON(), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)
