"""
SQLAlchemy models for the four document collections.

This package exposes `Base`, `now_utc`, and one table class per collection.
"""

from .base import Base, DocumentMixin, now_utc  # re-export

from .documents import PlaygroundDocument, UserDocument, EventDocument, MessageDocument

__all__ = [
    # base
    "Base",
    "DocumentMixin",
    "now_utc",
    # collections
    "PlaygroundDocument",
    "UserDocument",
    "EventDocument",
    "MessageDocument",
]
