"""Collection tables: one row per document, no foreign keys."""
from sqlalchemy import Column, String

from .base import Base, DocumentMixin


class PlaygroundDocument(DocumentMixin, Base):
    __tablename__ = 'playgrounds'


class UserDocument(DocumentMixin, Base):
    __tablename__ = 'users'


class EventDocument(DocumentMixin, Base):
    __tablename__ = 'events'
    index_fields = {'owner_key': 'playground_name'}

    # Mirrors document["playground_name"] for owner lookups
    owner_key = Column(String, nullable=True, index=True)


class MessageDocument(DocumentMixin, Base):
    __tablename__ = 'messages'
    index_fields = {'owner_key': 'playground_name', 'author_key': 'author_id'}

    owner_key = Column(String, nullable=True, index=True)
    author_key = Column(String, nullable=True, index=True)
