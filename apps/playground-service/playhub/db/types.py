"""Custom SQLAlchemy types used by the persistence layer."""
from __future__ import annotations

import json
from typing import Any, Dict, Optional

from pydantic import BaseModel
from sqlalchemy.dialects import postgresql
from sqlalchemy.types import JSON, TypeDecorator


class DocumentJSON(TypeDecorator[Dict[str, Any]]):
    """Store a whole document as JSONB on PostgreSQL.

    Falls back to generic JSON storage on other dialects (e.g. SQLite during
    unit tests). Pydantic models are dumped in JSON mode before binding so
    datetimes and enums are stored as plain strings.
    """

    cache_ok = True
    impl = JSON

    def load_dialect_impl(self, dialect):  # type: ignore[override]
        if dialect.name == "postgresql":
            return dialect.type_descriptor(postgresql.JSONB(none_as_null=True))
        return dialect.type_descriptor(JSON(none_as_null=True))

    def process_bind_param(self, value, dialect):  # type: ignore[override]
        if value is None:
            return None
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json")
        if not isinstance(value, dict):
            raise TypeError(f"DocumentJSON expects a mapping, got {type(value)!r}")
        return value

    def process_result_value(self, value, dialect) -> Optional[Dict[str, Any]]:  # type: ignore[override]
        if value is None:
            return None
        if isinstance(value, (str, bytes)):
            # Some drivers hand back the raw JSON text
            return json.loads(value)
        return dict(value)

    def copy(self, **kwargs):  # type: ignore[override]
        return DocumentJSON()
