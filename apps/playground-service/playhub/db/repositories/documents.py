"""
Single-collection document primitives shared by the entity repositories.

Every helper works against one table and one key. ``push``/``pull`` load the
target document with ``SELECT ... FOR UPDATE``, edit one embedded array and
write the whole document back; cross-collection consistency is left to the
reference synchronizer.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import FlushError

from playhub.db.models import DocumentMixin, now_utc
from playhub.errors import InvalidInput, NotFound, WriteFailed

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


@dataclass(frozen=True)
class WriteResult:
    """Acknowledgement of a write: how many documents it touched."""

    n: int
    acknowledged: bool = True
    upserted_id: Optional[str] = None


def require_key(key: Optional[str], what: str) -> str:
    if key is None or not str(key).strip():
        raise InvalidInput(f"{key!r} is not a valid key for identifying a {what}")
    return key


def _index_values(model: Type[DocumentMixin], document: Document) -> Dict[str, Any]:
    return {column: document.get(field) for column, field in model.index_fields.items()}


def insert_document(db: Session, model: Type[DocumentMixin], key: str, document: Document) -> WriteResult:
    try:
        db.add(model(key=key, document=document, **_index_values(model, document)))
        db.flush()
    except (IntegrityError, FlushError) as exc:
        # FlushError: key already loaded in this session
        raise WriteFailed(f"Document {key!r} can't be created in {model.__tablename__} collection") from exc
    return WriteResult(n=1, upserted_id=key)


def find_document(db: Session, model: Type[DocumentMixin], key: str, *, for_update: bool = False) -> Optional[Document]:
    q = db.query(model.document).filter(model.key == key)
    if for_update:
        q = q.with_for_update()
    row = q.first()
    return row[0] if row else None


def find_documents(db: Session, model: Type[DocumentMixin], *criteria) -> List[Document]:
    q = db.query(model.document)
    if criteria:
        q = q.filter(*criteria)
    return [row[0] for row in q.order_by(model.created_at, model.key).all()]


def replace_document(db: Session, model: Type[DocumentMixin], key: str, document: Document) -> WriteResult:
    try:
        n = db.query(model).filter(model.key == key).update(
            {model.document: document, model.updated_at: now_utc(), **{
                getattr(model, column): value for column, value in _index_values(model, document).items()
            }},
            synchronize_session=False,
        )
    except IntegrityError as exc:
        raise WriteFailed(f"Document {key!r} in {model.__tablename__} collection was not updated") from exc
    if n == 0:
        raise WriteFailed(f"Document {key!r} in {model.__tablename__} collection was not updated")
    return WriteResult(n=n)


def remove_document(db: Session, model: Type[DocumentMixin], key: str) -> WriteResult:
    try:
        n = db.query(model).filter(model.key == key).delete(synchronize_session=False)
    except IntegrityError as exc:
        raise WriteFailed(f"Document {key!r} in {model.__tablename__} collection was not deleted") from exc
    return WriteResult(n=n)


def remove_all(db: Session, model: Type[DocumentMixin]) -> WriteResult:
    n = db.query(model).delete(synchronize_session=False)
    return WriteResult(n=n)


def _modify_array(
    db: Session,
    model: Type[DocumentMixin],
    key: str,
    field: str,
    change: Callable[[List[Any]], List[Any]],
) -> WriteResult:
    document = find_document(db, model, key, for_update=True)
    if document is None:
        raise NotFound(f"No document in {model.__tablename__} collection with key {key}")
    current = list(document.get(field) or [])
    updated = change(current)
    if updated == current:
        return WriteResult(n=0)
    document[field] = updated
    return replace_document(db, model, key, document)


def push(db: Session, model: Type[DocumentMixin], key: str, field: str, element: Any) -> WriteResult:
    """Add ``element`` to the array ``field`` unless an equal element is present."""
    logger.debug("push: %s[%s].%s += %r", model.__tablename__, key, field, element)
    return _modify_array(db, model, key, field, lambda items: items if element in items else items + [element])


def pull(db: Session, model: Type[DocumentMixin], key: str, field: str, value: Any, *, match: Optional[str] = None) -> WriteResult:
    """Remove elements of the array ``field``.

    With ``match`` set, an element is removed when its nested ``match`` field
    equals ``value``; the stored element may carry other fields than the
    caller's copy. Without it, plain equality is used.
    """
    logger.debug("pull: %s[%s].%s -= %s=%r", model.__tablename__, key, field, match or "value", value)

    def _keep(item: Any) -> bool:
        if match is None:
            return item != value
        return not (isinstance(item, dict) and item.get(match) == value)

    return _modify_array(db, model, key, field, lambda items: [item for item in items if _keep(item)])
