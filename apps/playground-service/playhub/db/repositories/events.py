"""
Event repository functions.

Events get an opaque hex id assigned on creation and record their owning
playground by name.
"""
from __future__ import annotations

import uuid
from typing import List

from sqlalchemy.orm import Session

from playhub.db import models, schemas
from playhub.errors import InvalidInput, NotFound

from .documents import (
    WriteResult,
    find_document,
    find_documents,
    insert_document,
    remove_all,
    remove_document,
    replace_document,
    require_key,
)

COLLECTION = models.EventDocument.__tablename__


def new_event_id() -> str:
    return uuid.uuid4().hex


def create_event(db: Session, event: schemas.Event) -> str:
    if event is None:
        raise InvalidInput(f"Can't create event in {COLLECTION} collection when event is null")
    event_id = event.id or new_event_id()
    document = event.model_copy(update={"id": event_id}).model_dump(mode="json")
    insert_document(db, models.EventDocument, event_id, document)
    return event_id


def get_event(db: Session, event_id: str, *, lock: bool = False) -> schemas.Event:
    require_key(event_id, "event")
    document = find_document(db, models.EventDocument, event_id, for_update=lock)
    if document is None:
        raise NotFound(f"No event in {COLLECTION} collection with id {event_id}")
    return schemas.Event.model_validate(document)


def get_events(db: Session) -> List[schemas.Event]:
    events = [schemas.Event.model_validate(d) for d in find_documents(db, models.EventDocument)]
    if not events:
        raise NotFound(f"No events in {COLLECTION} collection")
    return events


def get_events_by_playground(db: Session, playground_name: str) -> List[schemas.Event]:
    require_key(playground_name, "playground")
    documents = find_documents(db, models.EventDocument, models.EventDocument.owner_key == playground_name)
    return [schemas.Event.model_validate(d) for d in documents]


def update_event(db: Session, event: schemas.Event) -> WriteResult:
    if event is None or not event.id:
        raise InvalidInput(f"Can't update event in {COLLECTION} collection when param is null")
    return replace_document(db, models.EventDocument, event.id, event.model_dump(mode="json"))


def delete_event(db: Session, event_id: str) -> WriteResult:
    require_key(event_id, "event")
    return remove_document(db, models.EventDocument, event_id)


def delete_all_events(db: Session) -> WriteResult:
    return remove_all(db, models.EventDocument)
