"""
Playground repository functions.

Create/read/update/delete against the playgrounds collection only; playgrounds
are keyed by their unique name.
"""
from __future__ import annotations

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

COLLECTION = models.PlaygroundDocument.__tablename__


def create_playground(db: Session, playground: schemas.Playground) -> str:
    if playground is None or not playground.name:
        raise InvalidInput(f"Can't create playground in {COLLECTION} collection when playground is null")
    require_key(playground.name, "playground")
    insert_document(db, models.PlaygroundDocument, playground.name, playground.model_dump(mode="json"))
    return playground.name


def get_playground(db: Session, name: str, *, lock: bool = False) -> schemas.Playground:
    """Fetch one playground; ``lock`` holds its row until the session ends."""
    require_key(name, "playground")
    document = find_document(db, models.PlaygroundDocument, name, for_update=lock)
    if document is None:
        raise NotFound(f"No playground in {COLLECTION} collection with name {name}")
    return schemas.Playground.model_validate(document)


def get_playgrounds(db: Session) -> List[schemas.Playground]:
    playgrounds = [schemas.Playground.model_validate(d) for d in find_documents(db, models.PlaygroundDocument)]
    if not playgrounds:
        raise NotFound(f"No playgrounds in {COLLECTION} collection")
    return playgrounds


def update_playground(db: Session, playground: schemas.Playground) -> WriteResult:
    if playground is None or not playground.name:
        raise InvalidInput(f"Can't update playground in {COLLECTION} collection when param is null")
    return replace_document(db, models.PlaygroundDocument, playground.name, playground.model_dump(mode="json"))


def delete_playground(db: Session, name: str) -> WriteResult:
    require_key(name, "playground")
    return remove_document(db, models.PlaygroundDocument, name)


def delete_all_playgrounds(db: Session) -> WriteResult:
    return remove_all(db, models.PlaygroundDocument)
