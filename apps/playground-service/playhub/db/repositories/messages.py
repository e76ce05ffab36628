"""
Message repository functions.
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

COLLECTION = models.MessageDocument.__tablename__


def new_message_id() -> str:
    return uuid.uuid4().hex


def create_message(db: Session, message: schemas.Message) -> str:
    if message is None:
        raise InvalidInput(f"Can't create message in {COLLECTION} collection when message is null")
    message_id = message.id or new_message_id()
    document = message.model_copy(update={"id": message_id}).model_dump(mode="json")
    insert_document(db, models.MessageDocument, message_id, document)
    return message_id


def get_message(db: Session, message_id: str, *, lock: bool = False) -> schemas.Message:
    require_key(message_id, "message")
    document = find_document(db, models.MessageDocument, message_id, for_update=lock)
    if document is None:
        raise NotFound(f"No message in {COLLECTION} collection with id {message_id}")
    return schemas.Message.model_validate(document)


def get_messages(db: Session) -> List[schemas.Message]:
    messages = [schemas.Message.model_validate(d) for d in find_documents(db, models.MessageDocument)]
    if not messages:
        raise NotFound(f"No messages in {COLLECTION} collection")
    return messages


def get_messages_by_playground(db: Session, playground_name: str) -> List[schemas.Message]:
    require_key(playground_name, "playground")
    documents = find_documents(db, models.MessageDocument, models.MessageDocument.owner_key == playground_name)
    return [schemas.Message.model_validate(d) for d in documents]


def get_messages_by_author(db: Session, username: str) -> List[schemas.Message]:
    require_key(username, "user")
    documents = find_documents(db, models.MessageDocument, models.MessageDocument.author_key == username)
    return [schemas.Message.model_validate(d) for d in documents]


def update_message(db: Session, message: schemas.Message) -> WriteResult:
    if message is None or not message.id:
        raise InvalidInput(f"Can't update message in {COLLECTION} collection when param is null")
    return replace_document(db, models.MessageDocument, message.id, message.model_dump(mode="json"))


def delete_message(db: Session, message_id: str) -> WriteResult:
    require_key(message_id, "message")
    return remove_document(db, models.MessageDocument, message_id)


def delete_all_messages(db: Session) -> WriteResult:
    return remove_all(db, models.MessageDocument)
