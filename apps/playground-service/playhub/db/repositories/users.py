"""
User repository functions.

Users are keyed by username. The repository stores whatever password hash it
is given; hashing happens in the controller.
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

COLLECTION = models.UserDocument.__tablename__


def create_user(db: Session, user: schemas.User) -> str:
    if user is None or not user.username:
        raise InvalidInput(f"Can't create user in {COLLECTION} collection when user is null")
    require_key(user.username, "user")
    insert_document(db, models.UserDocument, user.username, user.model_dump(mode="json"))
    return user.username


def get_user(db: Session, username: str, *, lock: bool = False) -> schemas.User:
    require_key(username, "user")
    document = find_document(db, models.UserDocument, username, for_update=lock)
    if document is None:
        raise NotFound(f"No user in {COLLECTION} collection with username {username}")
    return schemas.User.model_validate(document)


def get_users(db: Session) -> List[schemas.User]:
    users = [schemas.User.model_validate(d) for d in find_documents(db, models.UserDocument)]
    if not users:
        raise NotFound(f"No users in {COLLECTION} collection")
    return users


def update_user(db: Session, user: schemas.User) -> WriteResult:
    if user is None or not user.username:
        raise InvalidInput(f"Can't update user in {COLLECTION} collection when param is null")
    return replace_document(db, models.UserDocument, user.username, user.model_dump(mode="json"))


def delete_user(db: Session, username: str) -> WriteResult:
    require_key(username, "user")
    return remove_document(db, models.UserDocument, username)


def delete_all_users(db: Session) -> WriteResult:
    return remove_all(db, models.UserDocument)
