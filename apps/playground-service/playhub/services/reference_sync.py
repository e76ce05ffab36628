"""
Reference synchronizer.

Keeps the denormalized back-references between collections in agreement. Each
routine touches exactly the collections of one relationship and must run
inside a session opened by the transaction coordinator; nothing here commits.

- pedagogue assignment: ``playgrounds.assigned_pedagogues`` <-> ``users.playground_ids``
- participation: ``events.participants`` <-> ``users.events``
- ownership: ``playgrounds.events`` / ``playgrounds.messages`` -> children,
  children record ``playground_name``

Rows are locked in one order across every routine: playground, then event,
then user. Callers that lock an owner up front follow the same order.
"""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from playhub.db import models, schemas
from playhub.db.repositories import documents
from playhub.db.repositories import events as event_repo
from playhub.db.repositories import messages as message_repo
from playhub.db.repositories import users as user_repo
from playhub.db.repositories.documents import WriteResult, require_key

logger = logging.getLogger(__name__)

PEDAGOGUES = "assigned_pedagogues"
PLAYGROUND_IDS = "playground_ids"
PARTICIPANTS = "participants"
EVENTS = "events"
MESSAGES = "messages"


def _stub(reference: schemas.Reference) -> dict:
    return reference.model_dump(mode="json")


# Pedagogue assignment

def link_pedagogue(db: Session, playground_name: str, username: str) -> None:
    require_key(playground_name, "playground")
    require_key(username, "user")
    documents.push(db, models.PlaygroundDocument, playground_name, PEDAGOGUES, _stub(schemas.Reference.by_key(username)))
    documents.push(db, models.UserDocument, username, PLAYGROUND_IDS, playground_name)
    logger.debug("link_pedagogue: playground=%s user=%s", playground_name, username)


def unlink_pedagogue(db: Session, playground_name: str, username: str) -> None:
    require_key(playground_name, "playground")
    require_key(username, "user")
    documents.pull(db, models.PlaygroundDocument, playground_name, PEDAGOGUES, username, match="value")
    documents.pull(db, models.UserDocument, username, PLAYGROUND_IDS, playground_name)
    logger.debug("unlink_pedagogue: playground=%s user=%s", playground_name, username)


# Event participation

def link_participant(db: Session, event_id: str, username: str) -> None:
    require_key(event_id, "event")
    require_key(username, "user")
    documents.push(db, models.EventDocument, event_id, PARTICIPANTS, _stub(schemas.Reference.by_key(username)))
    documents.push(db, models.UserDocument, username, EVENTS, _stub(schemas.Reference.by_id(event_id)))
    logger.debug("link_participant: event=%s user=%s", event_id, username)


def unlink_participant(db: Session, event_id: str, username: str) -> None:
    require_key(event_id, "event")
    require_key(username, "user")
    documents.pull(db, models.EventDocument, event_id, PARTICIPANTS, username, match="value")
    documents.pull(db, models.UserDocument, username, EVENTS, event_id, match="value")
    logger.debug("unlink_participant: event=%s user=%s", event_id, username)


# Playground-owned events

def attach_event(db: Session, playground_name: str, event: schemas.Event) -> str:
    """Create ``event`` owned by the playground and reference it from the playground."""
    require_key(playground_name, "playground")
    owned = event.model_copy(update={"playground_name": playground_name, "participants": []})
    event_id = event_repo.create_event(db, owned)
    documents.push(db, models.PlaygroundDocument, playground_name, EVENTS, _stub(schemas.Reference.by_id(event_id)))
    logger.debug("attach_event: playground=%s event=%s", playground_name, event_id)
    return event_id


def detach_event(db: Session, event_id: str) -> WriteResult:
    """Strip every reference to the event, then delete it."""
    owner = event_repo.get_event(db, event_id).playground_name
    if owner:
        documents.pull(db, models.PlaygroundDocument, owner, EVENTS, event_id, match="value")
    # Participant set read under the event row lock
    event = event_repo.get_event(db, event_id, lock=True)
    for participant in event.participants:
        documents.pull(db, models.UserDocument, participant.value, EVENTS, event_id, match="value")
    result = event_repo.delete_event(db, event_id)
    logger.debug("detach_event: event=%s participants=%d", event_id, len(event.participants))
    return result


# Playground-owned messages

def attach_message(db: Session, playground_name: str, message: schemas.Message) -> str:
    require_key(playground_name, "playground")
    if message.author_id:
        # Author must exist; raises NotFound otherwise
        user_repo.get_user(db, message.author_id)
    owned = message.model_copy(update={"playground_name": playground_name})
    message_id = message_repo.create_message(db, owned)
    documents.push(db, models.PlaygroundDocument, playground_name, MESSAGES, _stub(schemas.Reference.by_id(message_id)))
    logger.debug("attach_message: playground=%s message=%s", playground_name, message_id)
    return message_id


def detach_message(db: Session, message_id: str) -> WriteResult:
    message = message_repo.get_message(db, message_id)
    if message.playground_name:
        documents.pull(db, models.PlaygroundDocument, message.playground_name, MESSAGES, message_id, match="value")
    result = message_repo.delete_message(db, message_id)
    logger.debug("detach_message: message=%s", message_id)
    return result


def clear_author(db: Session, username: str) -> int:
    """Drop the author reference from every message written by ``username``."""
    written = message_repo.get_messages_by_author(db, username)
    for message in written:
        message_repo.update_message(db, message.model_copy(update={"author_id": None}))
    return len(written)
