"""
Controller: the single entry point used by the HTTP layer.

Composes the repositories, the reference synchronizer and the transaction
coordinator into whole use cases. Every public method runs in its own session;
``get_*`` methods hydrate reference stubs one level deep.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from playhub.db import schemas
from playhub.db.database import DataSource, get_default_source
from playhub.db.repositories import events as event_repo
from playhub.db.repositories import messages as message_repo
from playhub.db.repositories import playgrounds as playground_repo
from playhub.db.repositories import users as user_repo
from playhub.db.repositories.documents import WriteResult, require_key
from playhub.db.transaction import TransactionCoordinator
from playhub.errors import InvalidInput, NotFound, translate_store_error
from playhub.services import reference_sync as sync
from playhub.utils import passwords

logger = logging.getLogger(__name__)


def _merged(stored, changes: dict):
    """Validated copy of ``stored`` with ``changes`` applied."""
    return type(stored).model_validate({**stored.model_dump(), **changes})


class Controller:
    """Service class for playground, user, event and message use cases."""

    def __init__(self, source: Optional[DataSource] = None):
        self.set_data_source(source or get_default_source())

    # Data source

    @property
    def data_source(self) -> DataSource:
        return self._source

    def set_data_source(self, source: DataSource) -> None:
        """Redirect every subsequent call to ``source``."""
        if source is None:
            raise InvalidInput("data source must not be None")
        self._source = source
        self._tx = TransactionCoordinator(source)

    # Playgrounds

    def create_playground(self, playground: schemas.PlaygroundCreate) -> str:
        if playground is None:
            raise InvalidInput("playground must not be None")
        with self._tx.session("create_playground") as db:
            return playground_repo.create_playground(db, schemas.Playground(**playground.model_dump()))

    def get_playground(self, name: str) -> schemas.PlaygroundDetail:
        with self._tx.session("get_playground") as db:
            playground = playground_repo.get_playground(db, name)
            return schemas.PlaygroundDetail(
                **playground.model_dump(exclude={"assigned_pedagogues", "events", "messages"}),
                assigned_pedagogues=[user_repo.get_user(db, ref.value) for ref in playground.assigned_pedagogues],
                events=[event_repo.get_event(db, ref.value) for ref in playground.events],
                messages=[message_repo.get_message(db, ref.value) for ref in playground.messages],
            )

    def list_playgrounds(self) -> List[schemas.Playground]:
        with self._tx.session("list_playgrounds") as db:
            return playground_repo.get_playgrounds(db)

    def update_playground(self, playground: schemas.PlaygroundUpdate) -> WriteResult:
        """Replace the profile fields; reference sets are left as stored."""
        if playground is None or not playground.name:
            raise InvalidInput("playground and its name are required")
        with self._tx.session("update_playground") as db:
            stored = playground_repo.get_playground(db, playground.name, lock=True)
            replacement = _merged(stored, playground.model_dump())
            return playground_repo.update_playground(db, replacement)

    def delete_playground(self, name: str) -> WriteResult:
        with self._tx.session("delete_playground") as db:
            playground = playground_repo.get_playground(db, name, lock=True)
            for pedagogue in playground.assigned_pedagogues:
                sync.unlink_pedagogue(db, name, pedagogue.value)
            for event in playground.events:
                sync.detach_event(db, event.value)
            for message in playground.messages:
                sync.detach_message(db, message.value)
            result = playground_repo.delete_playground(db, name)
        logger.info(
            "delete_playground: name=%s pedagogues=%d events=%d messages=%d",
            name, len(playground.assigned_pedagogues), len(playground.events), len(playground.messages),
        )
        return result

    def get_playground_events(self, name: str) -> List[schemas.Event]:
        with self._tx.session("get_playground_events") as db:
            return event_repo.get_events_by_playground(db, name)

    def get_playground_messages(self, name: str) -> List[schemas.Message]:
        with self._tx.session("get_playground_messages") as db:
            return message_repo.get_messages_by_playground(db, name)

    # Pedagogue assignment

    def add_pedagogue(self, playground_name: str, username: str) -> bool:
        with self._tx.session("add_pedagogue") as db:
            sync.link_pedagogue(db, playground_name, username)
        return True

    def remove_pedagogue(self, playground_name: str, username: str) -> bool:
        with self._tx.session("remove_pedagogue") as db:
            sync.unlink_pedagogue(db, playground_name, username)
        return True

    # Users

    def create_user(self, user: schemas.UserCreate) -> str:
        """Hash the password, store the user and assign it to its playgrounds."""
        if user is None:
            raise InvalidInput("user must not be None")
        require_key(user.username, "user")
        if not user.password:
            raise InvalidInput("password must not be empty")
        stored = schemas.User(
            **user.model_dump(exclude={"password", "playground_ids"}),
            password_hash=passwords.hash_password(user.password),
        )
        with self._tx.session("create_user") as db:
            username = user_repo.create_user(db, stored)
            for playground_name in dict.fromkeys(user.playground_ids):
                sync.link_pedagogue(db, playground_name, username)
            return username

    def get_user(self, username: str) -> schemas.UserDetail:
        with self._tx.session("get_user") as db:
            user = user_repo.get_user(db, username)
            return schemas.UserDetail(
                **user.model_dump(exclude={"events"}),
                events=[event_repo.get_event(db, ref.value) for ref in user.events],
            )

    def list_users(self) -> List[schemas.User]:
        with self._tx.session("list_users") as db:
            return user_repo.get_users(db)

    def list_employees(self) -> List[schemas.User]:
        """Users whose status is anything but ``client``."""
        employees = [u for u in self.list_users() if u.status != "client"]
        if not employees:
            raise NotFound("No employees in users collection")
        return employees

    def update_user(self, user: schemas.UserUpdate) -> WriteResult:
        """Replace profile fields and, when given, reconcile playground assignments."""
        if user is None or not user.username:
            raise InvalidInput("user and its username are required")
        with self._tx.session("update_user") as db:
            if user.playground_ids is not None:
                self._reconcile_assignments(db, user_repo.get_user(db, user.username), user.playground_ids)
            stored = user_repo.get_user(db, user.username, lock=True)
            replacement = _merged(stored, user.model_dump(exclude={"playground_ids"}))
            return user_repo.update_user(db, replacement)

    def _reconcile_assignments(self, db: Session, stored: schemas.User, wanted: List[str]) -> None:
        wanted = list(dict.fromkeys(wanted))
        for playground_name in stored.playground_ids:
            if playground_name not in wanted:
                sync.unlink_pedagogue(db, playground_name, stored.username)
        for playground_name in wanted:
            if playground_name not in stored.playground_ids:
                sync.link_pedagogue(db, playground_name, stored.username)

    def delete_user(self, username: str) -> WriteResult:
        with self._tx.session("delete_user") as db:
            snapshot = user_repo.get_user(db, username)
            # Playgrounds and events before the user row, as in the synchronizer
            for playground_name in sorted(snapshot.playground_ids):
                playground_repo.get_playground(db, playground_name, lock=True)
            for event_id in sorted(ref.value for ref in snapshot.events):
                event_repo.get_event(db, event_id, lock=True)
            user = user_repo.get_user(db, username, lock=True)
            for playground_name in user.playground_ids:
                sync.unlink_pedagogue(db, playground_name, username)
            for event in user.events:
                sync.unlink_participant(db, event.value, username)
            sync.clear_author(db, username)
            result = user_repo.delete_user(db, username)
        logger.info(
            "delete_user: username=%s playgrounds=%d events=%d",
            username, len(user.playground_ids), len(user.events),
        )
        return result

    def change_password(self, username: str, new_password: str) -> WriteResult:
        if not new_password:
            raise InvalidInput("password must not be empty")
        with self._tx.session("change_password") as db:
            stored = user_repo.get_user(db, username, lock=True)
            replacement = stored.model_copy(update={"password_hash": passwords.hash_password(new_password)})
            return user_repo.update_user(db, replacement)

    def verify_password(self, username: str, password: str) -> bool:
        """Check ``password`` against the stored hash, upgrading outdated hashes."""
        with self._tx.session("verify_password") as db:
            stored = user_repo.get_user(db, username, lock=True)
            if not passwords.verify_password(password, stored.password_hash):
                return False
            if passwords.needs_rehash(stored.password_hash):
                user_repo.update_user(db, stored.model_copy(update={"password_hash": passwords.hash_password(password)}))
            return True

    # Events

    def get_event(self, event_id: str) -> schemas.EventDetail:
        with self._tx.session("get_event") as db:
            event = event_repo.get_event(db, event_id)
            return schemas.EventDetail(
                **event.model_dump(exclude={"participants"}),
                participants=[user_repo.get_user(db, ref.value) for ref in event.participants],
            )

    def list_events(self) -> List[schemas.Event]:
        with self._tx.session("list_events") as db:
            return event_repo.get_events(db)

    def add_event(self, playground_name: str, event: schemas.EventCreate) -> str:
        if event is None:
            raise InvalidInput("event must not be None")
        with self._tx.session("add_event") as db:
            return sync.attach_event(db, playground_name, schemas.Event(id=event_repo.new_event_id(), **event.model_dump()))

    def update_event(self, event: schemas.EventUpdate) -> WriteResult:
        """Replace the event's own fields; owner and participants are kept."""
        if event is None or not event.id:
            raise InvalidInput("event and its id are required")
        with self._tx.session("update_event") as db:
            stored = event_repo.get_event(db, event.id, lock=True)
            return event_repo.update_event(db, _merged(stored, event.model_dump()))

    def remove_event(self, event_id: str) -> WriteResult:
        with self._tx.session("remove_event") as db:
            return sync.detach_event(db, event_id)

    def add_participant(self, event_id: str, username: str) -> bool:
        with self._tx.session("add_participant") as db:
            sync.link_participant(db, event_id, username)
        return True

    def remove_participant(self, event_id: str, username: str) -> bool:
        with self._tx.session("remove_participant") as db:
            sync.unlink_participant(db, event_id, username)
        return True

    # Messages

    def get_message(self, message_id: str) -> schemas.Message:
        with self._tx.session("get_message") as db:
            return message_repo.get_message(db, message_id)

    def list_messages(self) -> List[schemas.Message]:
        with self._tx.session("list_messages") as db:
            return message_repo.get_messages(db)

    def add_message(self, playground_name: str, message: schemas.MessageCreate) -> str:
        if message is None:
            raise InvalidInput("message must not be None")
        with self._tx.session("add_message") as db:
            return sync.attach_message(
                db, playground_name, schemas.Message(id=message_repo.new_message_id(), **message.model_dump())
            )

    def update_message(self, message: schemas.MessageUpdate) -> WriteResult:
        """Replace the message's own fields; the owning playground is kept."""
        if message is None or not message.id:
            raise InvalidInput("message and its id are required")
        with self._tx.session("update_message") as db:
            stored = message_repo.get_message(db, message.id, lock=True)
            if message.author_id and message.author_id != stored.author_id:
                user_repo.get_user(db, message.author_id)
            return message_repo.update_message(db, _merged(stored, message.model_dump()))

    def remove_message(self, message_id: str) -> WriteResult:
        with self._tx.session("remove_message") as db:
            return sync.detach_message(db, message_id)

    # Reset tooling

    def kill_all(self) -> None:
        """Wipe all four collections, each in its own commit. Not for request handling."""
        for wipe in (
            event_repo.delete_all_events,
            message_repo.delete_all_messages,
            user_repo.delete_all_users,
            playground_repo.delete_all_playgrounds,
        ):
            db = self._source.session_factory()
            try:
                result = wipe(db)
                db.commit()
            except Exception as exc:
                db.rollback()
                err = translate_store_error(exc)
                if err is exc:
                    raise
                raise err from exc
            finally:
                db.close()
            logger.info("kill_all: %s removed=%d", wipe.__name__, result.n)
