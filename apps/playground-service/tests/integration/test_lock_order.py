import pytest

from playhub.db import schemas
from playhub.db.repositories import documents
from playhub.db.repositories import events as event_repo
from playhub.db.repositories import messages as message_repo
from playhub.db.repositories import playgrounds as playground_repo
from playhub.db.repositories import users as user_repo


@pytest.fixture
def locks(monkeypatch):
    """Record (collection, key) of every row read with FOR UPDATE, in order."""
    taken = []
    original = documents.find_document

    def _recording(db, model, key, *, for_update=False):
        if for_update:
            taken.append((model.__tablename__, key))
        return original(db, model, key, for_update=for_update)

    for module in (documents, playground_repo, user_repo, event_repo, message_repo):
        monkeypatch.setattr(module, "find_document", _recording)
    return taken


def _collections(taken):
    return [collection for collection, _ in taken]


@pytest.fixture
def assigned(controller, make_playground, make_user):
    make_playground("A")
    make_user("u")
    return controller.add_event("A", schemas.EventCreate(name="Fodbold"))


def test_pedagogue_link_and_unlink_lock_playground_first(controller, assigned, locks):
    controller.add_pedagogue("A", "u")
    assert _collections(locks) == ["playgrounds", "users"]

    locks.clear()
    controller.remove_pedagogue("A", "u")
    assert _collections(locks) == ["playgrounds", "users"]


def test_participant_link_and_unlink_lock_event_first(controller, assigned, locks):
    controller.add_participant(assigned, "u")
    assert _collections(locks) == ["events", "users"]

    locks.clear()
    controller.remove_participant(assigned, "u")
    assert _collections(locks) == ["events", "users"]


def test_remove_event_locks_playground_then_event_then_users(controller, assigned, locks):
    controller.add_participant(assigned, "u")
    locks.clear()

    controller.remove_event(assigned)

    assert locks == [("playgrounds", "A"), ("events", assigned), ("users", "u")]


def test_delete_playground_locks_playground_before_cascade(controller, assigned, locks):
    controller.add_pedagogue("A", "u")
    locks.clear()

    controller.delete_playground("A")

    assert locks[0] == ("playgrounds", "A")


def test_delete_user_locks_related_rows_before_user(controller, assigned, make_playground, locks):
    make_playground("B")
    controller.add_pedagogue("B", "u")
    controller.add_pedagogue("A", "u")
    controller.add_participant(assigned, "u")
    locks.clear()

    controller.delete_user("u")

    first_user_lock = locks.index(("users", "u"))
    assert locks[:first_user_lock] == [("playgrounds", "A"), ("playgrounds", "B"), ("events", assigned)]


def test_profile_updates_read_under_lock(controller, assigned, locks):
    controller.update_playground(schemas.PlaygroundUpdate(name="A", commune="Odense"))
    controller.update_user(schemas.UserUpdate(username="u", firstname="Nic"))
    controller.update_event(schemas.EventUpdate(id=assigned, name="Basket"))
    assert locks == [("playgrounds", "A"), ("users", "u"), ("events", assigned)]
