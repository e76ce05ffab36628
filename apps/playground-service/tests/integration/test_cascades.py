import pytest

from playhub.db import schemas
from playhub.db.repositories import playgrounds as playground_repo
from playhub.db.repositories import users as user_repo
from playhub.errors import NotFound, WriteFailed


@pytest.fixture
def populated(controller, make_playground, make_user):
    make_playground("Slyngerparken")
    make_playground("Other")
    make_user("nicolai", status="pedagogue", playground_ids=["Slyngerparken", "Other"])
    make_user("anna")
    event_id = controller.add_event("Slyngerparken", schemas.EventCreate(name="Fodbold"))
    controller.add_participant(event_id, "nicolai")
    controller.add_participant(event_id, "anna")
    message_id = controller.add_message("Slyngerparken", schemas.MessageCreate(body="hej", author_id="anna"))
    return {"event_id": event_id, "message_id": message_id}


def test_delete_playground_cascades(controller, populated, assert_consistent):
    assert controller.delete_playground("Slyngerparken").n == 1

    with pytest.raises(NotFound):
        controller.get_playground("Slyngerparken")
    with pytest.raises(NotFound):
        controller.get_event(populated["event_id"])
    with pytest.raises(NotFound):
        controller.get_message(populated["message_id"])

    nicolai = controller.get_user("nicolai")
    assert nicolai.playground_ids == ["Other"]
    assert nicolai.events == []
    assert controller.get_user("anna").events == []
    assert_consistent()


def test_delete_playground_is_atomic(controller, populated, monkeypatch):
    before_user = controller.get_user("nicolai")
    before_playground = controller.get_playground("Slyngerparken")

    def _fail(db, name):
        raise WriteFailed("simulated failure on final delete")

    monkeypatch.setattr(playground_repo, "delete_playground", _fail)

    with pytest.raises(WriteFailed):
        controller.delete_playground("Slyngerparken")

    assert controller.get_user("nicolai") == before_user
    assert controller.get_playground("Slyngerparken") == before_playground
    assert controller.get_event(populated["event_id"]).playground_name == "Slyngerparken"
    assert controller.get_message(populated["message_id"]).body == "hej"


def test_delete_user_is_atomic(controller, populated, monkeypatch):
    before_playgrounds = [controller.get_playground(name) for name in ("Slyngerparken", "Other")]
    before_event = controller.get_event(populated["event_id"])
    before_user = controller.get_user("anna")

    def _fail(db, username):
        raise WriteFailed("simulated failure on final delete")

    monkeypatch.setattr(user_repo, "delete_user", _fail)

    with pytest.raises(WriteFailed):
        controller.delete_user("anna")

    assert [controller.get_playground(name) for name in ("Slyngerparken", "Other")] == before_playgrounds
    assert controller.get_event(populated["event_id"]) == before_event
    assert controller.get_user("anna") == before_user
    assert controller.get_message(populated["message_id"]).author_id == "anna"


def test_delete_missing_playground(controller):
    with pytest.raises(NotFound):
        controller.delete_playground("Nowhere")


def test_delete_user_cascades(controller, populated, assert_consistent):
    assert controller.delete_user("nicolai").n == 1

    with pytest.raises(NotFound):
        controller.get_user("nicolai")
    assert controller.get_playground("Slyngerparken").assigned_pedagogues == []
    assert controller.get_playground("Other").assigned_pedagogues == []
    assert [p.username for p in controller.get_event(populated["event_id"]).participants] == ["anna"]
    assert_consistent()


def test_delete_author_clears_messages(controller, populated, assert_consistent):
    controller.delete_user("anna")
    message = controller.get_message(populated["message_id"])
    assert message.author_id is None
    assert message.body == "hej"
    assert_consistent()


def test_kill_all_empties_every_collection(controller, populated):
    controller.kill_all()
    for listing in (controller.list_playgrounds, controller.list_users, controller.list_events, controller.list_messages):
        with pytest.raises(NotFound):
            listing()


def test_kill_all_on_empty_store(controller):
    controller.kill_all()
    with pytest.raises(NotFound):
        controller.list_users()
