import pytest

from playhub.errors import NotFound


def _all(fetch):
    try:
        return fetch()
    except NotFound:
        return []


@pytest.fixture
def assert_consistent(controller):
    """Check that every stored reference has its counterpart and points at a live document."""

    def _check():
        playgrounds = {p.name: p for p in _all(controller.list_playgrounds)}
        users = {u.username: u for u in _all(controller.list_users)}
        events = {e.id: e for e in _all(controller.list_events)}
        messages = {m.id: m for m in _all(controller.list_messages)}

        for p in playgrounds.values():
            for ref in p.assigned_pedagogues:
                assert ref.value in users, f"{p.name} -> missing pedagogue {ref.value}"
                assert p.name in users[ref.value].playground_ids
            for ref in p.events:
                assert events[ref.value].playground_name == p.name
            for ref in p.messages:
                assert messages[ref.value].playground_name == p.name

        for u in users.values():
            for name in u.playground_ids:
                assert u.username in [r.value for r in playgrounds[name].assigned_pedagogues]
            for ref in u.events:
                assert u.username in [r.value for r in events[ref.value].participants]

        for e in events.values():
            assert e.id in [r.value for r in playgrounds[e.playground_name].events]
            for ref in e.participants:
                assert e.id in [r.value for r in users[ref.value].events]

        for m in messages.values():
            assert m.id in [r.value for r in playgrounds[m.playground_name].messages]
            if m.author_id:
                assert m.author_id in users

    return _check
