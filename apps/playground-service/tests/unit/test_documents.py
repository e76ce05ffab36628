import pytest

from playhub.db import models
from playhub.db.repositories import documents
from playhub.errors import InvalidInput, NotFound, WriteFailed


def _seed(db, key="p1", **doc):
    documents.insert_document(db, models.PlaygroundDocument, key, {"name": key, **doc})


def test_insert_and_find(db):
    result = documents.insert_document(db, models.PlaygroundDocument, "p1", {"name": "p1"})
    assert result.n == 1 and result.upserted_id == "p1"
    assert documents.find_document(db, models.PlaygroundDocument, "p1") == {"name": "p1"}
    assert documents.find_document(db, models.PlaygroundDocument, "nope") is None


def test_duplicate_key_is_write_failed(db):
    _seed(db)
    with pytest.raises(WriteFailed):
        _seed(db)


def test_index_columns_follow_document(db):
    documents.insert_document(db, models.EventDocument, "e1", {"id": "e1", "playground_name": "p1"})
    rows = documents.find_documents(db, models.EventDocument, models.EventDocument.owner_key == "p1")
    assert [r["id"] for r in rows] == ["e1"]

    documents.replace_document(db, models.EventDocument, "e1", {"id": "e1", "playground_name": "p2"})
    assert documents.find_documents(db, models.EventDocument, models.EventDocument.owner_key == "p1") == []


def test_replace_missing_key_fails(db):
    with pytest.raises(WriteFailed):
        documents.replace_document(db, models.PlaygroundDocument, "ghost", {"name": "ghost"})


def test_remove_missing_key_is_acknowledged(db):
    result = documents.remove_document(db, models.PlaygroundDocument, "ghost")
    assert result.acknowledged is True
    assert result.n == 0


def test_push_has_set_semantics(db):
    _seed(db)
    assert documents.push(db, models.PlaygroundDocument, "p1", "tags", "a").n == 1
    assert documents.push(db, models.PlaygroundDocument, "p1", "tags", "a").n == 0
    assert documents.find_document(db, models.PlaygroundDocument, "p1")["tags"] == ["a"]


def test_pull_matches_nested_field(db):
    _seed(db, assigned_pedagogues=[{"kind": "key", "value": "u1"}, {"kind": "key", "value": "u2"}])
    result = documents.pull(db, models.PlaygroundDocument, "p1", "assigned_pedagogues", "u1", match="value")
    assert result.n == 1
    stored = documents.find_document(db, models.PlaygroundDocument, "p1")
    assert stored["assigned_pedagogues"] == [{"kind": "key", "value": "u2"}]


def test_pull_absent_value_is_noop(db):
    _seed(db, playground_ids=["a"])
    assert documents.pull(db, models.PlaygroundDocument, "p1", "playground_ids", "zzz").n == 0


def test_array_ops_on_missing_document(db):
    with pytest.raises(NotFound):
        documents.push(db, models.PlaygroundDocument, "ghost", "tags", "a")
    with pytest.raises(NotFound):
        documents.pull(db, models.PlaygroundDocument, "ghost", "tags", "a")


@pytest.mark.parametrize("key", [None, "", "   "])
def test_require_key_rejects_blank(key):
    with pytest.raises(InvalidInput):
        documents.require_key(key, "playground")
