import pytest
from sqlalchemy.exc import OperationalError

from playhub.db import models
from playhub.db.repositories import documents
from playhub.db.transaction import TransactionCoordinator
from playhub.errors import NotFound, StoreUnavailable


def _exists(source, key):
    db = source.session_factory()
    try:
        return documents.find_document(db, models.PlaygroundDocument, key) is not None
    finally:
        db.close()


def test_commit_on_success(source):
    tx = TransactionCoordinator(source)
    with tx.session("seed") as db:
        documents.insert_document(db, models.PlaygroundDocument, "A", {"name": "A"})
    assert _exists(source, "A")


def test_rollback_on_typed_failure(source):
    tx = TransactionCoordinator(source)
    with pytest.raises(NotFound):
        with tx.session("seed") as db:
            documents.insert_document(db, models.PlaygroundDocument, "A", {"name": "A"})
            raise NotFound("later step failed")
    assert not _exists(source, "A")


def test_store_errors_are_translated(source):
    tx = TransactionCoordinator(source)
    with pytest.raises(StoreUnavailable) as info:
        with tx.session("broken"):
            raise OperationalError("SELECT 1", {}, Exception("gone"))
    assert isinstance(info.value.__cause__, OperationalError)


def test_abort_is_logged(source, caplog):
    tx = TransactionCoordinator(source)
    with caplog.at_level("WARNING", logger="playhub.db.transaction"):
        with pytest.raises(NotFound):
            with tx.session("lookup"):
                raise NotFound("x")
    assert "transaction_abort: lookup kind=not_found" in caplog.text
