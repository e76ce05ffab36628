from datetime import datetime, timezone

import pytest
from sqlalchemy.dialects import postgresql, sqlite

from playhub.db import schemas
from playhub.db.types import DocumentJSON


def test_dialect_impl_uses_jsonb_on_postgres():
    impl = DocumentJSON().load_dialect_impl(postgresql.dialect())
    assert isinstance(impl, postgresql.JSONB)


def test_dialect_impl_falls_back_to_json():
    impl = DocumentJSON().load_dialect_impl(sqlite.dialect())
    assert not isinstance(impl, postgresql.JSONB)


def test_bind_dumps_pydantic_models_in_json_mode():
    msg = schemas.Message(id="m1", body="hi", written_at=datetime(2020, 1, 2, tzinfo=timezone.utc))
    bound = DocumentJSON().process_bind_param(msg, sqlite.dialect())
    assert bound["id"] == "m1"
    assert isinstance(bound["written_at"], str)


def test_bind_rejects_non_mappings():
    with pytest.raises(TypeError):
        DocumentJSON().process_bind_param(["not", "a", "document"], sqlite.dialect())


def test_result_accepts_raw_json_text():
    assert DocumentJSON().process_result_value('{"name": "x"}', sqlite.dialect()) == {"name": "x"}
    assert DocumentJSON().process_result_value(None, sqlite.dialect()) is None
