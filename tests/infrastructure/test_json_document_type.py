"""JSONDocument column — verifies the PostgreSQL/asyncpg path without a live server.

Tests:
    - metadata renders as JSONB under the asyncpg dialect, TEXT under SQLite
    - bound values are the codec's JSON text (what asyncpg's jsonb codec expects)
    - fetched values decode whether the driver hands back raw text or a parsed dict
    - the application engine keeps JSONB text undecoded for the codec
"""

import pytest
from sqlalchemy.dialects.postgresql import asyncpg as pg_asyncpg
from sqlalchemy.dialects.sqlite import aiosqlite as sqlite_aiosqlite
from sqlalchemy.schema import CreateTable

from devicehub.core.errors import DecodeError
from devicehub.infrastructure.database import DatabaseSessionManager
from devicehub.models.device import DeviceRecord

NESTED = {
    "zone": "A",
    "tags": ["edge", "ñandú"],
    "limits": {"temp": {"max": 85, "min": -20.5}, "enabled": True},
    "owner": None,
}


@pytest.fixture
def pg_dialect():
    return pg_asyncpg.dialect()


def _processors(dialect):
    impl = DeviceRecord.__table__.c.metadata.type.dialect_impl(dialect)
    return impl.bind_processor(dialect), impl.result_processor(dialect, None)


def test_metadata_column_is_jsonb_on_postgresql(pg_dialect):
    ddl = str(CreateTable(DeviceRecord.__table__).compile(dialect=pg_dialect))
    assert "metadata JSONB" in ddl


def test_metadata_column_is_text_on_sqlite():
    ddl = str(CreateTable(DeviceRecord.__table__).compile(
        dialect=sqlite_aiosqlite.dialect(),
    ))
    assert "metadata TEXT" in ddl


def test_bind_produces_json_text(pg_dialect):
    bind, _ = _processors(pg_dialect)
    assert bind({}) == "{}"
    assert isinstance(bind(NESTED), str)


def test_nested_document_round_trips_as_raw_text(pg_dialect):
    bind, result = _processors(pg_dialect)
    assert result(bind(NESTED)) == NESTED


def test_driver_parsed_document_is_accepted(pg_dialect):
    _, result = _processors(pg_dialect)
    assert result({"zone": "A"}) == {"zone": "A"}
    assert result(dict(NESTED)) == NESTED


def test_null_documents_read_as_empty_map(pg_dialect):
    _, result = _processors(pg_dialect)
    assert result(None) == {}
    assert result("null") == {}


def test_driver_parsed_non_object_raises_decode_error(pg_dialect):
    _, result = _processors(pg_dialect)
    with pytest.raises(DecodeError):
        result([1, 2, 3])


async def test_application_engine_leaves_jsonb_text_undecoded():
    manager = DatabaseSessionManager("postgresql+asyncpg://devicehub@localhost/devicehub")
    try:
        dialect = manager.engine.dialect
        driver_value = dialect._json_deserializer('{"zone": "A"}')
        assert driver_value == '{"zone": "A"}'
        _, result = _processors(dialect)
        assert result(driver_value) == {"zone": "A"}
    finally:
        await manager.close()
