"""Custom Column Types — binds the pure document codec to SQLAlchemy.

Invariants:
    - JSONDocument renders as JSONB on PostgreSQL, TEXT everywhere else
    - Every bound value goes through encode_document; the dialect's own JSON
      serializer is never applied on top of it
    - Every fetched value ends up as a fresh str-keyed dict or a DecodeError

Design Decisions:
    - bind_processor/result_processor overridden (not process_bind_param) so the
      JSONB impl's json.dumps does not run a second time on top of the codec.
      asyncpg's jsonb codec, as SQLAlchemy registers it, takes the encoded str as is
    - On the way back that codec runs the engine's json_deserializer, which parses
      to a dict by default. DatabaseSessionManager installs a pass-through
      deserializer so the raw text reaches decode_document; an engine built
      without it hands over parsed values, which go through coerce_document
    - TEXT fallback: lets the store tests run on SQLite through decode_document
"""

from sqlalchemy import Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import TypeDecorator

from devicehub.core.document_codec import (
    coerce_document, decode_document, encode_document,
)

_RAW_KINDS = (str, bytes, bytearray, memoryview)


def _decode_driver_value(value):
    if value is None or isinstance(value, _RAW_KINDS):
        return decode_document(value)
    return coerce_document(value)


class JSONDocument(TypeDecorator):
    """Opaque structured-document column holding a str-keyed map."""

    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(Text())

    def bind_processor(self, dialect):
        return encode_document

    def result_processor(self, dialect, coltype):
        if dialect.name == "postgresql":
            return _decode_driver_value
        return decode_document

    def compare_values(self, x, y):
        return x == y
