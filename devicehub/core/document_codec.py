"""Document Codec — translates the metadata map to and from its storage form.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no SQLAlchemy
    - decode(None), decode of an empty bytes/str value and a JSON null document
      all yield a fresh {}
    - encode(None) yields None (SQL NULL); encode({}) yields the literal "{}",
      so an initialized entity never stores NULL
    - Every failure chains its cause: DecodeError / EncodeError / ScanKindError

Design Decisions:
    - Pure function pair instead of driver hooks: unit-testable without an engine,
      the column type in db/types.py is a thin adapter around it
    - allow_nan=False: NaN/Infinity are not valid JSON and would be rejected by JSONB
    - Numbers round-trip as Python int/float (json keeps them distinct), so the
      "numbers widen to float" caveat of other JSON stacks does not apply here
"""

import json
from typing import Any

from devicehub.core.errors import DecodeError, EncodeError, ScanKindError

EMPTY_DOCUMENT = "{}"


def decode_document(raw: Any) -> dict[str, Any]:
    """Storage value -> metadata map."""
    if raw is None:
        return {}
    if isinstance(raw, (bytes, bytearray, memoryview)):
        if len(raw) == 0:
            return {}
        try:
            source = bytes(raw).decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(str(e)) from e
    elif isinstance(raw, str):
        if len(raw) == 0:
            return {}
        source = raw
    else:
        raise ScanKindError(type(raw).__name__)

    try:
        document = json.loads(source)
    except json.JSONDecodeError as e:
        raise DecodeError(str(e)) from e
    return coerce_document(document)


def coerce_document(value: Any) -> dict[str, Any]:
    """Already-parsed JSON value -> metadata map.

    A JSON null document is read as {}, the same as SQL NULL.
    """
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DecodeError(
            f"expected a JSON object, got {type(value).__name__}",
        )
    return value


def encode_document(document: dict[str, Any] | None) -> str | None:
    """Metadata map -> storage value."""
    if document is None:
        return None
    if len(document) == 0:
        return EMPTY_DOCUMENT
    try:
        return json.dumps(document, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise EncodeError(str(e)) from e
