"""Encode/decode the whole record collection to the persisted JSON blob."""

from collections.abc import Iterable

from pydantic import TypeAdapter

from recordbook.application.schemas.record_payload import RecordPayload
from recordbook.domain.entities import Record

_COLLECTION = TypeAdapter(list[RecordPayload])


def encode_records(records: Iterable[Record]) -> bytes:
    """Serialize the full collection as a JSON array with camelCase keys."""
    payloads = [RecordPayload.from_entity(r) for r in records]
    return _COLLECTION.dump_json(payloads, by_alias=True)


def decode_records(raw: bytes | str) -> list[Record]:
    """Parse a persisted JSON array back into records, keeping its order.

    Raises pydantic.ValidationError when the blob is not a JSON array of
    record objects.
    """
    return [payload.to_entity() for payload in _COLLECTION.validate_json(raw)]
