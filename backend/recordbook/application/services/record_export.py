"""JSON export of a record selection, in the same entry shape as persistence."""

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from recordbook.application.schemas.record_payload import RecordPayload
from recordbook.domain.entities import Record


def build_export(
    records: Sequence[Record], time_range: str, now: datetime | None = None
) -> dict[str, Any]:
    """Return a JSON-ready export document.

    ``time_range`` is a free label describing the selection (e.g. "all",
    "month"); ``exportDate`` is an ISO-8601 UTC timestamp.
    """
    exported_at = now or datetime.now(timezone.utc)
    return {
        "timeRange": time_range,
        "exportDate": exported_at.isoformat(),
        "totalEntries": len(records),
        "entries": [
            RecordPayload.from_entity(r).model_dump(mode="json", by_alias=True)
            for r in records
        ],
    }
