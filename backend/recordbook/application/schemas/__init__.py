from .record import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    RecordCreate,
    RecordResponse,
    RecordUpdate,
)
from .record_payload import RecordPayload
from .statistics import (
    CategoryShareSchema,
    ItemFrequencySchema,
    ProfileResponse,
    StatisticsResponse,
)

__all__ = [
    "BulkDeleteRequest",
    "BulkDeleteResponse",
    "RecordCreate",
    "RecordResponse",
    "RecordUpdate",
    "RecordPayload",
    "CategoryShareSchema",
    "ItemFrequencySchema",
    "ProfileResponse",
    "StatisticsResponse",
]
