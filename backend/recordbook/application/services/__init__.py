from .change_notifier import ChangeAction, ChangeNotifier, RecordChange
from .record_codec import decode_records, encode_records
from .record_export import build_export
from .record_store import RecordStore

__all__ = [
    "ChangeAction",
    "ChangeNotifier",
    "RecordChange",
    "decode_records",
    "encode_records",
    "build_export",
    "RecordStore",
]
