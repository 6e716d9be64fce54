"""Record store backends and the in-process change feed."""

from .change_feed import ChangeSubscription, InMemoryChangeFeed
from .postgrest_record_store import PostgrestRecordStore
from .sql_record_store import SqlRecordStore

__all__ = ["ChangeSubscription", "InMemoryChangeFeed", "PostgrestRecordStore", "SqlRecordStore"]
