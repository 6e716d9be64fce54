from .change_feed import ChangeEvent, ChangeFeedProtocol, ChangeSubscriptionProtocol, ChangeType
from .identity_provider import IdentityProviderProtocol
from .record_store import Filters, Record, RecordStoreProtocol

__all__ = [
    "ChangeEvent",
    "ChangeFeedProtocol",
    "ChangeSubscriptionProtocol",
    "ChangeType",
    "Filters",
    "IdentityProviderProtocol",
    "Record",
    "RecordStoreProtocol",
]
