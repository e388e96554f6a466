"""
Poker Arena Sync Real-time Sync.

Socket.IO transport, outbound commands and the arena store.
"""

from src.realtime.events import classify_channel, decode_message, scheduled_follow_ups
from src.realtime.store import (
    ArenaStore,
    StoreNotInitializedError,
    store_scope,
    use_store,
)
from src.realtime.transport import ArenaTransport, WalletAuthError

__all__ = [
    "ArenaStore",
    "ArenaTransport",
    "StoreNotInitializedError",
    "WalletAuthError",
    "classify_channel",
    "decode_message",
    "scheduled_follow_ups",
    "store_scope",
    "use_store",
]
