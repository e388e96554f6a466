"""
Poker Arena Sync Domain.

Pure state layer with zero transport/UI dependencies: payload models,
the session snapshot, the reducer and the active-table projector.
"""

from src.arena.events import ArenaEvent, EventPayload
from src.arena.log_format import humanize
from src.arena.projector import derive_active_table
from src.arena.reducer import reduce
from src.arena.state import (
    MAX_ACTION_LOG,
    MAX_SETTLEMENT_LOG,
    ActiveTableView,
    SessionState,
    TableSnapshot,
)

__all__ = [
    # Events
    "ArenaEvent",
    "EventPayload",
    # State
    "ActiveTableView",
    "SessionState",
    "TableSnapshot",
    "MAX_ACTION_LOG",
    "MAX_SETTLEMENT_LOG",
    # Transitions
    "derive_active_table",
    "humanize",
    "reduce",
]
