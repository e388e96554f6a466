"""
Poker Arena Sync - Domain Events

Every state transition is triggered by exactly one ``EventPayload``.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class ArenaEvent(Enum):
    """Events the reducer understands."""

    # Connection
    CONNECTIVITY_CHANGED = auto()
    INITIAL_STATE = auto()

    # Legacy single-table game
    GAME_CREATED = auto()
    GAME_JOINED = auto()
    GAME_RESULT = auto()
    PHASE_CHANGE = auto()
    HOLE_CARDS = auto()
    COMMUNITY_CARDS = auto()
    HAND_STRENGTH = auto()
    VIRTUAL_CHIPS = auto()
    BOT_MATCH = auto()
    SHOWDOWN = auto()

    # Stats and logs
    AGENT_STATS = auto()
    BOT_STATS = auto()
    LOG_APPENDED = auto()
    LOGS_REPLACED = auto()
    WIN_HISTORY_REPLACED = auto()

    # Multi-table arena
    TABLE_STATE = auto()
    HAND_RESULT = auto()
    RESULT_CLEARED = auto()
    ACTIVE_TABLE_CHANGED = auto()
    ARENA_STATUS = auto()
    ROOMS_REPLACED = auto()
    LEADERBOARD_REPLACED = auto()

    # Settlement
    SETTLEMENT_PROGRESS = auto()
    SETTLEMENT_COMPLETE = auto()
    SETTLEMENT_ERROR = auto()
    SETTLEMENT_FLASH_CLEARED = auto()

    AGENT_INTENT = auto()

    # Wallet
    WALLET_INFO = auto()
    WALLET_AUTH_SUCCEEDED = auto()
    WALLET_DISCONNECTED = auto()


@dataclass(frozen=True)
class EventPayload:
    """An event plus its decoded body.

    ``table_id`` and ``hand_number`` address a single table's result and
    are only read by ``RESULT_CLEARED``; ``None`` means "the active table"
    and "whatever result is showing".
    """

    event: ArenaEvent
    data: Any = None
    table_id: str | None = None
    hand_number: int | None = None


def clear_result(table_id: str | None = None, hand_number: int | None = None) -> EventPayload:
    return EventPayload(ArenaEvent.RESULT_CLEARED, table_id=table_id, hand_number=hand_number)


def set_active_table(table_id: str) -> EventPayload:
    return EventPayload(ArenaEvent.ACTIVE_TABLE_CHANGED, data=table_id)


def connectivity_changed(connected: bool) -> EventPayload:
    return EventPayload(ArenaEvent.CONNECTIVITY_CHANGED, data=connected)
