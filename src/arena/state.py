"""
Poker Arena Sync - Session State

Immutable containers for the canonical snapshot. All classes are frozen
dataclasses; transitions build new instances with ``dataclasses.replace``
and never mutate in place, so readers on other threads always see a
complete snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from src.arena.models import (
    ActionLogEntry,
    AgentIntent,
    AgentStats,
    ArenaRoom,
    ArenaStatus,
    BotStats,
    Card,
    HandResult,
    LeaderboardEntry,
    Phase,
    Pot,
    SeatInfo,
    SettlementComplete,
    SettlementProgress,
    TableStatePayload,
    WalletInfo,
    WinHistoryEntry,
)

MAX_ACTION_LOG = 200
MAX_SETTLEMENT_LOG = 10

EMPTY_TABLES: Mapping[str, TableSnapshot] = MappingProxyType({})


@dataclass(frozen=True)
class TableSnapshot:
    """
    Latest known state of one arena table.

    Attributes:
        table_id: Stable server-assigned identifier, never reused
        hand_number: Monotonic per table
        phase: Current betting phase, None between hands
        seats: Fixed-size ordered seat list
        community_cards: Board cards, 0-5
        active_player_id: Player to act (refers into ``seats``)
        pots: Main pot followed by side pots
        current_bet: Highest bet of the current round
        last_result: Most recent hand result, shown until cleared
    """
    table_id: str
    hand_number: int = 0
    phase: Phase | str | None = None
    seats: tuple[SeatInfo, ...] = ()
    community_cards: tuple[Card, ...] = ()
    active_player_id: str | None = None
    pots: tuple[Pot, ...] = ()
    current_bet: int = 0
    last_result: HandResult | None = None

    @classmethod
    def from_payload(
        cls,
        payload: TableStatePayload,
        last_result: HandResult | None = None,
    ) -> "TableSnapshot":
        """Build a fresh snapshot from a table-state payload."""
        return cls(
            table_id=payload.table_id,
            hand_number=payload.hand_number,
            phase=payload.phase,
            seats=payload.seats,
            community_cards=payload.community_cards,
            active_player_id=payload.active_player_id,
            pots=payload.pots,
            current_bet=payload.current_bet,
            last_result=last_result,
        )


@dataclass(frozen=True)
class ActiveTableView:
    """Flattened view of the active table for single-table consumers.

    The default instance is the defined "no active table" view.
    """
    seats: tuple[SeatInfo, ...] = ()
    hand_number: int = 0
    phase: Phase | str | None = None
    community_cards: tuple[Card, ...] = ()
    active_player_id: str | None = None
    pots: tuple[Pot, ...] = ()
    current_bet: int = 0
    last_result: HandResult | None = None


EMPTY_VIEW = ActiveTableView()


@dataclass(frozen=True)
class SessionState:
    """
    Process-wide snapshot of the arena session.

    Only the reducer builds new instances. ``active_table`` is always the
    projection of ``tables`` and ``active_table_id``.
    """
    connected: bool = False

    # Legacy single-table game
    current_game_id: int | None = None
    current_phase: str | None = None
    hole_cards: tuple[Card, ...] = ()
    community_cards: tuple[Card, ...] = ()
    hand_strength: str | None = None
    pot: int = 0
    my_stack: int = 0
    opponent_stack: int = 0
    opponent_label: str | None = None

    # Stats
    agent_stats: AgentStats | None = None
    bot_stats: BotStats | None = None

    # Logs
    action_log: tuple[ActionLogEntry, ...] = ()
    win_history: tuple[WinHistoryEntry, ...] = ()

    # Multi-table arena
    arena_mode: bool = False
    tables: Mapping[str, TableSnapshot] = field(default_factory=lambda: EMPTY_TABLES)
    active_table_id: str | None = None
    active_table: ActiveTableView = EMPTY_VIEW
    arena_status: ArenaStatus | None = None

    rooms: tuple[ArenaRoom, ...] = ()
    leaderboard: tuple[LeaderboardEntry, ...] = ()

    # Settlement
    settlement_progress: SettlementProgress | None = None
    settlement_log: tuple[SettlementComplete, ...] = ()
    settlement_flash: bool = False

    agent_intent: AgentIntent | None = None

    # Wallet
    wallet_info: WalletInfo | None = None
    user_wallet_address: str | None = None
