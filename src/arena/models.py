"""
Poker Arena Sync - Wire Payload Models

Pydantic models that mirror the payloads pushed by the arena server.
Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for every payload: camelCase aliases, frozen, extra keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump using wire (camelCase) names."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Phase(str, Enum):
    """Betting phase of a hand."""

    WAITING = "WAITING"
    PREFLOP = "PREFLOP"
    FLOP = "FLOP"
    TURN = "TURN"
    RIVER = "RIVER"
    SHOWDOWN = "SHOWDOWN"
    COMPLETE = "COMPLETE"


class Card(WireModel):
    rank: str
    suit: str


# -- Arena tables ---------------------------------------------------------


class SeatInfo(WireModel):
    """One seat at an arena table."""

    index: int
    player_id: str | None = None
    player_name: str | None = None
    stack: int = 0
    status: str = "empty"
    position: str | None = None
    bet_this_round: int = 0
    is_dealer: bool = False
    hole_cards: tuple[Card, ...] | None = None


class Pot(WireModel):
    amount: int
    eligible_player_ids: tuple[str, ...] = ()


class TableStatePayload(WireModel):
    """Mirrors `arena:tableState`."""

    table_id: str
    hand_number: int = 0
    # Unknown phase names are kept as plain strings
    phase: Phase | str | None = Field(default=None, union_mode="left_to_right")
    seats: tuple[SeatInfo, ...] = ()
    community_cards: tuple[Card, ...] = Field(default=(), max_length=5)
    pots: tuple[Pot, ...] = ()
    current_bet: int = Field(default=0, ge=0)
    active_player_id: str | None = None
    timestamp: int | None = None


class Winner(WireModel):
    player_id: str
    amount: int = 0
    hand_description: str = ""
    hole_cards: tuple[Card, ...] = ()


class ShowdownPlayer(WireModel):
    player_id: str
    hole_cards: tuple[Card, ...] = ()
    hand_description: str = ""


class HandResult(WireModel):
    """Mirrors `arena:handResult`. ``table_id`` may be omitted by older servers."""

    table_id: str | None = None
    hand_number: int
    winners: tuple[Winner, ...] = ()
    board_cards: tuple[Card, ...] = ()
    showdown_players: tuple[ShowdownPlayer, ...] = ()
    timestamp: int | None = None


# -- Arena control --------------------------------------------------------


class ArenaConfig(WireModel):
    """Body of `arena:start`, echoed back in `arena:status`."""

    bot_count: int = 5
    max_hands: int = 100
    small_blind: int = 5
    big_blind: int = 10
    starting_stack: int = 1000
    table_count: int = 1


class ArenaStatus(WireModel):
    running: bool
    hands_played: int = 0
    agent_wins: int = 0
    agent_losses: int = 0
    total_profit: int = 0
    config: ArenaConfig | None = None


class RoomConfig(WireModel):
    """Body of `room:create`."""

    name: str
    small_blind: int = 5
    big_blind: int = 10
    max_players: int = 6
    starting_stack: int = 1000
    max_hands: int = 100


class ArenaRoom(RoomConfig):
    id: str
    status: Literal["waiting", "running", "completed"] = "waiting"
    player_count: int = 0
    created_at: int = 0


class LeaderboardEntry(WireModel):
    player_id: str
    player_name: str
    player_type: Literal["agent", "bot"] = "bot"
    style: str = ""
    total_hands: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: float = 0.0
    total_profit: int = 0
    avg_profit_per_hand: float = 0.0
    biggest_win: int = 0
    current_streak: int = 0
    best_streak: int = 0
    recent_results: tuple[Literal["W", "L"], ...] = ()


# -- Settlement -----------------------------------------------------------


class SettlementProgress(WireModel):
    room_id: str
    pending_count: int = 0
    batch_size: int = 0
    timestamp: int | None = None


class SettlementComplete(WireModel):
    room_id: str
    batch_number: int
    hands_settled: int = 0
    tx_hash: str = ""
    timestamp: int | None = None


class SettlementError(WireModel):
    room_id: str
    hands_lost: int = 0
    error: str = ""
    timestamp: int | None = None


# -- Stats, agent and wallet ----------------------------------------------


class AgentStats(WireModel):
    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: float = 0.0
    bankroll: float = 0.0
    risk_level: str = ""
    consecutive_losses: int = 0
    is_free_play: bool = False
    timestamp: int | None = None


class BotStatsEntry(WireModel):
    address: str
    label: str = ""
    style: str = ""
    wins: int = 0
    losses: int = 0
    hands_played: int = 0
    current_streak: int = 0
    win_rate: float = 0.0


class BotStats(WireModel):
    bots: tuple[BotStatsEntry, ...] = ()
    timestamp: int | None = None


class WinHistoryEntry(WireModel):
    match_number: int
    win_rate: float
    timestamp: int | None = None


class BluffDecision(WireModel):
    should_bluff: bool = False
    reasoning: str = ""


class OpponentProfile(WireModel):
    player_id: str
    archetype: str = ""
    aggression: float = 0.0
    fold_to_raise: float = 0.0
    vpip: float = 0.0


class AgentIntent(WireModel):
    """The agent's reasoning for its latest decision."""

    game_id: int | str
    phase: str = ""
    position: str = ""
    equity: float = 0.0
    ev_fold: float = 0.0
    ev_call: float = 0.0
    ev_raise: float = 0.0
    ev_best_action: str = ""
    bluff_decision: BluffDecision | None = None
    opponent_profile: OpponentProfile | None = None
    multiway_count: int = 0
    action: str = ""
    amount: int = 0
    reasoning: str = ""
    timestamp: int | None = None


class WalletInfo(WireModel):
    address: str
    balance: str = "0"
    chain_name: str = ""
    settlement_enabled: bool = False
    settlement_address: str = ""
    timestamp: int | None = None


class WalletAuthResponse(WireModel):
    success: bool
    address: str | None = None
    error: str | None = None


class ActionLogEntry(WireModel):
    id: str
    event: str
    message: str
    timestamp: int = 0


class InitialState(WireModel):
    """Mirrors `connection:initialState`, sent once per (re)connect."""

    agent_stats: AgentStats | None = None
    bot_stats: BotStats | None = None
    recent_log: tuple[ActionLogEntry, ...] = ()
    win_history: tuple[WinHistoryEntry, ...] = ()
    wallet_info: WalletInfo | None = None
    timestamp: int | None = None


# -- Legacy single-table game ---------------------------------------------


class GameCreated(WireModel):
    game_id: int


class GameJoined(WireModel):
    game_id: int
    opponent: str | None = None


class GameResult(WireModel):
    game_id: int
    won: bool = False
    payout: float = 0


class PhaseChange(WireModel):
    phase: str


class HoleCards(WireModel):
    cards: tuple[Card, ...] = ()


class CommunityCards(WireModel):
    cards: tuple[Card, ...] = ()
    phase: str


class HandStrength(WireModel):
    hand_name: str


class VirtualChips(WireModel):
    my_stack: int = 0
    opponent_stack: int = 0
    pot: int = 0


class BotMatch(WireModel):
    game_id: int
    bot_label: str


class Showdown(WireModel):
    result: Any = None
