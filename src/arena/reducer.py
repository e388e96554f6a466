"""
Poker Arena Sync - State Reducer

Pure transition function ``reduce(state, payload) -> state``. It is the
only code that builds new ``SessionState`` instances. No I/O, no timers,
no randomness: timed follow-ups are scheduled by the transport and arrive
here as ordinary events.

Every transition that touches ``tables`` or ``active_table_id`` recomputes
``active_table`` through the projector before returning.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from types import MappingProxyType
from typing import Callable, Mapping

from src.arena.events import ArenaEvent, EventPayload
from src.arena.models import HandResult, InitialState, Phase, TableStatePayload
from src.arena.projector import derive_active_table
from src.arena.state import (
    MAX_ACTION_LOG,
    MAX_SETTLEMENT_LOG,
    SessionState,
    TableSnapshot,
)

logger = logging.getLogger(__name__)

Handler = Callable[[SessionState, EventPayload], SessionState]


def _with_tables(
    state: SessionState,
    tables: Mapping[str, TableSnapshot],
    active_table_id: str | None,
    **changes,
) -> SessionState:
    """Replace the registry and active id, recomputing the flattened view."""
    return replace(
        state,
        tables=MappingProxyType(dict(tables)),
        active_table_id=active_table_id,
        active_table=derive_active_table(tables, active_table_id),
        **changes,
    )


def _cap_tail(entries: tuple, limit: int) -> tuple:
    """Keep the newest ``limit`` entries of an oldest-first log."""
    return entries[-limit:] if len(entries) > limit else entries


# -- Multi-table arena ----------------------------------------------------


def _on_table_state(state: SessionState, payload: EventPayload) -> SessionState:
    table: TableStatePayload = payload.data
    previous = state.tables.get(table.table_id)
    snapshot = TableSnapshot.from_payload(
        table, last_result=previous.last_result if previous else None
    )
    tables = {**state.tables, table.table_id: snapshot}
    # First table ever seen becomes active; never reselected afterwards
    active_id = state.active_table_id if state.active_table_id is not None else table.table_id
    return _with_tables(state, tables, active_id, arena_mode=True)


def _on_hand_result(state: SessionState, payload: EventPayload) -> SessionState:
    result: HandResult = payload.data
    target = result.table_id or state.active_table_id
    table = state.tables.get(target) if target else None
    if table is None:
        logger.debug("Hand result for unknown table %s ignored", target)
        return state
    tables = {**state.tables, target: replace(table, last_result=result)}
    return _with_tables(state, tables, state.active_table_id)


def _on_result_cleared(state: SessionState, payload: EventPayload) -> SessionState:
    target = payload.table_id or state.active_table_id
    table = state.tables.get(target) if target else None
    if table is None or table.last_result is None:
        return state
    if payload.hand_number is not None and table.last_result.hand_number != payload.hand_number:
        # A newer result arrived after this clear was scheduled
        return state
    tables = {**state.tables, target: replace(table, last_result=None)}
    return _with_tables(state, tables, state.active_table_id)


def _on_active_table_changed(state: SessionState, payload: EventPayload) -> SessionState:
    return _with_tables(state, state.tables, payload.data)


# -- Logs -----------------------------------------------------------------


def _on_log_appended(state: SessionState, payload: EventPayload) -> SessionState:
    return replace(state, action_log=_cap_tail(state.action_log + (payload.data,), MAX_ACTION_LOG))


def _on_logs_replaced(state: SessionState, payload: EventPayload) -> SessionState:
    return replace(state, action_log=_cap_tail(tuple(payload.data), MAX_ACTION_LOG))


def _on_win_history_replaced(state: SessionState, payload: EventPayload) -> SessionState:
    return replace(state, win_history=tuple(payload.data))


def _on_initial_state(state: SessionState, payload: EventPayload) -> SessionState:
    initial: InitialState = payload.data

    def keep(new, old):
        return old if new is None else new

    return replace(
        state,
        agent_stats=keep(initial.agent_stats, state.agent_stats),
        bot_stats=keep(initial.bot_stats, state.bot_stats),
        action_log=_cap_tail(initial.recent_log, MAX_ACTION_LOG),
        win_history=initial.win_history,
        wallet_info=keep(initial.wallet_info, state.wallet_info),
    )


# -- Settlement -----------------------------------------------------------


def _on_settlement_complete(state: SessionState, payload: EventPayload) -> SessionState:
    log = ((payload.data,) + state.settlement_log)[:MAX_SETTLEMENT_LOG]
    return replace(state, settlement_log=log, settlement_flash=True)


# -- Legacy single-table game ---------------------------------------------


def _on_game_created(state: SessionState, payload: EventPayload) -> SessionState:
    return replace(
        state,
        current_game_id=payload.data.game_id,
        current_phase=Phase.WAITING.value,
        hole_cards=(),
        community_cards=(),
        hand_strength=None,
        pot=0,
        my_stack=0,
        opponent_stack=0,
        opponent_label=None,
    )


def _on_bot_match(state: SessionState, payload: EventPayload) -> SessionState:
    return replace(
        state,
        current_game_id=payload.data.game_id,
        current_phase=Phase.PREFLOP.value,
        opponent_label=payload.data.bot_label,
        hole_cards=(),
        community_cards=(),
        hand_strength=None,
    )


def _on_virtual_chips(state: SessionState, payload: EventPayload) -> SessionState:
    chips = payload.data
    return replace(
        state,
        my_stack=chips.my_stack,
        opponent_stack=chips.opponent_stack,
        pot=chips.pot,
    )


def _on_community_cards(state: SessionState, payload: EventPayload) -> SessionState:
    return replace(state, community_cards=payload.data.cards, current_phase=payload.data.phase)


def _set(field_name: str, value: Callable[[EventPayload], object] = lambda p: p.data) -> Handler:
    """Handler that replaces one field with a value taken from the payload."""
    def handler(state: SessionState, payload: EventPayload) -> SessionState:
        return replace(state, **{field_name: value(payload)})
    return handler


def _phase(phase: Phase) -> Handler:
    return _set("current_phase", lambda p: phase.value)


_HANDLERS: dict[ArenaEvent, Handler] = {
    ArenaEvent.CONNECTIVITY_CHANGED: _set("connected", lambda p: bool(p.data)),
    ArenaEvent.INITIAL_STATE: _on_initial_state,
    # Legacy single-table
    ArenaEvent.GAME_CREATED: _on_game_created,
    ArenaEvent.GAME_JOINED: lambda s, p: replace(
        s, current_game_id=p.data.game_id, current_phase=Phase.WAITING.value
    ),
    ArenaEvent.GAME_RESULT: _phase(Phase.COMPLETE),
    ArenaEvent.PHASE_CHANGE: _set("current_phase", lambda p: p.data.phase),
    ArenaEvent.HOLE_CARDS: _set("hole_cards", lambda p: p.data.cards),
    ArenaEvent.COMMUNITY_CARDS: _on_community_cards,
    ArenaEvent.HAND_STRENGTH: _set("hand_strength", lambda p: p.data.hand_name),
    ArenaEvent.VIRTUAL_CHIPS: _on_virtual_chips,
    ArenaEvent.BOT_MATCH: _on_bot_match,
    ArenaEvent.SHOWDOWN: _phase(Phase.SHOWDOWN),
    # Stats and logs
    ArenaEvent.AGENT_STATS: _set("agent_stats"),
    ArenaEvent.BOT_STATS: _set("bot_stats"),
    ArenaEvent.LOG_APPENDED: _on_log_appended,
    ArenaEvent.LOGS_REPLACED: _on_logs_replaced,
    ArenaEvent.WIN_HISTORY_REPLACED: _on_win_history_replaced,
    # Multi-table arena
    ArenaEvent.TABLE_STATE: _on_table_state,
    ArenaEvent.HAND_RESULT: _on_hand_result,
    ArenaEvent.RESULT_CLEARED: _on_result_cleared,
    ArenaEvent.ACTIVE_TABLE_CHANGED: _on_active_table_changed,
    ArenaEvent.ARENA_STATUS: _set("arena_status"),
    ArenaEvent.ROOMS_REPLACED: _set("rooms", lambda p: tuple(p.data)),
    ArenaEvent.LEADERBOARD_REPLACED: _set("leaderboard", lambda p: tuple(p.data)),
    # Settlement
    ArenaEvent.SETTLEMENT_PROGRESS: _set("settlement_progress"),
    ArenaEvent.SETTLEMENT_COMPLETE: _on_settlement_complete,
    ArenaEvent.SETTLEMENT_ERROR: _set("settlement_progress", lambda p: None),
    ArenaEvent.SETTLEMENT_FLASH_CLEARED: _set("settlement_flash", lambda p: False),
    ArenaEvent.AGENT_INTENT: _set("agent_intent"),
    # Wallet
    ArenaEvent.WALLET_INFO: _set("wallet_info"),
    ArenaEvent.WALLET_AUTH_SUCCEEDED: _set("user_wallet_address"),
    ArenaEvent.WALLET_DISCONNECTED: _set("user_wallet_address", lambda p: None),
}


def reduce(state: SessionState, payload: EventPayload) -> SessionState:
    """Apply one event and return the next state.

    Events without a handler return ``state`` unchanged.

    Args:
        state: Current snapshot (never mutated)
        payload: Event to apply

    Returns:
        The next snapshot, or ``state`` itself for no-op transitions
    """
    handler = _HANDLERS.get(payload.event)
    if handler is None:
        return state
    return handler(state, payload)
