"""
Poker Arena Sync - Realtime Event Definitions

Maps Socket.IO channel names to domain events, decodes message bodies,
and lists the timed follow-up events a dispatched event requires.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import TypeAdapter

from src.arena import models
from src.arena.events import ArenaEvent, EventPayload, clear_result
from src.arena.state import SessionState
from src.config.settings import Settings

# Map server channel names to domain events
CHANNEL_EVENTS: dict[str, ArenaEvent] = {
    "connection:initialState": ArenaEvent.INITIAL_STATE,
    "game:created": ArenaEvent.GAME_CREATED,
    "game:joined": ArenaEvent.GAME_JOINED,
    "game:result": ArenaEvent.GAME_RESULT,
    "game:phaseChange": ArenaEvent.PHASE_CHANGE,
    "game:holeCards": ArenaEvent.HOLE_CARDS,
    "game:communityCards": ArenaEvent.COMMUNITY_CARDS,
    "game:handStrength": ArenaEvent.HAND_STRENGTH,
    "game:virtualChips": ArenaEvent.VIRTUAL_CHIPS,
    "game:botMatch": ArenaEvent.BOT_MATCH,
    "game:showdown": ArenaEvent.SHOWDOWN,
    "stats:agentUpdate": ArenaEvent.AGENT_STATS,
    "stats:botUpdate": ArenaEvent.BOT_STATS,
    "arena:tableState": ArenaEvent.TABLE_STATE,
    "arena:handResult": ArenaEvent.HAND_RESULT,
    "arena:status": ArenaEvent.ARENA_STATUS,
    "room:list": ArenaEvent.ROOMS_REPLACED,
    "leaderboard:update": ArenaEvent.LEADERBOARD_REPLACED,
    "settlement:progress": ArenaEvent.SETTLEMENT_PROGRESS,
    "settlement:complete": ArenaEvent.SETTLEMENT_COMPLETE,
    "settlement:error": ArenaEvent.SETTLEMENT_ERROR,
    "agent:intent": ArenaEvent.AGENT_INTENT,
    "wallet:info": ArenaEvent.WALLET_INFO,
    "log": ArenaEvent.LOG_APPENDED,
}

# Body schema per event; events missing here carry no body
_DECODERS: dict[ArenaEvent, TypeAdapter] = {
    ArenaEvent.INITIAL_STATE: TypeAdapter(models.InitialState),
    ArenaEvent.GAME_CREATED: TypeAdapter(models.GameCreated),
    ArenaEvent.GAME_JOINED: TypeAdapter(models.GameJoined),
    ArenaEvent.GAME_RESULT: TypeAdapter(models.GameResult),
    ArenaEvent.PHASE_CHANGE: TypeAdapter(models.PhaseChange),
    ArenaEvent.HOLE_CARDS: TypeAdapter(models.HoleCards),
    ArenaEvent.COMMUNITY_CARDS: TypeAdapter(models.CommunityCards),
    ArenaEvent.HAND_STRENGTH: TypeAdapter(models.HandStrength),
    ArenaEvent.VIRTUAL_CHIPS: TypeAdapter(models.VirtualChips),
    ArenaEvent.BOT_MATCH: TypeAdapter(models.BotMatch),
    ArenaEvent.SHOWDOWN: TypeAdapter(models.Showdown),
    ArenaEvent.AGENT_STATS: TypeAdapter(models.AgentStats),
    ArenaEvent.BOT_STATS: TypeAdapter(models.BotStats),
    ArenaEvent.TABLE_STATE: TypeAdapter(models.TableStatePayload),
    ArenaEvent.HAND_RESULT: TypeAdapter(models.HandResult),
    ArenaEvent.ARENA_STATUS: TypeAdapter(models.ArenaStatus),
    ArenaEvent.ROOMS_REPLACED: TypeAdapter(tuple[models.ArenaRoom, ...]),
    ArenaEvent.LEADERBOARD_REPLACED: TypeAdapter(tuple[models.LeaderboardEntry, ...]),
    ArenaEvent.SETTLEMENT_PROGRESS: TypeAdapter(models.SettlementProgress),
    ArenaEvent.SETTLEMENT_COMPLETE: TypeAdapter(models.SettlementComplete),
    ArenaEvent.SETTLEMENT_ERROR: TypeAdapter(models.SettlementError),
    ArenaEvent.AGENT_INTENT: TypeAdapter(models.AgentIntent),
    ArenaEvent.WALLET_INFO: TypeAdapter(models.WalletInfo),
    ArenaEvent.LOG_APPENDED: TypeAdapter(models.ActionLogEntry),
}


def classify_channel(channel: str) -> ArenaEvent | None:
    """Determine the domain event for an inbound channel name."""
    return CHANNEL_EVENTS.get(channel)


def decode_body(event: ArenaEvent, body: Any) -> Any:
    """Validate a raw message body into the event's payload model.

    Bodies that arrive as JSON text are parsed first.

    Raises:
        pydantic.ValidationError: If the body is not valid JSON or does
            not match the schema.
    """
    decoder = _DECODERS.get(event)
    if decoder is None:
        return body
    if isinstance(body, (str, bytes)):
        return decoder.validate_json(body)
    return decoder.validate_python(body)


def decode_message(channel: str, body: Any) -> EventPayload | None:
    """Build the domain event for an inbound message.

    Returns ``None`` for unknown channels. Malformed bodies raise
    ``pydantic.ValidationError``.
    """
    event = classify_channel(channel)
    if event is None:
        return None
    return EventPayload(event=event, data=decode_body(event, body))


@dataclass(frozen=True)
class ScheduledEvent:
    """An event to dispatch ``delay`` seconds from now."""

    delay: float
    payload: EventPayload


def scheduled_follow_ups(
    payload: EventPayload,
    settings: Settings,
    state: SessionState | None = None,
) -> list[ScheduledEvent]:
    """Timed events to schedule after ``payload`` has been dispatched.

    ``state`` is the snapshot the dispatch produced. A hand result without
    a table id was applied to that snapshot's active table, so its clear
    is pinned to that table rather than to whichever one is active later.

    Follow-ups are never cancelled; each one is a no-op when the state it
    targets has already moved on.
    """
    if payload.event is ArenaEvent.HAND_RESULT:
        result: models.HandResult = payload.data
        table_id = result.table_id
        if table_id is None and state is not None:
            table_id = state.active_table_id
        return [
            ScheduledEvent(
                delay=settings.result_clear_seconds,
                payload=clear_result(table_id, result.hand_number),
            )
        ]
    if payload.event is ArenaEvent.SETTLEMENT_COMPLETE:
        return [
            ScheduledEvent(
                delay=settings.flash_clear_seconds,
                payload=EventPayload(ArenaEvent.SETTLEMENT_FLASH_CLEARED),
            )
        ]
    return []
