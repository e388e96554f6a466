"""
Poker Arena Sync - Test Configuration and Fixtures

Common fixtures and wire-format test data for all test modules.
"""

from typing import Any, Callable

import pytest

from src.arena.events import ArenaEvent, EventPayload
from src.arena.state import SessionState
from src.config.settings import Settings
from src.realtime.events import decode_message


# =============================================================================
# WIRE PAYLOADS (camelCase, as the arena server sends them)
# =============================================================================

def _seat(index: int, player_id: str | None, stack: int = 1000, **extra: Any) -> dict[str, Any]:
    seat = {
        "index": index,
        "playerId": player_id,
        "playerName": player_id.title() if player_id else None,
        "stack": stack,
        "status": "active" if player_id else "empty",
        "position": None,
        "betThisRound": 0,
        "isDealer": index == 0,
    }
    seat.update(extra)
    return seat


@pytest.fixture
def table_state_body() -> Callable[..., dict[str, Any]]:
    """Factory for `arena:tableState` bodies."""

    def make(table_id: str = "T1", hand_number: int = 1, **overrides: Any) -> dict[str, Any]:
        body = {
            "tableId": table_id,
            "handNumber": hand_number,
            "phase": "PREFLOP",
            "seats": [
                _seat(0, "agent", 990, betThisRound=10),
                _seat(1, "bot-1", 995, betThisRound=5),
                _seat(2, None, 0),
            ],
            "communityCards": [],
            "pots": [{"amount": 15, "eligiblePlayerIds": ["agent", "bot-1"]}],
            "currentBet": 10,
            "activePlayerId": "bot-1",
            "timestamp": 1_700_000_000_000,
        }
        body.update(overrides)
        return body

    return make


@pytest.fixture
def hand_result_body() -> Callable[..., dict[str, Any]]:
    """Factory for `arena:handResult` bodies."""

    def make(table_id: str | None = "T1", hand_number: int = 5, **overrides: Any) -> dict[str, Any]:
        body: dict[str, Any] = {
            "handNumber": hand_number,
            "winners": [
                {"playerId": "agent", "amount": 120, "handDescription": "Two Pair"}
            ],
            "boardCards": [
                {"rank": "A", "suit": "s"},
                {"rank": "K", "suit": "h"},
                {"rank": "7", "suit": "d"},
            ],
            "showdownPlayers": [],
        }
        if table_id is not None:
            body["tableId"] = table_id
        body.update(overrides)
        return body

    return make


@pytest.fixture
def log_body() -> Callable[[int], dict[str, Any]]:
    """Factory for `log` entries numbered from 1."""

    def make(n: int) -> dict[str, Any]:
        return {"id": f"log-{n}", "event": "game:agentAction", "message": f"entry {n}", "timestamp": n}

    return make


@pytest.fixture
def settlement_body() -> Callable[[int], dict[str, Any]]:
    """Factory for `settlement:complete` bodies by batch number."""

    def make(batch: int) -> dict[str, Any]:
        return {
            "roomId": "room-1",
            "batchNumber": batch,
            "handsSettled": 10,
            "txHash": f"0x{batch:04x}",
            "timestamp": batch,
        }

    return make


# =============================================================================
# DOMAIN HELPERS
# =============================================================================

@pytest.fixture
def event() -> Callable[[str, Any], EventPayload]:
    """Decode a wire message into an EventPayload, as the transport does."""

    def make(channel: str, body: Any = None) -> EventPayload:
        payload = decode_message(channel, body)
        assert payload is not None, f"unknown channel {channel}"
        return payload

    return make


@pytest.fixture
def empty_state() -> SessionState:
    """Initial all-empty session state."""
    return SessionState()


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults, independent of the local environment."""
    return Settings(
        _env_file=None,
        arena_url="http://arena.test",
        result_clear_seconds=3.0,
        flash_clear_seconds=2.0,
        auth_timeout=1.0,
        request_timeout=1.0,
    )


@pytest.fixture
def connected() -> EventPayload:
    return EventPayload(ArenaEvent.CONNECTIVITY_CHANGED, data=True)
