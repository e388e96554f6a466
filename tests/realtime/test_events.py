"""Tests for src/realtime/events.py — channel classification and follow-ups."""

import pytest
from pydantic import ValidationError

from src.arena.events import ArenaEvent, EventPayload
from src.arena.models import ArenaRoom, HandResult, TableStatePayload
from src.arena.reducer import reduce
from src.arena.state import SessionState
from src.realtime.events import (
    CHANNEL_EVENTS,
    _DECODERS,
    classify_channel,
    decode_body,
    decode_message,
    scheduled_follow_ups,
)


# ── classify_channel ──────────────────────────────────────────────────

class TestClassifyChannel:
    @pytest.mark.parametrize(
        "channel,expected",
        [
            ("arena:tableState", ArenaEvent.TABLE_STATE),
            ("arena:handResult", ArenaEvent.HAND_RESULT),
            ("arena:status", ArenaEvent.ARENA_STATUS),
            ("room:list", ArenaEvent.ROOMS_REPLACED),
            ("leaderboard:update", ArenaEvent.LEADERBOARD_REPLACED),
            ("settlement:complete", ArenaEvent.SETTLEMENT_COMPLETE),
            ("connection:initialState", ArenaEvent.INITIAL_STATE),
            ("log", ArenaEvent.LOG_APPENDED),
        ],
    )
    def test_known_channels(self, channel, expected):
        assert classify_channel(channel) == expected

    def test_unknown_channel(self):
        assert classify_channel("arena:somethingNew") is None

    def test_local_events_have_no_channel(self):
        local = {
            ArenaEvent.CONNECTIVITY_CHANGED,
            ArenaEvent.RESULT_CLEARED,
            ArenaEvent.SETTLEMENT_FLASH_CLEARED,
            ArenaEvent.ACTIVE_TABLE_CHANGED,
            ArenaEvent.LOGS_REPLACED,
            ArenaEvent.WIN_HISTORY_REPLACED,
            ArenaEvent.WALLET_AUTH_SUCCEEDED,
            ArenaEvent.WALLET_DISCONNECTED,
        }
        assert local.isdisjoint(CHANNEL_EVENTS.values())

    def test_every_decoder_has_a_channel(self):
        assert set(_DECODERS) <= set(CHANNEL_EVENTS.values())

    def test_channel_events_are_unique(self):
        values = list(CHANNEL_EVENTS.values())
        assert len(values) == len(set(values))


# ── decode_message ────────────────────────────────────────────────────

class TestDecodeMessage:
    def test_table_state(self, table_state_body):
        payload = decode_message("arena:tableState", table_state_body("T3"))
        assert payload.event == ArenaEvent.TABLE_STATE
        assert isinstance(payload.data, TableStatePayload)
        assert payload.data.table_id == "T3"

    def test_list_payload(self):
        payload = decode_message("room:list", [{"id": "r1", "name": "High Rollers"}])
        assert isinstance(payload.data, tuple)
        assert isinstance(payload.data[0], ArenaRoom)

    def test_json_text_body(self, hand_result_body):
        import json

        payload = decode_message("arena:handResult", json.dumps(hand_result_body("T1", 5)))
        assert isinstance(payload.data, HandResult)
        assert payload.data.hand_number == 5

    def test_unknown_channel_returns_none(self):
        assert decode_message("chat:message", {"text": "hi"}) is None

    def test_malformed_body_raises(self):
        with pytest.raises(ValidationError):
            decode_message("arena:tableState", {"handNumber": "not-a-number"})

    def test_malformed_json_raises(self):
        with pytest.raises(ValueError):
            decode_message("arena:tableState", "{bad json")

    def test_body_less_event_passes_through(self):
        assert decode_body(ArenaEvent.RESULT_CLEARED, None) is None


# ── scheduled_follow_ups ─────────────────────────────────────────────

class TestScheduledFollowUps:
    def test_hand_result_schedules_clear(self, event, hand_result_body, settings):
        follow_ups = scheduled_follow_ups(event("arena:handResult", hand_result_body("T2", 8)), settings)

        assert len(follow_ups) == 1
        assert follow_ups[0].delay == 3.0
        clear = follow_ups[0].payload
        assert clear.event == ArenaEvent.RESULT_CLEARED
        assert clear.table_id == "T2"
        assert clear.hand_number == 8

    def test_result_without_table_and_state_leaves_target_open(self, event, hand_result_body, settings):
        follow_ups = scheduled_follow_ups(event("arena:handResult", hand_result_body(None)), settings)
        assert follow_ups[0].payload.table_id is None

    def test_result_without_table_pinned_to_active_table(
        self, event, hand_result_body, table_state_body, settings
    ):
        state = reduce(SessionState(), event("arena:tableState", table_state_body("T1")))
        result = event("arena:handResult", hand_result_body(None, 5))
        state = reduce(state, result)

        clear = scheduled_follow_ups(result, settings, state)[0].payload

        assert (clear.table_id, clear.hand_number) == ("T1", 5)

    def test_explicit_table_id_wins_over_state(
        self, event, hand_result_body, table_state_body, settings
    ):
        state = reduce(SessionState(), event("arena:tableState", table_state_body("T1")))
        follow_ups = scheduled_follow_ups(
            event("arena:handResult", hand_result_body("T2", 8)), settings, state
        )
        assert follow_ups[0].payload.table_id == "T2"

    def test_settlement_complete_schedules_flash_clear(self, event, settlement_body, settings):
        follow_ups = scheduled_follow_ups(event("settlement:complete", settlement_body(1)), settings)

        assert len(follow_ups) == 1
        assert follow_ups[0].delay == 2.0
        assert follow_ups[0].payload.event == ArenaEvent.SETTLEMENT_FLASH_CLEARED

    def test_delays_come_from_settings(self, event, settlement_body, settings):
        tuned = settings.model_copy(update={"flash_clear_seconds": 0.5})
        follow_ups = scheduled_follow_ups(event("settlement:complete", settlement_body(1)), tuned)
        assert follow_ups[0].delay == 0.5

    def test_other_events_schedule_nothing(self, event, table_state_body, settings, connected):
        assert scheduled_follow_ups(event("arena:tableState", table_state_body()), settings) == []
        assert scheduled_follow_ups(connected, settings) == []
        assert scheduled_follow_ups(EventPayload(ArenaEvent.RESULT_CLEARED), settings) == []
