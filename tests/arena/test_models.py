"""Tests for src/arena/models.py — wire payload decoding."""

import pytest
from pydantic import ValidationError

from src.arena.models import (
    ActionLogEntry,
    ArenaConfig,
    HandResult,
    Phase,
    SeatInfo,
    TableStatePayload,
)


class TestTableStatePayload:
    def test_camel_case_wire_names(self, table_state_body):
        payload = TableStatePayload.model_validate(table_state_body("T1", 4))
        assert payload.table_id == "T1"
        assert payload.hand_number == 4
        assert payload.active_player_id == "bot-1"
        assert payload.seats[0].bet_this_round == 10
        assert payload.seats[0].is_dealer is True
        assert payload.pots[0].eligible_player_ids == ("agent", "bot-1")

    def test_known_phase_becomes_enum(self, table_state_body):
        payload = TableStatePayload.model_validate(table_state_body(phase="RIVER"))
        assert payload.phase is Phase.RIVER

    def test_unknown_phase_kept_as_string(self, table_state_body):
        payload = TableStatePayload.model_validate(table_state_body(phase="BETWEEN_HANDS"))
        assert payload.phase == "BETWEEN_HANDS"

    def test_null_phase(self, table_state_body):
        assert TableStatePayload.model_validate(table_state_body(phase=None)).phase is None

    def test_extra_fields_ignored(self, table_state_body):
        payload = TableStatePayload.model_validate(table_state_body(futureField=123))
        assert not hasattr(payload, "futureField")

    def test_too_many_community_cards_rejected(self, table_state_body):
        cards = [{"rank": str(r), "suit": "h"} for r in range(2, 8)]
        with pytest.raises(ValidationError):
            TableStatePayload.model_validate(table_state_body(communityCards=cards))

    def test_negative_bet_rejected(self, table_state_body):
        with pytest.raises(ValidationError):
            TableStatePayload.model_validate(table_state_body(currentBet=-1))

    def test_missing_table_id_rejected(self, table_state_body):
        body = table_state_body()
        del body["tableId"]
        with pytest.raises(ValidationError):
            TableStatePayload.model_validate(body)

    def test_frozen(self, table_state_body):
        payload = TableStatePayload.model_validate(table_state_body())
        with pytest.raises(ValidationError):
            payload.current_bet = 99


class TestHandResult:
    def test_table_id_optional(self, hand_result_body):
        result = HandResult.model_validate(hand_result_body(None, 2))
        assert result.table_id is None
        assert result.winners[0].amount == 120
        assert result.winners[0].hand_description == "Two Pair"

    def test_revealed_hole_cards(self):
        seat = SeatInfo.model_validate(
            {"index": 1, "playerId": "bot", "holeCards": [{"rank": "Q", "suit": "c"}]}
        )
        assert seat.hole_cards[0].rank == "Q"


class TestToWire:
    def test_arena_config_round_names(self):
        wire = ArenaConfig(bot_count=3, table_count=2).to_wire()
        assert wire["botCount"] == 3
        assert wire["tableCount"] == 2
        assert wire["startingStack"] == 1000

    def test_populate_by_field_name(self):
        entry = ActionLogEntry(id="1", event="log", message="hello")
        assert entry.timestamp == 0
