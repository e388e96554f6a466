"""Tests for src/realtime/commands.py — outbound command bodies."""

from src.arena.models import ArenaConfig, RoomConfig
from src.realtime.commands import (
    CreateRoom,
    DeleteRoom,
    DisconnectWallet,
    JoinRoom,
    RequestLeaderboard,
    StartArena,
    StopArena,
    WalletAuth,
)


class TestCommands:
    def test_start_arena(self):
        command = StartArena(ArenaConfig(bot_count=4, max_hands=50, table_count=3))
        assert command.channel == "arena:start"
        assert command.to_wire() == {
            "botCount": 4,
            "maxHands": 50,
            "smallBlind": 5,
            "bigBlind": 10,
            "startingStack": 1000,
            "tableCount": 3,
        }

    def test_stop_arena_has_no_body(self):
        assert StopArena.channel == "arena:stop"
        assert StopArena().to_wire() is None

    def test_room_commands(self):
        create = CreateRoom(RoomConfig(name="Sharks", max_players=4))
        assert create.channel == "room:create"
        assert create.to_wire()["maxPlayers"] == 4
        assert JoinRoom("r1").to_wire() == {"roomId": "r1"}
        assert JoinRoom.channel == "room:join"
        assert DeleteRoom("r1").channel == "room:delete"

    def test_leaderboard_request(self):
        assert RequestLeaderboard("totalProfit").to_wire() == {"sortBy": "totalProfit"}

    def test_wallet_commands(self):
        auth = WalletAuth(address="0xabc", signature="0xsig", message="Sign in")
        assert auth.channel == "wallet:auth"
        assert auth.to_wire() == {"address": "0xabc", "signature": "0xsig", "message": "Sign in"}
        assert DisconnectWallet().channel == "wallet:disconnect"

    def test_commands_are_values(self):
        assert JoinRoom("r1") == JoinRoom("r1")
