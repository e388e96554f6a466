"""
Poker Arena Sync - Outbound Commands

Fire-and-forget requests to the arena server. Commands are plain values;
only the transport turns them into Socket.IO emits.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from src.arena.models import ArenaConfig, RoomConfig


@dataclass(frozen=True)
class Command:
    """Base for outbound commands."""

    channel: ClassVar[str] = ""

    def to_wire(self) -> Any:
        """Message body to emit, or None for body-less commands."""
        return None


@dataclass(frozen=True)
class StartArena(Command):
    channel: ClassVar[str] = "arena:start"
    config: ArenaConfig = field(default_factory=ArenaConfig)

    def to_wire(self) -> dict[str, Any]:
        return self.config.to_wire()


@dataclass(frozen=True)
class StopArena(Command):
    channel: ClassVar[str] = "arena:stop"


@dataclass(frozen=True)
class CreateRoom(Command):
    channel: ClassVar[str] = "room:create"
    config: RoomConfig = field(default_factory=lambda: RoomConfig(name="Room"))

    def to_wire(self) -> dict[str, Any]:
        return self.config.to_wire()


@dataclass(frozen=True)
class JoinRoom(Command):
    channel: ClassVar[str] = "room:join"
    room_id: str = ""

    def to_wire(self) -> dict[str, Any]:
        return {"roomId": self.room_id}


@dataclass(frozen=True)
class DeleteRoom(Command):
    channel: ClassVar[str] = "room:delete"
    room_id: str = ""

    def to_wire(self) -> dict[str, Any]:
        return {"roomId": self.room_id}


@dataclass(frozen=True)
class RequestLeaderboard(Command):
    channel: ClassVar[str] = "leaderboard:get"
    sort_by: str = "winRate"

    def to_wire(self) -> dict[str, Any]:
        return {"sortBy": self.sort_by}


@dataclass(frozen=True)
class WalletAuth(Command):
    """Signed proof of wallet ownership; acknowledged by the server."""

    channel: ClassVar[str] = "wallet:auth"
    address: str = ""
    signature: str = ""
    message: str = ""

    def to_wire(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "signature": self.signature,
            "message": self.message,
        }


@dataclass(frozen=True)
class DisconnectWallet(Command):
    channel: ClassVar[str] = "wallet:disconnect"
