"""
Poker Arena Sync - Action Log Humanizer

Turns raw action-log messages into short readable lines. Servers often log
``"<event>: {json}"`` or a bare JSON object; those are decoded and matched
against known payload shapes in a fixed priority order, falling back to a
generic key/value summary. Pure functions, no state.
"""

from __future__ import annotations

import json
import re
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

_JSON_SUFFIX = re.compile(r"^[\w:.]+:\s*(\{.+\})$", re.DOTALL)

EVENT_ICONS: dict[str, str] = {
    "game:created": "+",
    "game:joined": ">",
    "game:result": "*",
    "game:phaseChange": "#",
    "game:holeCards": "[]",
    "game:communityCards": "||",
    "game:handStrength": "^",
    "game:agentAction": ">>",
    "game:opponentAction": "<<",
    "game:virtualChips": "$",
    "game:showdown": "!",
    "game:botMatch": "@",
    "arena:tableState": "~",
    "arena:handResult": "*",
}


def event_icon(event: str) -> str:
    """Short marker for a log line's event."""
    return EVENT_ICONS.get(event, "-")


class _Summary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class _TableStateSummary(_Summary):
    phase: Any = None
    seats: Any = None
    hand_number: Any = None
    active_player_id: Any = None

    def render(self) -> str:
        hand = "" if self.hand_number is None else self.hand_number
        phase = "?" if self.phase is None else self.phase
        turn = f" - {self.active_player_id}'s turn" if self.active_player_id else ""
        return f"Hand #{hand} {phase}{turn}"


class _WinnerSummary(_Summary):
    player_id: Any = None
    amount: Any = None
    hand_description: Any = None

    def render(self) -> str:
        amount = 0 if self.amount is None else self.amount
        text = f"{self.player_id or '?'} won {amount}"
        if self.hand_description:
            text += f" ({self.hand_description})"
        return text


class _HandResultSummary(_Summary):
    winners: Any = None
    hand_number: Any = None

    def render(self) -> str:
        hand = "" if self.hand_number is None else self.hand_number
        if not isinstance(self.winners, list) or not self.winners:
            return f"Hand #{hand} complete"
        names = [
            _WinnerSummary.model_validate(w if isinstance(w, dict) else {}).render()
            for w in self.winners
        ]
        return f"Hand #{hand}: {', '.join(names)}"


class _ActionSummary(_Summary):
    action: Any
    amount: Any = None
    reasoning: Any = None
    game_id: Any = None
    hand_number: Any = None

    def render(self) -> str:
        ref = self.game_id if self.game_id is not None else self.hand_number
        msg = f"#{ref}: " if ref else ""
        msg += str(self.action)
        if isinstance(self.amount, (int, float)) and self.amount > 0:
            msg += f" {self.amount}"
        if self.reasoning:
            msg += f" - {self.reasoning}"
        return msg


class _SeatSummary(_Summary):
    index: Any
    player_id: Any
    player_name: Any = None
    stack: Any = None
    status: Any = None

    def render(self) -> str:
        name = self.player_name or self.player_id
        stack = 0 if self.stack is None else self.stack
        status = self.status or ""
        return f"Seat {self.index}: {name} ({stack}) {status}".rstrip()


def _table_state_hint(event: str, obj: dict[str, Any]) -> bool:
    return event == "arena:tableState" or ("phase" in obj and "seats" in obj)


def _hand_result_hint(event: str, obj: dict[str, Any]) -> bool:
    return event == "arena:handResult" or "winners" in obj


def _action_hint(event: str, obj: dict[str, Any]) -> bool:
    return bool(obj.get("action"))


def _seat_hint(event: str, obj: dict[str, Any]) -> bool:
    return "index" in obj and "playerId" in obj


# Checked in order; the first shape that matches and validates wins
_SHAPES: tuple[tuple[Callable[[str, dict[str, Any]], bool], type[_Summary]], ...] = (
    (_table_state_hint, _TableStateSummary),
    (_hand_result_hint, _HandResultSummary),
    (_action_hint, _ActionSummary),
    (_seat_hint, _SeatSummary),
)


def _generic_summary(obj: dict[str, Any]) -> str:
    parts: list[str] = []
    if obj.get("gameId"):
        parts.append(f"#{obj['gameId']}")
    for key in ("phase", "display", "handName"):
        if obj.get(key):
            parts.append(str(obj[key]))
    if obj.get("result"):
        parts.append(str(obj["result"]))
    if obj.get("botLabel"):
        parts.append(f"vs {obj['botLabel']}")
    if "won" in obj:
        parts.append("WIN" if obj["won"] else "LOSS")
    if obj.get("payout"):
        parts.append(f"+{obj['payout']}")
    if parts:
        return " ".join(parts)

    keys = [k for k in obj if k != "timestamp"][:4]
    return ", ".join(
        f"{k}: [...]" if obj[k] is None or isinstance(obj[k], (dict, list)) else f"{k}: {obj[k]}"
        for k in keys
    )


def format_payload(event: str, obj: dict[str, Any]) -> str:
    """Summarize a decoded payload for the given event name."""
    for hint, shape in _SHAPES:
        if not hint(event, obj):
            continue
        try:
            return shape.model_validate(obj).render()
        except ValidationError:
            continue
    return _generic_summary(obj)


def _decode_object(text: str) -> dict[str, Any] | None:
    try:
        obj = json.loads(text)
    except ValueError:
        return None
    return obj if isinstance(obj, dict) else None


def humanize(event: str, raw: str) -> str:
    """Readable text for a raw log message.

    Args:
        event: Channel name the entry was logged under
        raw: Message text as received

    Returns:
        A summary when the message carries a JSON object, else ``raw``
    """
    match = _JSON_SUFFIX.match(raw)
    if match:
        obj = _decode_object(match.group(1))
        if obj is not None:
            return format_payload(event, obj)

    if raw.startswith("{") and raw.endswith("}"):
        obj = _decode_object(raw)
        if obj is not None:
            return format_payload(event, obj)

    return raw
