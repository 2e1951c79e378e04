from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Union


class EventKind(IntEnum):
    SHOT_FIRED = 0  # A player pulled the trigger
    PLAYER_JOIN = 1
    PLAYER_PART = 2  # Disconnect or kick
    PLAYER_DIE = 3  # Killer fields may be rewritten before the host finalizes


@dataclass(frozen=True)
class ShotFiredEvent:
    player_id: int
    shot_id: int = 0

    @property
    def kind(self) -> EventKind:
        return EventKind.SHOT_FIRED


@dataclass(frozen=True)
class PlayerJoinEvent:
    player_id: int

    @property
    def kind(self) -> EventKind:
        return EventKind.PLAYER_JOIN


@dataclass(frozen=True)
class PlayerPartEvent:
    player_id: int

    @property
    def kind(self) -> EventKind:
        return EventKind.PLAYER_PART


@dataclass
class PlayerDieEvent:
    player_id: int  # victim
    killer_id: int | None
    killer_team: str | None
    shot_guid: int | None = None  # server shot that caused the death, if any

    @property
    def kind(self) -> EventKind:
        return EventKind.PLAYER_DIE


Event = Union[ShotFiredEvent, PlayerJoinEvent, PlayerPartEvent, PlayerDieEvent]
