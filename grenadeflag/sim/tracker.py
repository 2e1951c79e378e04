from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Callable

import numpy as np

from .grenade import GrenadeRecord

if TYPE_CHECKING:
    from ..config import BallisticsConfig

logger = logging.getLogger("grenadeflag")


class TriggerAction(IntEnum):
    LAUNCH = 0
    DETONATE = 1


@dataclass(frozen=True)
class TriggerDecision:
    action: TriggerAction
    position: np.ndarray | None = None  # float64[3], set for DETONATE only


class GrenadeTracker:
    """
    Owns every player's grenade slot and decides launch vs. detonate.

    One record per joined player, created on join and dropped on part. Lookups for
    players the tracker never saw join heal themselves with a fresh unarmed record,
    since the host's event stream must never stall on this bookkeeping.
    """

    def __init__(self, clock: Callable[[], float]):
        self._clock = clock
        self._records: dict[int, GrenadeRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._records

    def now(self) -> float:
        return float(self._clock())

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def join(self, player_id: int) -> None:
        if player_id in self._records:
            logger.debug(f"Player {player_id} joined twice, replacing grenade record")
        self._records[player_id] = GrenadeRecord()

    def part(self, player_id: int) -> None:
        if self._records.pop(player_id, None) is None:
            logger.debug(f"Player {player_id} parted without a grenade record")

    def flush(self) -> None:
        self._records.clear()

    def record(self, player_id: int) -> GrenadeRecord | None:
        return self._records.get(player_id)

    def _record_for(self, player_id: int) -> GrenadeRecord:
        record = self._records.get(player_id)
        if record is None:
            logger.warning(f"No grenade record for player {player_id}, creating one")
            record = GrenadeRecord()
            self._records[player_id] = record
        return record

    def armed_players(self) -> list[int]:
        return [pid for pid, rec in self._records.items() if rec.active]

    # ------------------------------------------------------------------
    # Grenade state
    # ------------------------------------------------------------------

    def launch(self, player_id: int, origin: np.ndarray, velocity: np.ndarray) -> None:
        self._record_for(player_id).launch(origin, velocity, self.now())

    def clear(self, player_id: int) -> None:
        record = self._records.get(player_id)
        if record is not None:
            record.clear()

    def is_active(self, player_id: int) -> bool:
        record = self._records.get(player_id)
        return record is not None and record.active

    def is_expired(self, player_id: int, ballistics: BallisticsConfig) -> bool:
        record = self._records.get(player_id)
        if record is None or not record.active:
            return False
        return record.is_expired(self.now(), ballistics.shot_speed, ballistics.shot_range)

    def detonation_position(self, player_id: int, ballistics: BallisticsConfig) -> np.ndarray | None:
        """Where the player's grenade is right now, or None if nothing is in flight."""
        record = self._records.get(player_id)
        if record is None or not record.active:
            return None
        return record.position(self.now(), ballistics.shot_speed)

    def trigger(self, player_id: int, ballistics: BallisticsConfig) -> TriggerDecision:
        """Resolve a fire trigger.

        An expired grenade is cleared first and does not use up the trigger, so the
        player launches a fresh one instead. Detonating clears the record.
        """
        record = self._record_for(player_id)
        now = self.now()

        if record.active and record.is_expired(now, ballistics.shot_speed, ballistics.shot_range):
            logger.debug(f"Grenade for player {player_id} expired, clearing")
            record.clear()

        if not record.active:
            return TriggerDecision(TriggerAction.LAUNCH)

        pos = record.position(now, ballistics.shot_speed)
        record.clear()
        return TriggerDecision(TriggerAction.DETONATE, pos)
