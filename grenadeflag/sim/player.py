from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


def _zeros() -> np.ndarray:
    return np.zeros(3, dtype=np.float64)


@dataclass
class PlayerState:
    """What the host knows about a player at the moment an event fires."""

    player_id: int
    team: str
    callsign: str = ""
    pos: np.ndarray = field(default_factory=_zeros)  # float64[3], world units
    vel: np.ndarray = field(default_factory=_zeros)  # float64[3], world units / s
    yaw: float = 0.0  # radians, heading in the XY plane
    flag: str | None = None  # abbreviation of the carried flag
    alive: bool = True

    def has_flag(self, abbrev: str) -> bool:
        return self.flag == abbrev
