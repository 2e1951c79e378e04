from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from . import trajectory


def _zeros() -> np.ndarray:
    return np.zeros(3, dtype=np.float64)


@dataclass
class GrenadeRecord:
    """A player's grenade slot. ``origin``/``velocity`` only mean something while active."""

    active: bool = False
    origin: np.ndarray = field(default_factory=_zeros)  # float64[3], world units
    velocity: np.ndarray = field(default_factory=_zeros)  # float64[3], multiples of shot speed
    launch_time: float = 0.0

    def launch(self, origin: np.ndarray, velocity: np.ndarray, now: float) -> None:
        self.active = True
        self.origin = trajectory.as_vec3(origin)
        self.velocity = trajectory.as_vec3(velocity)
        self.launch_time = float(now)

    def clear(self) -> None:
        self.active = False
        self.origin = _zeros()
        self.velocity = _zeros()
        self.launch_time = 0.0

    def position(self, now: float, shot_speed: float) -> np.ndarray:
        return trajectory.position(self.origin, self.velocity, now - self.launch_time, shot_speed)

    def is_expired(self, now: float, shot_speed: float, shot_range: float) -> bool:
        return trajectory.is_expired(self.origin, self.velocity, self.launch_time, now, shot_speed, shot_range)
