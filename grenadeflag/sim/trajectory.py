"""Linear ballistic projection for logical grenades.

Pure functions only. A grenade's velocity is a unitless multiplier of the host
shot speed, so every position is ``origin + velocity * elapsed * shot_speed``.
There is no gravity or drag term: any vertical motion comes from the launch
velocity itself.
"""

from __future__ import annotations

import numpy as np

from ..constants import GROUND_LEVEL_Z


def as_vec3(values) -> np.ndarray:
    """Copy ``values`` into a fresh float64[3] array."""
    vec = np.array(values, dtype=np.float64)
    if vec.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {vec.shape}")
    return vec


def position(origin: np.ndarray, velocity: np.ndarray, elapsed_s: float, shot_speed: float) -> np.ndarray:
    """Projected position after ``elapsed_s`` seconds. Always returns a new array."""
    scale = float(elapsed_s) * float(shot_speed)
    return as_vec3(origin) + as_vec3(velocity) * scale


def elapsed_distance(elapsed_s: float, shot_speed: float) -> float:
    """Distance along the trajectory, measured in shot-speed units."""
    return float(elapsed_s) * float(shot_speed)


def is_expired(
    origin: np.ndarray,
    velocity: np.ndarray,
    launch_time: float,
    now: float,
    shot_speed: float,
    shot_range: float,
) -> bool:
    """Whether the grenade hit the ground or ran out of range by ``now``.

    Either condition is sufficient. Zero elapsed time is never expired; with a
    zero range or shot speed any positive elapsed time is.
    """
    elapsed = float(now) - float(launch_time)
    if elapsed <= 0.0:
        return False

    current = position(origin, velocity, elapsed, shot_speed)
    if current[2] <= GROUND_LEVEL_Z:
        return True
    # A disabled shot speed counts as an exhausted range.
    if float(shot_speed) <= 0.0:
        return True
    return elapsed_distance(elapsed, shot_speed) >= float(shot_range)
