from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from ..config import BallisticsConfig, GrenadeConfig
    from .player import PlayerState


@dataclass(frozen=True)
class LaunchSolution:
    center: np.ndarray  # float64[3], logical grenade origin
    velocity: np.ndarray  # float64[3], shared by the grenade and both side shots
    side_positions: tuple[np.ndarray, np.ndarray]


def _yaw_to_forward_right(yaw: float) -> tuple[np.ndarray, np.ndarray]:
    c = math.cos(yaw)
    s = math.sin(yaw)
    forward = np.asarray([c, s, 0.0], dtype=np.float64)
    right = np.asarray([-s, c, 0.0], dtype=np.float64)
    return forward, right


def solve_launch(
    pos: np.ndarray,
    yaw: float,
    vertical_speed: float,
    grenade: GrenadeConfig,
    ballistics: BallisticsConfig,
    perturbation: float = 0.0,
) -> LaunchSolution:
    """
    Launch geometry for a grenade fired from ``pos`` facing ``yaw``.

    The perturbation only bends the velocity; both spawn points stay on the
    unperturbed muzzle line. The side shots sit ``grenade.width`` either side of
    the center, which is what the tracker follows.
    """
    forward, right = _yaw_to_forward_right(yaw)

    center = np.asarray(pos, dtype=np.float64) + forward * ballistics.muzzle_front
    center[2] += ballistics.muzzle_height

    offset = right * grenade.width
    side_positions = (center + offset, center - offset)

    heading = yaw + perturbation
    vel = np.asarray(
        [
            math.cos(heading) * grenade.speed_factor,
            math.sin(heading) * grenade.speed_factor,
            math.sin(abs(perturbation)),
        ],
        dtype=np.float64,
    )
    if grenade.vertical_velocity and ballistics.shot_speed > 0.0:
        vel[2] += vertical_speed / ballistics.shot_speed

    return LaunchSolution(center=center, velocity=vel, side_positions=side_positions)


def solve_launch_for(
    player: PlayerState,
    grenade: GrenadeConfig,
    ballistics: BallisticsConfig,
    perturbation: float = 0.0,
) -> LaunchSolution:
    return solve_launch(player.pos, player.yaw, float(player.vel[2]), grenade, ballistics, perturbation)
