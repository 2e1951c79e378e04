from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .constants import (
    VAR_GRENADE_ACCURACY,
    VAR_GRENADE_SPEED_FACTOR,
    VAR_GRENADE_VERTICAL_VELOCITY,
    VAR_GRENADE_WIDTH,
    VAR_MUZZLE_FRONT,
    VAR_MUZZLE_HEIGHT,
    VAR_SHOT_RANGE,
    VAR_SHOT_SPEED,
)

if TYPE_CHECKING:
    from .host import Host


@dataclass(frozen=True)
class BallisticsConfig:
    """Ambient shot ballistics owned by the host.

    Defaults match a stock server: 100 units/s shots with a 350 unit range,
    fired from just ahead of the tank hull.
    """

    shot_speed: float = 100.0
    shot_range: float = 350.0
    muzzle_front: float = 4.42
    muzzle_height: float = 1.57

    @classmethod
    def from_host(cls, host: Host) -> BallisticsConfig:
        return cls(
            shot_speed=host.get_float(VAR_SHOT_SPEED),
            shot_range=host.get_float(VAR_SHOT_RANGE),
            muzzle_front=host.get_float(VAR_MUZZLE_FRONT),
            muzzle_height=host.get_float(VAR_MUZZLE_HEIGHT),
        )

    def as_variables(self) -> dict[str, float]:
        return {
            VAR_SHOT_SPEED: self.shot_speed,
            VAR_SHOT_RANGE: self.shot_range,
            VAR_MUZZLE_FRONT: self.muzzle_front,
            VAR_MUZZLE_HEIGHT: self.muzzle_height,
        }


@dataclass(frozen=True)
class GrenadeConfig:
    # Multiplier on the ambient shot speed for the grenade's horizontal velocity.
    speed_factor: float = 4.0
    # Add the shooter's own vertical velocity (normalized by shot speed) at launch.
    vertical_velocity: bool = False
    # Distance from the logical grenade to each visible side shot.
    width: float = 2.0
    # Max heading perturbation in radians. Lower is better; 0 is perfect accuracy.
    accuracy: float = 0.02

    @classmethod
    def from_host(cls, host: Host) -> GrenadeConfig:
        return cls(
            speed_factor=host.get_float(VAR_GRENADE_SPEED_FACTOR),
            vertical_velocity=host.get_bool(VAR_GRENADE_VERTICAL_VELOCITY),
            width=host.get_float(VAR_GRENADE_WIDTH),
            accuracy=host.get_float(VAR_GRENADE_ACCURACY),
        )

    def as_variables(self) -> dict[str, float | bool]:
        return {
            VAR_GRENADE_SPEED_FACTOR: self.speed_factor,
            VAR_GRENADE_VERTICAL_VELOCITY: self.vertical_velocity,
            VAR_GRENADE_WIDTH: self.width,
            VAR_GRENADE_ACCURACY: self.accuracy,
        }


DEFAULT_GRENADE = GrenadeConfig()
DEFAULT_BALLISTICS = BallisticsConfig()
