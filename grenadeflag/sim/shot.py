from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np


class AttributionKind(str, Enum):
    GRENADE = "GN"


@dataclass(frozen=True)
class ShotAttribution:
    """Who gets credit for kills caused by a server shot."""

    kind: AttributionKind
    owner: int  # player id

    @classmethod
    def grenade(cls, owner: int) -> ShotAttribution:
        return cls(kind=AttributionKind.GRENADE, owner=owner)

    @property
    def is_grenade(self) -> bool:
        return self.kind is AttributionKind.GRENADE


@dataclass
class ServerShot:
    guid: int
    kind: str  # "PZ" | "SW" | ...
    pos: np.ndarray  # float64[3]
    vel: np.ndarray  # float64[3]
    team: str | None
    fired_at: float
    attribution: ShotAttribution | None = None
