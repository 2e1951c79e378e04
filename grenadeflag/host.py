"""The slice of the game server a plugin is allowed to touch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Protocol

if TYPE_CHECKING:
    import numpy as np

    from .events import Event, EventKind
    from .sim.player import PlayerState
    from .sim.shot import ShotAttribution


EventHandler = Callable[["Event"], None]


@dataclass(frozen=True)
class FlagSpec:
    abbrev: str
    name: str
    help: str
    good: bool = True


class Host(Protocol):
    """Game server services consumed by plugins.

    Variable reads never fail: unknown names read as 0.0 / False, matching how
    the server's variable store treats unset values.
    """

    def player(self, player_id: int) -> PlayerState | None: ...

    def player_team(self, player_id: int) -> str | None: ...

    def current_time(self) -> float: ...

    def uniform(self, low: float, high: float) -> float: ...

    def get_float(self, name: str) -> float: ...

    def get_bool(self, name: str) -> bool: ...

    def register_variable(self, name: str, default: float | bool) -> None: ...

    def register_custom_flag(self, flag: FlagSpec) -> None: ...

    def register_event(self, kind: EventKind, handler: EventHandler) -> None: ...

    def remove_handler(self, handler: EventHandler) -> None: ...

    def fire_server_shot(self, kind: str, pos: np.ndarray, vel: np.ndarray, team: str | None) -> int: ...

    def set_shot_attribution(self, guid: int, attribution: ShotAttribution) -> None: ...

    def shot_attribution(self, guid: int) -> ShotAttribution | None: ...
