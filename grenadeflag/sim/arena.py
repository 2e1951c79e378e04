from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

import numpy as np

from ..config import DEFAULT_BALLISTICS, BallisticsConfig
from ..constants import VAR_SHOT_RANGE, VAR_SHOT_SPEED
from ..events import EventKind, PlayerDieEvent, PlayerJoinEvent, PlayerPartEvent, ShotFiredEvent
from . import trajectory
from .player import PlayerState
from .shot import ServerShot

if TYPE_CHECKING:
    from ..events import Event
    from ..host import EventHandler, FlagSpec
    from .shot import ShotAttribution

logger = logging.getLogger("grenadeflag")

# Oldest log entries are dropped past this many.
LOG_MAX_ENTRIES = 10_000


def _vec3(values) -> np.ndarray:
    return np.array(values, dtype=np.float64).reshape(3)


class ArenaHost:
    """
    In-memory game server implementing the plugin host interface.

    Events are delivered synchronously, one at a time, in handler registration
    order. The clock only moves when ``advance`` is called, which keeps grenade
    flight times exact in tests and replays.
    """

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        ballistics: BallisticsConfig = DEFAULT_BALLISTICS,
        start_time: float = 0.0,
    ):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.time_s = float(start_time)
        self.players: dict[int, PlayerState] = {}
        self.shots: dict[int, ServerShot] = {}
        self.flags: dict[str, FlagSpec] = {}
        self.variables: dict[str, float | bool] = dict(ballistics.as_variables())
        self.log: deque[dict] = deque(maxlen=LOG_MAX_ENTRIES)
        self._handlers: dict[EventKind, list[EventHandler]] = {}
        self._next_guid = 1
        self._next_shot_id = 0

    # ------------------------------------------------------------------
    # Host interface
    # ------------------------------------------------------------------

    def player(self, player_id: int) -> PlayerState | None:
        return self.players.get(player_id)

    def player_team(self, player_id: int) -> str | None:
        p = self.players.get(player_id)
        return p.team if p is not None else None

    def current_time(self) -> float:
        return self.time_s

    def uniform(self, low: float, high: float) -> float:
        return float(self.rng.uniform(low, high))

    def get_float(self, name: str) -> float:
        return float(self.variables.get(name, 0.0))

    def get_bool(self, name: str) -> bool:
        return bool(self.variables.get(name, False))

    def set_variable(self, name: str, value: float | bool) -> None:
        self.variables[name] = value

    def register_variable(self, name: str, default: float | bool) -> None:
        # Values set before registration (e.g. from a config file) win.
        self.variables.setdefault(name, default)

    def register_custom_flag(self, flag: FlagSpec) -> None:
        self.flags[flag.abbrev] = flag

    def register_event(self, kind: EventKind, handler: EventHandler) -> None:
        self._handlers.setdefault(kind, []).append(handler)

    def remove_handler(self, handler: EventHandler) -> None:
        for kind, handlers in self._handlers.items():
            self._handlers[kind] = [h for h in handlers if h != handler]

    def handler_count(self, kind: EventKind) -> int:
        return len(self._handlers.get(kind, []))

    def fire_server_shot(self, kind: str, pos: np.ndarray, vel: np.ndarray, team: str | None) -> int:
        guid = self._next_guid
        self._next_guid += 1
        shot = ServerShot(guid=guid, kind=kind, pos=_vec3(pos), vel=_vec3(vel), team=team, fired_at=self.time_s)
        self.shots[guid] = shot
        self.log.append(
            {
                "type": "server_shot",
                "guid": guid,
                "kind": kind,
                "team": team,
                "pos": [float(v) for v in shot.pos],
                "vel": [float(v) for v in shot.vel],
                "time": self.time_s,
            }
        )
        return guid

    def set_shot_attribution(self, guid: int, attribution: ShotAttribution) -> None:
        shot = self.shots.get(guid)
        if shot is None:
            logger.debug(f"Attribution for unknown shot {guid} dropped")
            return
        shot.attribution = attribution

    def shot_attribution(self, guid: int) -> ShotAttribution | None:
        shot = self.shots.get(guid)
        return shot.attribution if shot is not None else None

    # ------------------------------------------------------------------
    # Driving the arena
    # ------------------------------------------------------------------

    def dispatch(self, event: Event) -> None:
        for handler in list(self._handlers.get(event.kind, [])):
            handler(event)

    def advance(self, dt: float) -> None:
        self.time_s += float(dt)
        self._expire_shots()

    def _expire_shots(self) -> None:
        # Every server shot, blasts included, lives for one ambient shot range.
        shot_speed = self.get_float(VAR_SHOT_SPEED)
        shot_range = self.get_float(VAR_SHOT_RANGE)
        spent = [
            guid
            for guid, shot in self.shots.items()
            if shot_speed <= 0.0
            or trajectory.elapsed_distance(self.time_s - shot.fired_at, shot_speed) >= shot_range
        ]
        for guid in spent:
            self.end_shot(guid)

    def join(
        self,
        player_id: int,
        team: str,
        pos=(0.0, 0.0, 0.0),
        yaw: float = 0.0,
        callsign: str = "",
        flag: str | None = None,
    ) -> PlayerState:
        p = PlayerState(
            player_id=player_id,
            team=team,
            callsign=callsign or f"player{player_id}",
            pos=_vec3(pos),
            yaw=float(yaw),
            flag=flag,
        )
        self.players[player_id] = p
        self.log.append({"type": "join", "player": player_id, "team": team, "time": self.time_s})
        logger.info(f"Player {player_id} ({p.callsign}) joined team {team}")
        self.dispatch(PlayerJoinEvent(player_id))
        return p

    def part(self, player_id: int) -> None:
        self.dispatch(PlayerPartEvent(player_id))
        if self.players.pop(player_id, None) is not None:
            self.log.append({"type": "part", "player": player_id, "time": self.time_s})
            logger.info(f"Player {player_id} parted")

    def move(self, player_id: int, pos=None, vel=None, yaw: float | None = None) -> PlayerState | None:
        p = self.players.get(player_id)
        if p is None:
            return None
        if pos is not None:
            p.pos = _vec3(pos)
        if vel is not None:
            p.vel = _vec3(vel)
        if yaw is not None:
            p.yaw = float(yaw)
        return p

    def give_flag(self, player_id: int, abbrev: str | None) -> None:
        p = self.players.get(player_id)
        if p is not None:
            p.flag = abbrev

    def fire(self, player_id: int) -> list[ServerShot]:
        """Pull a player's trigger and return the server shots it spawned.

        Dead players cannot shoot, so no event is dispatched for them.
        """
        p = self.players.get(player_id)
        if p is not None and not p.alive:
            return []
        self._next_shot_id += 1
        before = self._next_guid
        self.log.append({"type": "fire", "player": player_id, "time": self.time_s})
        self.dispatch(ShotFiredEvent(player_id, shot_id=self._next_shot_id))
        return [self.shots[g] for g in range(before, self._next_guid) if g in self.shots]

    def kill(self, victim_id: int, killer_id: int | None, shot_guid: int | None = None) -> PlayerDieEvent:
        """Report a death and return the event as finalized after plugins saw it."""
        killer_team = self.player_team(killer_id) if killer_id is not None else None
        event = PlayerDieEvent(
            player_id=victim_id,
            killer_id=killer_id,
            killer_team=killer_team,
            shot_guid=shot_guid,
        )
        self.dispatch(event)

        victim = self.players.get(victim_id)
        if victim is not None:
            victim.alive = False
        self.log.append(
            {
                "type": "kill",
                "target": victim_id,
                "shooter": event.killer_id,
                "team": event.killer_team,
                "shot": shot_guid,
                "time": self.time_s,
            }
        )
        return event

    def respawn(self, player_id: int, pos=None, yaw: float | None = None) -> PlayerState | None:
        p = self.move(player_id, pos=pos, vel=(0.0, 0.0, 0.0), yaw=yaw)
        if p is not None:
            p.alive = True
            self.log.append({"type": "spawn", "player": player_id, "time": self.time_s})
        return p

    def end_shot(self, guid: int) -> None:
        """Expire a server shot; its attribution goes with it."""
        self.shots.pop(guid, None)
