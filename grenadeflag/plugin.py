from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

import numpy as np

from .config import DEFAULT_GRENADE, BallisticsConfig, GrenadeConfig
from .constants import (
    BLAST_SHOT_KIND,
    GRENADE_FLAG_ABBREV,
    GRENADE_FLAG_HELP,
    GRENADE_FLAG_NAME,
    PLUGIN_NAME,
    SIDE_SHOT_KIND,
)
from .events import EventKind, PlayerDieEvent, PlayerJoinEvent, PlayerPartEvent, ShotFiredEvent
from .host import FlagSpec
from .sim.launch import solve_launch_for
from .sim.shot import ShotAttribution
from .sim.tracker import GrenadeTracker, TriggerAction

if TYPE_CHECKING:
    from .events import Event
    from .host import Host
    from .sim.player import PlayerState

logger = logging.getLogger("grenadeflag")

GRENADE_FLAG = FlagSpec(abbrev=GRENADE_FLAG_ABBREV, name=GRENADE_FLAG_NAME, help=GRENADE_FLAG_HELP)


class GrenadeFlag:
    """
    Grenade flag plugin (+GN).

    First shot launches a grenade, second shot detonates it. The blast is tagged
    with the shooter so kills it causes are credited back to them.
    """

    name = PLUGIN_NAME

    def __init__(
        self,
        host: Host,
        tracker: GrenadeTracker | None = None,
        defaults: GrenadeConfig = DEFAULT_GRENADE,
    ):
        self.host = host
        self.tracker = tracker if tracker is not None else GrenadeTracker(host.current_time)
        self.defaults = defaults
        self._handlers: dict[EventKind, Callable[[Any], None]] = {
            EventKind.SHOT_FIRED: self._on_shot_fired,
            EventKind.PLAYER_JOIN: self._on_player_join,
            EventKind.PLAYER_PART: self._on_player_part,
            EventKind.PLAYER_DIE: self._on_player_die,
        }

    def init(self) -> None:
        self.host.register_custom_flag(GRENADE_FLAG)
        for name, default in self.defaults.as_variables().items():
            self.host.register_variable(name, default)
        for kind in self._handlers:
            self.host.register_event(kind, self.event)

    def cleanup(self) -> None:
        self.host.remove_handler(self.event)
        self.tracker.flush()

    def event(self, event: Event) -> None:
        handler = self._handlers.get(event.kind)
        if handler is not None:
            handler(event)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _on_player_join(self, event: PlayerJoinEvent) -> None:
        self.tracker.join(event.player_id)

    def _on_player_part(self, event: PlayerPartEvent) -> None:
        self.tracker.part(event.player_id)

    def _on_shot_fired(self, event: ShotFiredEvent) -> None:
        player = self.host.player(event.player_id)
        if player is None or not player.has_flag(GRENADE_FLAG_ABBREV):
            return

        ballistics = BallisticsConfig.from_host(self.host)
        decision = self.tracker.trigger(player.player_id, ballistics)
        if decision.action == TriggerAction.LAUNCH:
            self._launch(player, ballistics)
        elif decision.position is not None:
            self._detonate(player, decision.position)

    def _launch(self, player: PlayerState, ballistics: BallisticsConfig) -> list[int]:
        grenade = GrenadeConfig.from_host(self.host)
        perturbation = self.host.uniform(-grenade.accuracy, grenade.accuracy)
        solution = solve_launch_for(player, grenade, ballistics, perturbation)

        guids = [
            self.host.fire_server_shot(SIDE_SHOT_KIND, side_pos, solution.velocity, player.team)
            for side_pos in solution.side_positions
        ]
        self.tracker.launch(player.player_id, solution.center, solution.velocity)
        logger.debug(
            f"Player {player.player_id} launched grenade from {solution.center.tolist()} "
            f"with velocity {solution.velocity.tolist()}"
        )
        return guids

    def _detonate(self, player: PlayerState, pos: np.ndarray) -> int:
        guid = self.host.fire_server_shot(BLAST_SHOT_KIND, pos, np.zeros(3, dtype=np.float64), player.team)
        self.host.set_shot_attribution(guid, ShotAttribution.grenade(player.player_id))
        logger.debug(f"Player {player.player_id} detonated grenade at {pos.tolist()} (shot {guid})")
        return guid

    def _on_player_die(self, event: PlayerDieEvent) -> None:
        """Credit grenade kills to the owner; the tag stays on the shot so one blast credits every victim."""
        if event.shot_guid is None:
            return
        attribution = self.host.shot_attribution(event.shot_guid)
        if attribution is None or not attribution.is_grenade:
            return

        event.killer_id = attribution.owner
        event.killer_team = self.host.player_team(attribution.owner)
        logger.debug(f"Player {event.player_id} killed by grenade of player {attribution.owner}")
