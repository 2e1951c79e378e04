# grenadeflag/server/routes/arena.py
"""Arena driving and inspection endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, HTTPException, Query

from grenadeflag.config import BallisticsConfig

from ..models import (
    AdvanceRequest,
    ClockResponse,
    DeathRequest,
    DeathResponse,
    FireResponse,
    GrenadeResponse,
    JoinRequest,
    PoseUpdate,
    ShotResponse,
)

if TYPE_CHECKING:
    from grenadeflag.plugin import GrenadeFlag
    from grenadeflag.sim.arena import ArenaHost
    from grenadeflag.sim.shot import ServerShot

logger = logging.getLogger("grenadeflag.server")

router = APIRouter(tags=["arena"])

# Module-level state set by init_arena_routes
_host: ArenaHost | None = None
_plugin: GrenadeFlag | None = None


def init_arena_routes(host: ArenaHost, plugin: GrenadeFlag) -> None:
    """Initialize routes with the arena and its loaded plugin."""
    global _host, _plugin
    _host = host
    _plugin = plugin


def _arena() -> tuple[ArenaHost, GrenadeFlag]:
    if _host is None or _plugin is None:
        raise HTTPException(503, "Arena not initialized")
    return _host, _plugin


def _require_player(host: ArenaHost, player_id: int) -> None:
    if host.player(player_id) is None:
        raise HTTPException(404, f"Player {player_id} not found")


def _shot_response(shot: ServerShot) -> ShotResponse:
    return ShotResponse(
        guid=shot.guid,
        kind=shot.kind,
        team=shot.team,
        pos=[float(v) for v in shot.pos],
        vel=[float(v) for v in shot.vel],
        owner=shot.attribution.owner if shot.attribution is not None else None,
    )


@router.post("/players", status_code=201)
def join_player(req: JoinRequest) -> dict[str, Any]:
    """Join a player. Joining an existing id replaces the player."""
    host, _ = _arena()
    p = host.join(req.player_id, req.team, pos=req.pos, yaw=req.yaw, callsign=req.callsign, flag=req.flag)
    return {"player_id": p.player_id, "team": p.team, "callsign": p.callsign}


@router.delete("/players/{player_id}")
def part_player(player_id: int) -> dict[str, str]:
    host, _ = _arena()
    _require_player(host, player_id)
    host.part(player_id)
    return {"status": "parted"}


@router.put("/players/{player_id}/pose")
def update_pose(player_id: int, update: PoseUpdate) -> dict[str, Any]:
    host, _ = _arena()
    p = host.move(player_id, pos=update.pos, vel=update.vel, yaw=update.yaw)
    if p is None:
        raise HTTPException(404, f"Player {player_id} not found")
    if update.drop_flag:
        host.give_flag(player_id, None)
    elif update.flag is not None:
        host.give_flag(player_id, update.flag)
    return {
        "player_id": p.player_id,
        "pos": [float(v) for v in p.pos],
        "vel": [float(v) for v in p.vel],
        "yaw": p.yaw,
        "flag": p.flag,
    }


@router.post("/players/{player_id}/fire", response_model=FireResponse)
def fire(player_id: int) -> FireResponse:
    """Pull the player's trigger."""
    host, plugin = _arena()
    _require_player(host, player_id)
    shots = host.fire(player_id)
    return FireResponse(
        player_id=player_id,
        shots=[_shot_response(s) for s in shots],
        armed=plugin.tracker.is_active(player_id),
    )


@router.get("/players/{player_id}/grenade", response_model=GrenadeResponse)
def get_grenade(player_id: int) -> GrenadeResponse:
    """Inspect a player's grenade slot without triggering anything."""
    host, plugin = _arena()
    record = plugin.tracker.record(player_id)
    if record is None:
        return GrenadeResponse(player_id=player_id, tracked=False, active=False)
    if not record.active:
        return GrenadeResponse(player_id=player_id, tracked=True, active=False)

    ballistics = BallisticsConfig.from_host(host)
    return GrenadeResponse(
        player_id=player_id,
        tracked=True,
        active=True,
        expired=plugin.tracker.is_expired(player_id, ballistics),
        origin=[float(v) for v in record.origin],
        velocity=[float(v) for v in record.velocity],
        launch_time=record.launch_time,
        position=[float(v) for v in record.position(host.current_time(), ballistics.shot_speed)],
    )


@router.post("/players/{player_id}/spawn")
def respawn_player(player_id: int) -> dict[str, Any]:
    """Bring a dead player back so they can shoot again."""
    host, _ = _arena()
    _require_player(host, player_id)
    p = host.respawn(player_id)
    return {"player_id": player_id, "alive": p.alive}


@router.post("/deaths", response_model=DeathResponse)
def report_death(req: DeathRequest) -> DeathResponse:
    """Report a death; the response carries the killer after attribution."""
    host, _ = _arena()
    _require_player(host, req.victim_id)
    event = host.kill(req.victim_id, req.killer_id, shot_guid=req.shot_guid)
    return DeathResponse(victim_id=event.player_id, killer_id=event.killer_id, killer_team=event.killer_team)


@router.post("/clock/advance", response_model=ClockResponse)
def advance_clock(req: AdvanceRequest) -> ClockResponse:
    host, _ = _arena()
    host.advance(req.dt)
    return ClockResponse(time_s=host.current_time())


@router.get("/shots", response_model=list[ShotResponse])
def list_shots() -> list[ShotResponse]:
    host, _ = _arena()
    return [_shot_response(s) for s in host.shots.values()]


@router.get("/events")
def list_events(limit: int = Query(100, ge=1, le=1000)) -> list[dict[str, Any]]:
    """Most recent arena log entries, oldest first."""
    host, _ = _arena()
    return list(host.log)[-limit:]
