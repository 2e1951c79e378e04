# grenadeflag/server/models.py
"""Pydantic models for API requests/responses."""

from pydantic import BaseModel, Field


class JoinRequest(BaseModel):
    """A player joining the arena."""

    player_id: int = Field(ge=0)
    team: str
    callsign: str = ""
    pos: list[float] = Field(default_factory=lambda: [0.0, 0.0, 0.0], min_length=3, max_length=3)
    yaw: float = 0.0
    flag: str | None = None


class PoseUpdate(BaseModel):
    """Partial update of a player's pose or carried flag."""

    pos: list[float] | None = Field(default=None, min_length=3, max_length=3)
    vel: list[float] | None = Field(default=None, min_length=3, max_length=3)
    yaw: float | None = None
    flag: str | None = None
    drop_flag: bool = False


class ShotResponse(BaseModel):
    guid: int
    kind: str
    team: str | None
    pos: list[float]
    vel: list[float]
    owner: int | None = None


class FireResponse(BaseModel):
    """Server shots spawned by one trigger pull."""

    player_id: int
    shots: list[ShotResponse]
    armed: bool


class GrenadeResponse(BaseModel):
    player_id: int
    tracked: bool
    active: bool
    expired: bool = False
    origin: list[float] | None = None
    velocity: list[float] | None = None
    launch_time: float | None = None
    position: list[float] | None = None


class DeathRequest(BaseModel):
    victim_id: int
    killer_id: int | None = None
    shot_guid: int | None = None


class DeathResponse(BaseModel):
    victim_id: int
    killer_id: int | None
    killer_team: str | None


class AdvanceRequest(BaseModel):
    dt: float = Field(gt=0.0)


class ClockResponse(BaseModel):
    time_s: float


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    players: int
    armed: int
    uptime_s: float
