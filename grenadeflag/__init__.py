from .config import BallisticsConfig, GrenadeConfig
from .plugin import GrenadeFlag
from .sim.arena import ArenaHost
from .sim.tracker import GrenadeTracker

__all__ = ["ArenaHost", "BallisticsConfig", "GrenadeConfig", "GrenadeFlag", "GrenadeTracker"]
