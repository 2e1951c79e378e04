import numpy as np
import pytest

from grenadeflag.config import BallisticsConfig
from grenadeflag.constants import GRENADE_FLAG_ABBREV, VAR_GRENADE_ACCURACY
from grenadeflag.plugin import GrenadeFlag
from grenadeflag.sim.arena import ArenaHost


@pytest.fixture
def ballistics():
    return BallisticsConfig()


@pytest.fixture
def arena():
    """Arena with the grenade plugin loaded and perfect accuracy."""
    host = ArenaHost(rng=np.random.default_rng(0))
    plugin = GrenadeFlag(host)
    plugin.init()
    host.set_variable(VAR_GRENADE_ACCURACY, 0.0)
    return host, plugin


@pytest.fixture
def make_grenadier(arena):
    host, _ = arena

    def _make(pid: int, team: str = "blue", pos=(0.0, 0.0, 0.0), yaw: float = 0.0):
        return host.join(pid, team, pos=pos, yaw=yaw, flag=GRENADE_FLAG_ABBREV)

    return _make
