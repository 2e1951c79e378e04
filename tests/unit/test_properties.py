import numpy as np
from hypothesis import strategies as st
from hypothesis.stateful import RuleBasedStateMachine, invariant, rule

from grenadeflag.config import BallisticsConfig
from grenadeflag.constants import BLAST_SHOT_KIND, GRENADE_FLAG_ABBREV, SIDE_SHOT_KIND
from grenadeflag.plugin import GrenadeFlag
from grenadeflag.sim import trajectory
from grenadeflag.sim.arena import ArenaHost

player_ids = st.integers(min_value=0, max_value=3)


class GrenadeStateMachine(RuleBasedStateMachine):
    def __init__(self):
        super().__init__()
        self.host = ArenaHost(rng=np.random.default_rng(42))
        self.plugin = GrenadeFlag(self.host)
        self.plugin.init()

    @rule(
        pid=player_ids,
        x=st.floats(min_value=-100.0, max_value=100.0),
        z=st.floats(min_value=0.0, max_value=20.0),
        yaw=st.floats(min_value=-3.2, max_value=3.2),
    )
    def join(self, pid, x, z, yaw):
        self.host.join(pid, "blue" if pid % 2 == 0 else "red", pos=(x, 0.0, z), yaw=yaw, flag=GRENADE_FLAG_ABBREV)

    @rule(pid=player_ids)
    def part(self, pid):
        self.host.part(pid)
        assert pid not in self.plugin.tracker

    @rule(dt=st.floats(min_value=0.0, max_value=5.0))
    def advance(self, dt):
        self.host.advance(dt)

    @rule(pid=player_ids, vz=st.floats(min_value=-200.0, max_value=200.0))
    def jump(self, pid, vz):
        self.host.move(pid, vel=(0.0, 0.0, vz))

    @rule(pid=player_ids)
    def fire(self, pid):
        # Pre-state capture
        record = self.plugin.tracker.record(pid)
        was_armed = record is not None and record.active
        if was_armed:
            origin = record.origin.copy()
            velocity = record.velocity.copy()
            launch_time = record.launch_time
        ballistics = BallisticsConfig.from_host(self.host)
        now = self.host.current_time()

        shots = self.host.fire(pid)

        if self.host.player(pid) is None:
            assert shots == []
            return

        if was_armed and not trajectory.is_expired(
            origin, velocity, launch_time, now, ballistics.shot_speed, ballistics.shot_range
        ):
            # Detonation: one blast at the stored trajectory's projection.
            assert [s.kind for s in shots] == [BLAST_SHOT_KIND]
            expected = trajectory.position(origin, velocity, now - launch_time, ballistics.shot_speed)
            np.testing.assert_allclose(shots[0].pos, expected)
            assert shots[0].attribution is not None
            assert shots[0].attribution.owner == pid
            assert not self.plugin.tracker.is_active(pid)
        else:
            assert [s.kind for s in shots] == [SIDE_SHOT_KIND, SIDE_SHOT_KIND]
            assert self.plugin.tracker.is_active(pid)

    @invariant()
    def at_most_one_grenade_per_player(self):
        armed = self.plugin.tracker.armed_players()
        assert len(armed) == len(set(armed))
        for pid in armed:
            assert pid in self.plugin.tracker

    @invariant()
    def no_records_for_parted_players(self):
        for pid in range(4):
            if pid in self.plugin.tracker:
                assert self.host.player(pid) is not None


TestGrenadeLifecycle = GrenadeStateMachine.TestCase
