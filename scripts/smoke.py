# ruff: noqa: E402
from __future__ import annotations

import argparse
import json
import math
import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from grenadeflag import ArenaHost, GrenadeFlag
from grenadeflag.constants import GRENADE_FLAG_ABBREV, VAR_GRENADE_ACCURACY


def run_duel(seed: int, delay_s: float, accuracy: float | None) -> dict:
    """Blue launches at red, detonates after ``delay_s`` and is credited with the kill."""
    host = ArenaHost(rng=np.random.default_rng(seed))
    plugin = GrenadeFlag(host)
    plugin.init()
    if accuracy is not None:
        host.set_variable(VAR_GRENADE_ACCURACY, accuracy)

    host.join(0, "blue", pos=(0.0, 0.0, 0.0), yaw=0.0, flag=GRENADE_FLAG_ABBREV)
    host.join(1, "red", pos=(400.0, 0.0, 0.0), yaw=math.pi)

    side_shots = host.fire(0)
    host.advance(delay_s)
    blast = host.fire(0)

    outcome: dict = {
        "seed": seed,
        "side_shots": len(side_shots),
        "blast": None,
        "killer": None,
    }
    if blast:
        death = host.kill(1, killer_id=1, shot_guid=blast[0].guid)
        outcome["blast"] = [round(float(v), 3) for v in blast[0].pos]
        outcome["killer"] = death.killer_id
        outcome["killer_team"] = death.killer_team

    plugin.cleanup()
    return outcome


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--episodes", type=int, default=3)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--delay", type=float, default=1.0, help="Seconds between launch and detonation")
    parser.add_argument("--accuracy", type=float, default=None, help="Override the grenade accuracy tunable")
    parser.add_argument("--out", type=str, default=None, help="Write results as JSON to this path")
    args = parser.parse_args()

    results = [run_duel(args.seed + i, args.delay, args.accuracy) for i in range(args.episodes)]
    for r in results:
        print(json.dumps(r))

    if args.out:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(json.dumps(results, indent=2), encoding="utf-8")


if __name__ == "__main__":
    main()
