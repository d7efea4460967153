from __future__ import annotations

import argparse
import csv
import logging
import os

import numpy as np

from cube_mover.driver import HeadlessHost, build_oscillator
from cube_mover.utils import load_config_dict, section

DEFAULT_CONFIG = os.path.join(os.path.dirname(__file__), "..", "configs", "cube.yaml")


def run_headless(
    config_path: str,
    frames: int | None = None,
    dt: float | None = None,
    seed: int | None = None,
    no_remote: bool = False,
    csv_out: str | None = None,
    overrides: list[str] | None = None,
) -> list[float]:
    dotlist = list(overrides or [])
    if no_remote:
        dotlist.append("cube.load_remote=false")
    cfg = load_config_dict(config_path, dotlist)
    run_cfg = section(cfg, "run")

    frames = int(frames if frames is not None else run_cfg.get("frames", 600))
    dt = float(dt if dt is not None else run_cfg.get("dt", 1.0 / 60.0))
    seed = seed if seed is not None else run_cfg.get("seed")
    rng = np.random.default_rng(seed)

    osc = build_oscillator(cfg, rng=rng)
    host = HeadlessHost(osc, dt=dt)
    try:
        host.run_until_moving(poll_sleep_s=0.01)
        positions = host.run(frames)
    finally:
        if osc.loader is not None:
            osc.loader.close()

    if csv_out:
        os.makedirs(os.path.dirname(os.path.abspath(csv_out)), exist_ok=True)
        with open(csv_out, "w", newline="") as f:
            w = csv.writer(f)
            w.writerow(["frame", "t", "position"])
            for i, x in enumerate(positions):
                w.writerow([i, i * dt, x])
        print(f"[INFO] Positions saved to {csv_out}")

    c = osc.config
    print(
        f"[INFO] size={c.size} step={c.step_distance} max={c.max_offset} "
        f"frames={len(positions)} range=[{min(positions, default=0.0):.3f}, {max(positions, default=0.0):.3f}]"
    )
    return positions


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run the oscillating cube without a renderer")
    parser.add_argument("--config", type=str, default=DEFAULT_CONFIG)
    parser.add_argument("--frames", type=int, default=None)
    parser.add_argument("--dt", type=float, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--no-remote", action="store_true", help="Skip the sheet download")
    parser.add_argument("--csv-out", type=str, default=None)
    parser.add_argument("--log-level", type=str, default="INFO")
    parser.add_argument("overrides", nargs="*", help="Dotlist overrides, e.g. cube.size=2.0")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    run_headless(
        args.config,
        frames=args.frames,
        dt=args.dt,
        seed=args.seed,
        no_remote=args.no_remote,
        csv_out=args.csv_out,
        overrides=args.overrides,
    )
