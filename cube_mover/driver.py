"""Headless stand-in for the host engine's frame loop."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

import numpy as np

from .constants import FRAME_DT, LOAD_REMOTE
from .sheets import SheetLoader, SheetSource
from .sheets.transport import Transport
from .sim import MotionConfig, Oscillator, Transform
from .utils import section

logger = logging.getLogger(__name__)


def build_oscillator(
    cfg: Dict[str, Any],
    rng: Optional[np.random.Generator] = None,
    transport: Optional[Transport] = None,
) -> Oscillator:
    """Create an oscillator (and its sheet loader) from a config mapping.

    Recognized sections: ``cube`` (size, step_distance, max_offset,
    load_remote, axis, position) and ``sheet`` (document_id, sheet_id,
    endpoint, timeout_s).
    """
    cube_cfg = section(cfg, "cube")
    load_remote = bool(cube_cfg.get("load_remote", LOAD_REMOTE))
    loader = None
    if load_remote:
        loader = SheetLoader(SheetSource.from_dict(section(cfg, "sheet")), transport=transport)
    return Oscillator(
        transform=Transform(position=cube_cfg.get("position", [0.0, 0.0, 0.0])),
        defaults=MotionConfig.from_dict(cube_cfg),
        loader=loader,
        load_remote=load_remote,
        rng=rng,
        axis=cube_cfg.get("axis", [1.0, 0.0, 0.0]),
    )


class HeadlessHost:
    """Calls initialize() once and tick(dt) every frame, like an engine would."""

    def __init__(self, oscillator: Oscillator, dt: float = FRAME_DT) -> None:
        assert dt > 0.0, "dt must be > 0"
        self.oscillator = oscillator
        self.dt = float(dt)
        self.frame = 0
        self._initialized = False

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            self.oscillator.initialize()
            self._initialized = True

    def step(self) -> float:
        """Run one frame; returns the position along the motion axis."""
        self._ensure_initialized()
        self.oscillator.tick(self.dt)
        self.frame += 1
        osc = self.oscillator
        return float(np.dot(osc.transform.position, osc.axis))

    def run_until_moving(self, max_frames: int = 10_000, poll_sleep_s: float = 0.0) -> int:
        """Tick until configuration is resolved. Returns the frames spent."""
        self._ensure_initialized()
        spent = 0
        while not self.oscillator.is_moving:
            if spent >= max_frames:
                raise TimeoutError(f"Oscillator still initializing after {max_frames} frames")
            self.step()
            spent += 1
            if poll_sleep_s > 0.0 and not self.oscillator.is_moving:
                time.sleep(poll_sleep_s)
        logger.info("Oscillator moving after %d frame(s) with %s", spent, self.oscillator.config)
        return spent

    def run(self, frames: int) -> List[float]:
        """Run ``frames`` frames and return the per-frame axis positions."""
        return [self.step() for _ in range(int(frames))]
