"""Oscillating cube driven by a host frame loop.

The oscillator resolves its motion parameters once (defaults, optionally
overridden by a remote sheet), then bounces back and forth along one axis:

- initialize() -> starts the optional remote fetch
- tick(dt)     -> delivers the fetch result while initializing, moves afterwards
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import numpy as np

from ..constants import (
    CUBE_MOVE_MAX,
    CUBE_MOVE_STEP,
    CUBE_SIZE,
    LOAD_REMOTE,
    PARAM_CUBE_MOVE_MAX,
    PARAM_CUBE_MOVE_STEP,
    PARAM_CUBE_SIZE,
)
from ..sheets import PendingFetch, SheetError, SheetLoader
from .transform import Transform

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MotionConfig:
    size: float = CUBE_SIZE
    step_distance: float = CUBE_MOVE_STEP
    max_offset: float = CUBE_MOVE_MAX

    def __post_init__(self) -> None:
        assert math.isfinite(self.size) and self.size > 0.0, "size must be > 0"
        assert math.isfinite(self.step_distance), "step_distance must be finite"
        assert math.isfinite(self.max_offset) and self.max_offset >= 0.0, "max_offset must be >= 0"

    @classmethod
    def from_dict(cls, cfg: Mapping[str, Any]) -> "MotionConfig":
        return cls(
            size=float(cfg.get("size", CUBE_SIZE)),
            step_distance=float(cfg.get("step_distance", CUBE_MOVE_STEP)),
            max_offset=float(cfg.get("max_offset", CUBE_MOVE_MAX)),
        )


# Remote parameter name -> MotionConfig field
SHEET_FIELDS: Dict[str, str] = {
    PARAM_CUBE_SIZE: "size",
    PARAM_CUBE_MOVE_STEP: "step_distance",
    PARAM_CUBE_MOVE_MAX: "max_offset",
}


# Lower bound per field: (minimum, inclusive)
_FIELD_BOUNDS: Dict[str, Tuple[float, bool]] = {
    "size": (0.0, False),
    "max_offset": (0.0, True),
}


def _invalid_reason(field_name: str, value: float) -> Optional[str]:
    if not math.isfinite(value):
        return "value must be finite"
    bound = _FIELD_BOUNDS.get(field_name)
    if bound is not None:
        lo, inclusive = bound
        if value < lo or (value == lo and not inclusive):
            return f"{field_name} must be {'>=' if inclusive else '>'} {lo}"
    return None


def apply_overrides(config: MotionConfig, sheet: Mapping[str, Any]) -> MotionConfig:
    """Return ``config`` with recognized sheet entries applied.

    Unknown names are logged and ignored. Values that are not numeric, or that
    would make the config invalid, are logged and skipped.
    """
    resolved = config
    for name, raw in sheet.items():
        field_name = SHEET_FIELDS.get(name)
        if field_name is None:
            logger.info("Oscillator does not support param %s", name)
            continue
        try:
            value = float(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring %s: %r is not a number", name, raw)
            continue
        reason = _invalid_reason(field_name, value)
        if reason is not None:
            logger.warning("Ignoring %s=%r: %s", name, raw, reason)
            continue
        resolved = replace(resolved, **{field_name: value})
    return resolved


@dataclass
class MotionState:
    """Offset from ``origin`` along the motion axis and current heading (+1/-1)."""

    origin: np.ndarray
    offset: float = 0.0
    direction: float = 1.0


class OscillatorPhase(enum.Enum):
    INITIALIZING = "initializing"
    MOVING = "moving"


class Oscillator:
    """Cube that bounces along ``axis`` between -max_offset and +max_offset.

    Args:
        transform: Host transform to drive (position and scale are written)
        defaults: Motion parameters used unless the remote sheet overrides them
        loader: Optional sheet loader; without one the defaults are used
        load_remote: Whether to consult ``loader`` at all
        rng: Random generator for the initial direction
        axis: Direction of motion in world space (normalized; must be non-zero)
    """

    def __init__(
        self,
        transform: Optional[Transform] = None,
        defaults: Optional[MotionConfig] = None,
        loader: Optional[SheetLoader] = None,
        load_remote: bool = LOAD_REMOTE,
        rng: Optional[np.random.Generator] = None,
        axis: Sequence[float] = (1.0, 0.0, 0.0),
    ) -> None:
        self.transform = transform or Transform()
        self.defaults = defaults or MotionConfig()
        self.loader = loader
        self.load_remote = bool(load_remote)
        self._rng = rng or np.random.default_rng()
        axis_v = np.asarray(axis, dtype=np.float64).reshape(3)
        norm = float(np.linalg.norm(axis_v))
        if not math.isfinite(norm) or norm <= 1e-12:
            raise ValueError(f"axis must be a non-zero finite vector, got {axis_v.tolist()}")
        self.axis = axis_v / norm

        self.config = self.defaults
        self.state: Optional[MotionState] = None
        self.phase = OscillatorPhase.INITIALIZING
        self._started = False
        self._pending: Optional[PendingFetch] = None

    @property
    def is_moving(self) -> bool:
        return self.phase is OscillatorPhase.MOVING

    def initialize(self) -> None:
        """Resolve configuration, fetching the remote sheet if enabled."""
        if self._started:
            raise RuntimeError("Oscillator.initialize() called twice")
        self._started = True

        if self.load_remote and self.loader is not None:
            self._pending = self.loader.fetch(
                on_loaded=self._on_sheet_loaded,
                on_failed=self._on_sheet_failed,
            )
            return
        # fall back to the configured defaults
        self.start_motion()

    def _on_sheet_loaded(self, sheet: Dict[str, str]) -> None:
        self.apply_config(sheet)
        self.start_motion()

    def _on_sheet_failed(self, err: SheetError) -> None:
        logger.warning("Sheet load failed (%s); using default configuration", err)
        self.start_motion()

    def apply_config(self, sheet: Mapping[str, Any]) -> MotionConfig:
        """Apply remote overrides on top of the current configuration."""
        if self.is_moving:
            raise RuntimeError("Configuration is frozen once motion has started")
        self.config = apply_overrides(self.config, sheet)
        return self.config

    def start_motion(self) -> None:
        """Scale the cube, record the origin and pick a random direction."""
        if self.is_moving:
            return
        self._pending = None
        self.transform.set_uniform_scale(self.config.size)
        direction = -1.0 if int(self._rng.integers(0, 2)) == 0 else 1.0
        self.state = MotionState(origin=self.transform.position.copy(), offset=0.0, direction=direction)
        self.phase = OscillatorPhase.MOVING

    def _advance(self, dt: float) -> None:
        s = self.state
        s.offset += s.direction * self.config.step_distance * dt

    def tick(self, dt: float) -> None:
        """Advance one host frame of ``dt`` seconds."""
        if not self.is_moving:
            if self._pending is not None:
                self._pending.poll()
            return

        s = self.state
        self.transform.position = s.origin + self.axis * s.offset

        self._advance(dt)
        if abs(s.offset) > self.config.max_offset:
            # reached the edge: turn around and step once so we don't stick there
            s.direction = -s.direction
            self._advance(dt)
