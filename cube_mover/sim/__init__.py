"""Oscillating cube simulation."""

from .oscillator import (
    SHEET_FIELDS,
    MotionConfig,
    MotionState,
    Oscillator,
    OscillatorPhase,
    apply_overrides,
)
from .transform import Transform

__all__ = [
    "SHEET_FIELDS",
    "MotionConfig",
    "MotionState",
    "Oscillator",
    "OscillatorPhase",
    "apply_overrides",
    "Transform",
]
